import pytest

from crudsql.model import build_model_descriptor
from crudsql.types import FieldDescriptor


def user_account_fields():
    return [
        FieldDescriptor("id", "int", is_id_candidate=True),
        FieldDescriptor("email", "str"),
        FieldDescriptor("active", "bool"),
    ]


@pytest.fixture
def user_account():
    return build_model_descriptor("UserAccount", user_account_fields())
