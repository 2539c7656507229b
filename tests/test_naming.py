import pytest

from crudsql.naming import resolve_id_field, schema_ident, table_name
from crudsql.types import FieldDescriptor


@pytest.mark.parametrize(
    "type_name,expected",
    [
        ("UserAccount", "user_account"),
        ("User", "user"),
        ("HTTPRequest", "http_request"),
        ("Order2Item", "order2_item"),
        ("already_snake", "already_snake"),
        ("Category", "category"),  # no pluralization
    ],
)
def test_table_name(type_name, expected):
    assert table_name(type_name) == expected


def test_schema_ident():
    assert schema_ident("UserAccount") == "USER_ACCOUNT_SCHEMA"


def test_first_field_when_nothing_annotated():
    fields = [FieldDescriptor("uuid", "str"), FieldDescriptor("name", "str")]
    assert resolve_id_field(fields).name == "uuid"


def test_annotated_field_wins():
    fields = [FieldDescriptor("name", "str"), FieldDescriptor("pk", "int", is_id_candidate=True)]
    assert resolve_id_field(fields).name == "pk"


def test_last_annotated_field_wins():
    fields = [
        FieldDescriptor("a", "int", is_id_candidate=True),
        FieldDescriptor("b", "int"),
        FieldDescriptor("c", "int", is_id_candidate=True),
    ]
    assert resolve_id_field(fields).name == "c"


def test_single_field_record():
    fields = [FieldDescriptor("only", "int")]
    assert resolve_id_field(fields).name == "only"
