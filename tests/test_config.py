import json
from pathlib import Path

import pytest

from crudsql.config import ModelConfig, load_models_config
from crudsql.errors import CrudSqlException, ExitCode
from crudsql.types import DatabaseKind

EXAMPLE = Path(__file__).resolve().parent.parent / "examples" / "models.yaml"


def test_load_example_models():
    cfg = load_models_config(str(EXAMPLE))
    names = [m.name for m in cfg.models]
    assert names == ["UserAccount", "ApiKey"]
    user, api_key = cfg.descriptors()
    assert user.id_field.name == "id"
    assert user.dialect is DatabaseKind.SQLITE
    assert api_key.dialect is DatabaseKind.MYSQL
    assert api_key.external_id is True


def test_json_models_file(tmp_path):
    p = tmp_path / "models.json"
    p.write_text(
        json.dumps({"models": [{"name": "Tag", "fields": [{"name": "slug", "type": "str"}]}]}),
        encoding="utf-8",
    )
    (desc,) = load_models_config(str(p)).descriptors()
    assert desc.table_name == "tag"
    assert desc.id_field.name == "slug"


def test_model_config_from_dict_preserves_field_order():
    m = ModelConfig.from_dict(
        {"name": "Row", "fields": [{"name": "b", "type": "int"}, {"name": "a", "type": "int", "id": True}]}
    )
    assert [f.name for f in m.fields] == ["b", "a"]
    assert m.fields[1].is_id_candidate is True


def test_missing_file():
    with pytest.raises(CrudSqlException) as exc:
        load_models_config("does/not/exist.yaml")
    assert exc.value.problem.code == "CRUDSQL_CONFIG_NOT_FOUND"
    assert exc.value.exit_code == ExitCode.CONFIG_INVALID


def test_top_level_must_be_mapping(tmp_path):
    p = tmp_path / "models.yaml"
    p.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(CrudSqlException) as exc:
        load_models_config(str(p))
    assert exc.value.problem.code == "CRUDSQL_CONFIG_TOPLEVEL_NOT_OBJECT"


def test_models_must_be_list(tmp_path):
    p = tmp_path / "models.yaml"
    p.write_text("models: UserAccount\n", encoding="utf-8")
    with pytest.raises(CrudSqlException) as exc:
        load_models_config(str(p))
    assert exc.value.problem.code == "CRUDSQL_CONFIG_INVALID"


def test_parse_error(tmp_path):
    p = tmp_path / "models.yaml"
    p.write_text("models: [unclosed\n", encoding="utf-8")
    with pytest.raises(CrudSqlException) as exc:
        load_models_config(str(p))
    assert exc.value.problem.code == "CRUDSQL_CONFIG_PARSE_ERROR"


def test_empty_model_is_model_error(tmp_path):
    p = tmp_path / "models.yaml"
    p.write_text("models:\n  - name: Empty\n    fields: []\n", encoding="utf-8")
    cfg = load_models_config(str(p))
    with pytest.raises(CrudSqlException) as exc:
        cfg.descriptors()
    assert exc.value.problem.code == "CRUDSQL_EMPTY_FIELDS"


@pytest.mark.parametrize("type_value", ["null", "[1, 2]", "{a: 1}", "7"])
def test_non_string_field_type_is_model_error(tmp_path, type_value):
    p = tmp_path / "models.yaml"
    p.write_text(
        f"models:\n  - name: Thing\n    fields:\n      - {{name: id, type: int}}\n      - {{name: x, type: {type_value}}}\n",
        encoding="utf-8",
    )
    with pytest.raises(CrudSqlException) as exc:
        load_models_config(str(p)).descriptors()
    assert exc.value.problem.code == "CRUDSQL_INVALID_FIELD"


@pytest.mark.parametrize("id_value", ['"false"', '"true"', "1", "yes_please"])
def test_non_boolean_id_flag_is_model_error(tmp_path, id_value):
    p = tmp_path / "models.yaml"
    p.write_text(
        f"models:\n  - name: Thing\n    fields:\n      - {{name: id, type: int}}\n      - {{name: x, type: str, id: {id_value}}}\n",
        encoding="utf-8",
    )
    with pytest.raises(CrudSqlException) as exc:
        load_models_config(str(p)).descriptors()
    assert exc.value.problem.code == "CRUDSQL_INVALID_FIELD"


def test_boolean_id_flags_resolve_identity(tmp_path):
    p = tmp_path / "models.yaml"
    p.write_text(
        "models:\n  - name: Thing\n    fields:\n      - {name: id, type: int}\n      - {name: x, type: str, id: false}\n",
        encoding="utf-8",
    )
    (desc,) = load_models_config(str(p)).descriptors()
    assert desc.id_field.name == "id"


def test_non_utf8_file_is_parse_error(tmp_path):
    p = tmp_path / "models.yaml"
    p.write_bytes(b"models: \xff\xfe\n")
    with pytest.raises(CrudSqlException) as exc:
        load_models_config(str(p))
    assert exc.value.problem.code == "CRUDSQL_CONFIG_PARSE_ERROR"
    assert exc.value.exit_code == ExitCode.CONFIG_INVALID


def test_directory_path_is_parse_error(tmp_path):
    with pytest.raises(CrudSqlException) as exc:
        load_models_config(str(tmp_path))
    assert exc.value.problem.code == "CRUDSQL_CONFIG_PARSE_ERROR"
