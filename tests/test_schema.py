from dataclasses import dataclass, field

import pytest

from crudsql.schema import crud_model, register_model, registered, schema_for


@crud_model(database="Postgres", external_ids="true")
@dataclass
class Invoice:
    number: str = field(metadata={"id": True})
    customer_id: int = 0
    total_cents: int = 0


@crud_model
@dataclass
class AuditEntry:
    id: int
    message: str


def test_decorated_models_are_registered():
    assert Invoice in registered()
    assert AuditEntry in registered()


def test_schema_for_type_and_instance():
    s = schema_for(Invoice)
    assert schema_for(Invoice(number="INV-1")) is s
    assert s.table_name == "invoice"
    assert s.id_column == "number"
    assert s.metadata.insert_sql.startswith('INSERT INTO "invoice" ("number", "customer_id", "total_cents")')


def test_binding_plan_from_registry():
    inv = Invoice(number="INV-9", customer_id=3, total_cents=1250)
    assert schema_for(inv).binding.insert_values(inv) == ("INV-9", 3, 1250)
    assert schema_for(inv).binding.update_values(inv) == (3, 1250, "INV-9")


def test_default_registration_uses_sqlite_and_database_ids():
    s = schema_for(AuditEntry)
    assert s.metadata.dialect == "Sqlite"
    assert s.binding.insert_order == ("message",)


def test_registration_is_stable():
    first = schema_for(Invoice)
    assert register_model(Invoice, database="MySql") is first


def test_unregistered_type():
    @dataclass
    class Loose:
        id: int

    with pytest.raises(KeyError, match="not a registered crud model"):
        schema_for(Loose)


def test_schema_to_dict():
    d = schema_for(AuditEntry).to_dict()
    assert d["type_name"] == "AuditEntry"
    assert d["binding"]["update_by_id"] == ["message", "id"]
    assert len(d["fingerprint"]) == 64
