"""Tests for the transaction store over an in-memory SQLite database."""

import pytest

from errors import PersistenceError, ValidationError

FIELDS = ("date", "description", "category", "amount", "type")


def _create(store, **overrides):
    values = dict(
        date="2024-01-05",
        description="Infaq Jumat Minggu 1",
        category="Infaq Jumat",
        amount=1250000,
        type="income",
    )
    values.update(overrides)
    return store.create(**values)


def test_create_returns_stored_record_with_id_and_created_at(store) -> None:
    txn = _create(store)

    assert isinstance(txn["id"], int)
    assert txn["created_at"]
    assert txn["amount"] == 1250000.0
    assert txn["type"] == "income"


def test_created_ids_are_unique_and_increasing(store) -> None:
    ids = [_create(store, description=f"Infaq {i}")["id"] for i in range(5)]

    assert ids == sorted(ids)
    assert len(set(ids)) == 5


def test_list_contains_created_record(store) -> None:
    txn = _create(store, date="2024-02-10", description="Listrik", category="Operasional",
                  amount=250000, type="expense")

    listed = [t for t in store.list() if t["id"] == txn["id"]]

    assert len(listed) == 1
    assert {f: listed[0][f] for f in FIELDS} == {
        "date": "2024-02-10",
        "description": "Listrik",
        "category": "Operasional",
        "amount": 250000.0,
        "type": "expense",
    }


def test_list_orders_by_date_then_id_descending(store) -> None:
    first = _create(store, date="2024-01-05")
    second = _create(store, date="2024-01-05")
    newest = _create(store, date="2024-02-01")
    oldest = _create(store, date="2023-12-31")

    ids = [t["id"] for t in store.list()]

    assert ids == [newest["id"], second["id"], first["id"], oldest["id"]]


def test_create_with_missing_field_raises_validation_error(store) -> None:
    with pytest.raises(ValidationError):
        _create(store, amount=None)
    with pytest.raises(ValidationError):
        _create(store, description="  ")

    assert store.list() == []


def test_unknown_type_is_rejected_by_the_table(store) -> None:
    with pytest.raises(PersistenceError):
        _create(store, type="transfer")

    assert store.count() == 0
    # the session is usable again after the rollback
    assert _create(store)["type"] == "income"


def test_update_replaces_fields_and_keeps_id_and_created_at(store) -> None:
    txn = _create(store)

    updated = store.update(
        txn["id"],
        date="2024-01-06",
        description="Infaq Koreksi",
        category="Lain-lain",
        amount=900000,
        type="expense",
    )

    assert updated["id"] == txn["id"]
    assert updated["created_at"] == txn["created_at"]
    assert store.list() == [updated]
    assert updated["description"] == "Infaq Koreksi"
    assert updated["type"] == "expense"
    assert updated["amount"] == 900000.0


def test_update_unknown_id_is_a_silent_noop(store) -> None:
    txn = _create(store)

    result = store.update(txn["id"] + 100, date="2024-01-01", description="x",
                          category="y", amount=1, type="income")

    assert result is None
    assert store.list() == [txn]


def test_delete_removes_record_and_is_idempotent(store) -> None:
    keep = _create(store)
    gone = _create(store)

    store.delete(gone["id"])
    store.delete(gone["id"])

    assert [t["id"] for t in store.list()] == [keep["id"]]
    assert store.get(gone["id"]) is None


def test_deleted_ids_are_never_reused(store) -> None:
    first = _create(store)
    second = _create(store)
    store.delete(second["id"])

    third = _create(store)

    assert third["id"] > second["id"] > first["id"]
