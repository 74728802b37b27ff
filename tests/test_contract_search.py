from datetime import date

import pytest

from shared.core.exceptions import NotFound


def test_archive_is_a_soft_delete(store):
    contract = store.create({"description": "to archive"})

    archived = store.archive(contract.id, archived_on=date(2025, 3, 31))

    assert archived.is_archived is True
    assert archived.archived_date == date(2025, 3, 31)
    assert store.get(contract.id).is_archived is True


def test_archive_defaults_to_today(store):
    contract = store.create({})

    assert store.archive(contract.id).archived_date == date.today()


def test_archive_missing_contract(store):
    with pytest.raises(NotFound):
        store.archive(5)


def test_list_active_skips_archived_newest_first(store):
    old = store.create({"description": "old", "is_archived": False})
    gone = store.create({"description": "gone"})
    new = store.create({"description": "new"})
    store.archive(gone.id)

    assert [c.id for c in store.list_active()] == [new.id, old.id]
    assert [c.id for c in store.list_active(limit=1)] == [new.id]


def test_search_combines_filters(store, refs):
    store.create({"description": "Collins St office", "status": "Active", "vendor_id": refs["vendor"]})
    store.create({"description": "Collins St carpark", "status": "Expired", "vendor_id": refs["vendor"]})
    store.create({"description": "Bourke St retail", "status": "Active",
                  "vendor_id": refs["other_vendor"], "contract_type_id": refs["equipment"]})
    archived = store.create({"description": "Collins St storage", "status": "Active"})
    store.archive(archived.id)

    assert [c.description for c in store.search(description="Collins")] == \
        ["Collins St carpark", "Collins St office"]
    assert [c.description for c in store.search(description="Collins", status="Active")] == \
        ["Collins St office"]
    assert [c.description for c in store.search(vendor_id=refs["other_vendor"])] == ["Bourke St retail"]
    assert [c.description for c in store.search(contract_type_id=refs["equipment"])] == ["Bourke St retail"]
    assert len(store.search().all()) == 3
