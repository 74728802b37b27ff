import pytest

from shared.core.exceptions import ConstraintViolation, NotFound
from shared.utils.app_status_code import AppStatusCode
from contract_service.app.crud.contracts import contract_children_crud
from contract_service.app.enum.contracts_enum import ContractChildKind


def test_link_and_traverse(store):
    head = store.create({"description": "head lease"})
    sub_a = store.create({"description": "sub A"})
    sub_b = store.create({"description": "sub B"})

    mapping = store.link_subcontract(head.id, sub_a.id)
    store.link_subcontract(head.id, sub_b.id)

    assert mapping.parentcontract_id == head.id
    assert mapping.contract_id == sub_a.id
    assert [c.id for c in store.subcontracts_of(head.id)] == [sub_a.id, sub_b.id]
    assert store.parent_of(sub_a.id) == head
    assert store.parent_of(head.id) is None


def test_mapping_rows_show_up_in_both_directions(store):
    head = store.create({})
    sub = store.create({})
    store.link_subcontract(head.id, sub.id)

    as_parent = store.children(head.id, ContractChildKind.parent_subcontract_mappings).all()
    as_sub = store.children(sub.id, ContractChildKind.subcontract_mappings).all()

    assert [m.contract_id for m in as_parent] == [sub.id]
    assert [m.parentcontract_id for m in as_sub] == [head.id]


def test_a_contract_has_at_most_one_parent(store):
    first = store.create({})
    second = store.create({})
    sub = store.create({})
    store.link_subcontract(first.id, sub.id)

    with pytest.raises(ConstraintViolation):
        store.link_subcontract(second.id, sub.id)

    assert store.parent_of(sub.id) == first


def test_reparent_after_unlink(store):
    first = store.create({})
    second = store.create({})
    sub = store.create({})
    store.link_subcontract(first.id, sub.id)

    assert store.unlink_subcontract(sub.id) is True
    store.link_subcontract(second.id, sub.id)

    assert store.parent_of(sub.id) == second
    assert store.subcontracts_of(first.id).all() == []
    assert store.unlink_subcontract(first.id) is False


def test_self_and_cyclic_links_are_refused(store):
    top = store.create({})
    middle = store.create({})
    bottom = store.create({})
    store.link_subcontract(top.id, middle.id)
    store.link_subcontract(middle.id, bottom.id)

    with pytest.raises(ConstraintViolation):
        store.link_subcontract(top.id, top.id)
    with pytest.raises(ConstraintViolation):
        store.link_subcontract(bottom.id, top.id)


def test_linking_missing_contracts(store):
    real = store.create({})

    with pytest.raises(NotFound):
        store.link_subcontract(real.id, 999)
    with pytest.raises(NotFound):
        store.subcontracts_of(999)
    with pytest.raises(NotFound):
        store.parent_of(999)


def test_restrict_delete_refuses_a_parent_with_subcontracts(store):
    head = store.create({})
    sub = store.create({})
    store.link_subcontract(head.id, sub.id)

    with pytest.raises(ConstraintViolation):
        store.delete(head.id)
    with pytest.raises(ConstraintViolation):
        store.delete(sub.id)


def test_unique_index_keeps_one_parent_when_a_link_races_past_the_check(store, monkeypatch):
    first = store.create({})
    second = store.create({})
    sub = store.create({})
    store.link_subcontract(first.id, sub.id)
    # the other writer checked before this link committed
    monkeypatch.setattr(contract_children_crud, "get_parent_mapping", lambda *args, **kwargs: None)

    with pytest.raises(ConstraintViolation) as exc:
        store.link_subcontract(second.id, sub.id)

    assert exc.value.status_code == AppStatusCode.DUPLICATE_ADD_ERROR
    monkeypatch.undo()
    assert store.parent_of(sub.id) == first
    assert store.subcontracts_of(second.id).all() == []
