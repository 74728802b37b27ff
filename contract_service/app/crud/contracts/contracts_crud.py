from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.core.exceptions import ConstraintViolation
from shared.utils.app_status_code import AppStatusCode
from ...models.contacts.contacts import Contact
from ...models.contracts.contract_type import ContractType
from ...models.contracts.contracts import Contract
from ...models.locale.currency import Currency
from ...schemas.contracts.contracts_schemas import ContractCreate, ContractUpdate


# enforced references; treasury_approver_id is deliberately absent
REFERENCE_TARGETS = {
    "contract_type_id": ContractType,
    "vendor_id": Contact,
    "contracted_party_id": Contact,
    "currency_id": Currency,
    "cloned_from_contract_id": Contract,
}

# access paths backed by an index; everything else is a full scan
INDEXED_COLUMNS = {
    "vendor_id": Contract.vendor_id,
    "contracted_party_id": Contract.contracted_party_id,
    "currency_id": Contract.currency_id,
    "contract_type_id": Contract.contract_type_id,
}


def get_by_id(db: Session, contract_id: int) -> Optional[Contract]:
    return db.query(Contract).filter(Contract.id == contract_id).first()


def get_by_entity_id(db: Session, entity_id: UUID) -> Optional[Contract]:
    return db.query(Contract).filter(Contract.entity_id == entity_id).first()


def check_references(db: Session, values: dict, contract_id: Optional[int] = None):
    for field, model in REFERENCE_TARGETS.items():
        ref_id = values.get(field)
        if ref_id is None:
            continue
        if field == "cloned_from_contract_id" and contract_id is not None and ref_id == contract_id:
            raise ConstraintViolation(
                f"Contract {contract_id} cannot be cloned from itself")
        if db.get(model, ref_id) is None:
            raise ConstraintViolation(
                f"{field}={ref_id} does not reference an existing {model.__name__}")


def check_entity_id_free(db: Session, entity_id: Optional[UUID], contract_id: Optional[int] = None):
    if entity_id is None:
        return
    existing = get_by_entity_id(db, entity_id)
    if existing and existing.id != contract_id:
        raise ConstraintViolation(
            f"entity_id {entity_id} is already used by contract {existing.id}",
            status_code=AppStatusCode.DUPLICATE_ADD_ERROR)


def create(db: Session, payload: ContractCreate) -> Contract:
    values = payload.model_dump()

    if payload.id is not None and get_by_id(db, payload.id):
        raise ConstraintViolation(
            f"Contract id {payload.id} already exists",
            status_code=AppStatusCode.DUPLICATE_ADD_ERROR)

    check_entity_id_free(db, payload.entity_id)
    check_references(db, values, contract_id=payload.id)

    if values["id"] is None:
        values.pop("id")
    db_contract = Contract(**values)
    db.add(db_contract)
    db.flush()
    db.refresh(db_contract)
    return db_contract


def update(db: Session, contract: Contract, payload: ContractUpdate) -> Contract:
    changes = payload.model_dump(exclude_unset=True)

    if "entity_id" in changes:
        check_entity_id_free(db, changes["entity_id"], contract_id=contract.id)
    check_references(db, changes, contract_id=contract.id)

    for k, v in changes.items():
        setattr(contract, k, v)
    db.flush()
    db.refresh(contract)
    return contract


def archive(db: Session, contract: Contract, archived_on: Optional[date] = None) -> Contract:
    contract.is_archived = True
    contract.archived_date = archived_on or date.today()
    db.flush()
    db.refresh(contract)
    return contract


def delete(db: Session, contract_id: int) -> int:
    return (
        db.query(Contract)
        .filter(Contract.id == contract_id)
        .delete(synchronize_session=False)
    )


# ----------------------------------------------------
# Queries
# ----------------------------------------------------
def query_by_column(db: Session, column: str, value: int):
    return (
        db.query(Contract)
        .filter(INDEXED_COLUMNS[column] == value)
        .order_by(Contract.id.asc())
    )


def query_clones_of(db: Session, contract_id: int):
    return db.query(Contract).filter(Contract.cloned_from_contract_id == contract_id)


def detach_clones(db: Session, contract_id: int) -> int:
    return (
        query_clones_of(db, contract_id)
        .update({Contract.cloned_from_contract_id: None}, synchronize_session=False)
    )


def not_archived_filter():
    return (Contract.is_archived.is_(None)) | (Contract.is_archived == False)


def query_active(db: Session, limit: int = 1000):
    # full scan: no index on isarchived
    return (
        db.query(Contract)
        .filter(not_archived_filter())
        .order_by(Contract.id.desc())
        .limit(limit)
    )


def query_search(
        db: Session,
        description: Optional[str] = None,
        status: Optional[str] = None,
        vendor_id: Optional[int] = None,
        contract_type_id: Optional[int] = None,
        limit: int = 500):
    filters = [not_archived_filter()]

    if description:
        filters.append(Contract.description.like(f"%{description}%"))

    if status:
        filters.append(Contract.status == status)

    if vendor_id is not None:
        filters.append(Contract.vendor_id == vendor_id)

    if contract_type_id is not None:
        filters.append(Contract.contract_type_id == contract_type_id)

    return (
        db.query(Contract)
        .filter(*filters)
        .order_by(Contract.id.desc())
        .limit(limit)
    )
