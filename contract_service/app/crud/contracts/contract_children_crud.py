from functools import lru_cache
from typing import Optional

from pydantic import TypeAdapter, ValidationError
from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.core.exceptions import ConstraintViolation, InvalidArgument
from shared.core.types import FixedDecimal, check_fixed_precision
from ...enum.contracts_enum import ContractChildKind
from ...models.contacts.contacts import Contact
from ...models.contracts.clauses import BreakClause, Clause
from ...models.contracts.costs import ExitCost, Incentive, InitialCost, MakeGoodCost
from ...models.contracts.guarantees import Guarantee
from ...models.contracts.history import SynchronisationEvent, VendorHistory
from ...models.contracts.reviews import AgreedValueReview, RateReview
from ...models.contracts.schedules import AssetSchedule, ContractTerm
from ...models.contracts.subcontract_mapping import SubcontractMapping
from ...models.invoices.invoices import Invoice, InvoiceTemplate
from ...models.lease_accounting.lease_accounting import LeaseAccountingReview, ManualOverrideHistory

# kind -> (model, column pointing back at the contract)
CHILD_TABLES = {
    ContractChildKind.asset_schedules: (AssetSchedule, AssetSchedule.contract_id),
    ContractChildKind.break_clauses: (BreakClause, BreakClause.contract_id),
    ContractChildKind.clauses: (Clause, Clause.contract_id),
    ContractChildKind.agreed_value_reviews: (AgreedValueReview, AgreedValueReview.contract_id),
    ContractChildKind.guarantees: (Guarantee, Guarantee.contract_id),
    ContractChildKind.contract_terms: (ContractTerm, ContractTerm.contract_id),
    ContractChildKind.exit_costs: (ExitCost, ExitCost.contract_id),
    ContractChildKind.incentives: (Incentive, Incentive.contract_id),
    ContractChildKind.initial_costs: (InitialCost, InitialCost.contract_id),
    ContractChildKind.make_good_costs: (MakeGoodCost, MakeGoodCost.contract_id),
    ContractChildKind.rate_reviews: (RateReview, RateReview.contract_id),
    ContractChildKind.synchronisation_events: (SynchronisationEvent, SynchronisationEvent.contract_id),
    ContractChildKind.vendor_histories: (VendorHistory, VendorHistory.contract_id),
    ContractChildKind.invoices: (Invoice, Invoice.contract_id),
    ContractChildKind.invoice_templates: (InvoiceTemplate, InvoiceTemplate.contract_id),
    ContractChildKind.manual_override_histories: (ManualOverrideHistory, ManualOverrideHistory.contract_id),
    ContractChildKind.lease_accounting_reviews: (LeaseAccountingReview, LeaseAccountingReview.contract_id),
    ContractChildKind.subcontract_mappings: (SubcontractMapping, SubcontractMapping.contract_id),
    ContractChildKind.parent_subcontract_mappings: (SubcontractMapping, SubcontractMapping.parentcontract_id),
}

MAPPING_KINDS = {
    ContractChildKind.subcontract_mappings,
    ContractChildKind.parent_subcontract_mappings,
}


def resolve_kind(kind) -> ContractChildKind:
    try:
        return ContractChildKind(kind)
    except ValueError:
        raise InvalidArgument(f"Unknown child kind: {kind!r}") from None


def query_children(db: Session, contract_id: int, kind: ContractChildKind):
    model, fk_column = CHILD_TABLES[kind]
    return (
        db.query(model)
        .filter(fk_column == contract_id)
        .order_by(model.id.asc())
    )


def count_children(db: Session, contract_id: int) -> dict:
    """Number of rows per kind still pointing at the contract; empty kinds left out."""
    counts = {}
    for kind, (model, fk_column) in CHILD_TABLES.items():
        total = (
            db.query(func.count(model.id))
            .filter(fk_column == contract_id)
            .scalar()
        )
        if total:
            counts[kind] = total
    return counts


def delete_children(db: Session, contract_id: int) -> int:
    removed = 0
    for kind, (model, fk_column) in CHILD_TABLES.items():
        removed += (
            db.query(model)
            .filter(fk_column == contract_id)
            .delete(synchronize_session=False)
        )
    return removed


def get_child(db: Session, kind: ContractChildKind, child_id: int):
    model, _ = CHILD_TABLES[kind]
    return db.get(model, child_id)


@lru_cache(maxsize=None)
def _adapter_for(python_type) -> TypeAdapter:
    return TypeAdapter(python_type)


def coerce_column_value(name: str, column, value):
    """Validate ``value`` against the column's Python type (ISO date strings are accepted)."""
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    try:
        return _adapter_for(python_type).validate_python(value)
    except ValidationError as exc:
        reason = exc.errors()[0]["msg"]
        raise InvalidArgument(f"Field '{name}': {reason}") from None


def add_child(db: Session, contract_id: int, kind: ContractChildKind, fields: dict):
    if kind in MAPPING_KINDS:
        raise InvalidArgument(
            "Sub-contract mappings are maintained with link_subcontract")

    model, _ = CHILD_TABLES[kind]
    attributes = {attr.key: attr.columns[0]
                  for attr in model.__mapper__.column_attrs}

    values = {}
    for name, value in fields.items():
        if name in ("id", "contract_id") or name not in attributes:
            raise InvalidArgument(
                f"{model.__name__} has no writable field '{name}'")
        column = attributes[name]
        if value is not None and isinstance(column.type, FixedDecimal):
            value = check_fixed_precision(
                name, value, column.type.precision, column.type.scale)
        elif value is not None:
            value = coerce_column_value(name, column, value)
        length = getattr(column.type, "length", None)
        if isinstance(value, str) and length and len(value) > length:
            raise InvalidArgument(
                f"Field '{name}' allows at most {length} characters")
        values[name] = value

    if values.get("vendor_id") is not None:
        if db.get(Contact, values["vendor_id"]) is None:
            raise ConstraintViolation(
                f"vendor_id={values['vendor_id']} does not reference an existing Contact")

    row = model(contract_id=contract_id, **values)
    db.add(row)
    db.flush()
    db.refresh(row)
    return row


def get_parent_mapping(db: Session, contract_id: int) -> Optional[SubcontractMapping]:
    return (
        db.query(SubcontractMapping)
        .filter(SubcontractMapping.contract_id == contract_id)
        .order_by(SubcontractMapping.id.asc())
        .first()
    )


def add_mapping(db: Session, parent_id: int, child_id: int) -> SubcontractMapping:
    mapping = SubcontractMapping(
        contract_id=child_id, parentcontract_id=parent_id)
    db.add(mapping)
    db.flush()
    db.refresh(mapping)
    return mapping


def remove_parent_mapping(db: Session, contract_id: int) -> int:
    return (
        db.query(SubcontractMapping)
        .filter(SubcontractMapping.contract_id == contract_id)
        .delete(synchronize_session=False)
    )
