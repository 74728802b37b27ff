"""ContractStore: the library-level entry point for contract records.

Every mutating call runs in its own session and a single transaction, so the
uniqueness, foreign key and precision checks commit or roll back together
with the write they guard. Lookups that can return many rows hand back a
:class:`RowSequence`, which streams from the database only while the caller
iterates and can be iterated again.
"""
import logging
from datetime import date
from typing import Any, Callable, Iterator, Optional
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from shared.core.config import settings
from shared.core.database import get_contract_session_factory, session_scope
from shared.core.exceptions import ConstraintViolation, InvalidArgument, NotFound
from shared.core.logging_config import setup_logging
from shared.utils.app_status_code import AppStatusCode
from ..crud.contracts import contract_children_crud, contracts_crud
from ..enum.contracts_enum import ContractChildKind, DeletePolicy
from ..schemas.contracts.contracts_schemas import (
    ContractCreate, ContractOut, ContractUpdate, SubcontractMappingOut
)

logger = logging.getLogger(__name__)

# pydantic error types that mean "does not fit NUMERIC(p, s)"
PRECISION_ERROR_TYPES = {
    "decimal_max_digits",
    "decimal_max_places",
    "decimal_whole_digits",
}


class RowSequence:
    """Lazy, restartable view over a query.

    Each ``iter()`` opens its own session and closes it when iteration ends or
    the caller stops early, so an abandoned scan holds nothing open.
    """

    def __init__(self, session_factory, build_query: Callable, transform: Optional[Callable] = None, batch_size: int = 100):
        self._session_factory = session_factory
        self._build_query = build_query
        self._transform = transform
        self._batch_size = batch_size

    def __iter__(self) -> Iterator[Any]:
        db = self._session_factory()
        try:
            for row in self._build_query(db).yield_per(self._batch_size):
                yield self._transform(row) if self._transform else row
        finally:
            db.close()

    def all(self) -> list:
        return list(self)

    def first(self):
        for row in self:
            return row
        return None


def to_contract_out(row) -> ContractOut:
    return ContractOut.model_validate(row)


def translate_validation_error(exc: ValidationError):
    messages = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors())
    if any(err["type"] in PRECISION_ERROR_TYPES for err in exc.errors()):
        return ConstraintViolation(messages)
    return InvalidArgument(messages)


class ContractStore:

    def __init__(self, session_factory, delete_policy: DeletePolicy):
        self._session_factory = session_factory
        self.delete_policy = DeletePolicy(delete_policy)

    @classmethod
    def from_settings(cls) -> "ContractStore":
        setup_logging()
        return cls(get_contract_session_factory(), DeletePolicy(settings.CONTRACT_DELETE_POLICY))

    # ----------------------------------------------------
    # Writes
    # ----------------------------------------------------
    def create(self, record) -> ContractOut:
        payload = self._parse(ContractCreate, record)
        try:
            with session_scope(self._session_factory) as db:
                contract = contracts_crud.create(db, payload)
                result = to_contract_out(contract)
        except IntegrityError as exc:
            logger.warning(f"Contract create rejected by the database: {exc.orig}")
            raise ConstraintViolation(
                f"Contract violates a database constraint: {exc.orig}") from exc
        except ConstraintViolation as exc:
            logger.warning(f"Contract create refused: {exc.message}")
            raise
        except SQLAlchemyError as exc:
            logger.error(f"Error creating contract: {exc}")
            raise

        logger.info(f"Created contract with ID {result.id}")
        return result

    def update(self, contract_id: int, patch) -> ContractOut:
        payload = self._parse(ContractUpdate, patch)
        try:
            with session_scope(self._session_factory) as db:
                contract = self._require(db, contract_id)
                contract = contracts_crud.update(db, contract, payload)
                result = to_contract_out(contract)
        except IntegrityError as exc:
            logger.warning(
                f"Update of contract {contract_id} rejected by the database: {exc.orig}")
            raise ConstraintViolation(
                f"Contract violates a database constraint: {exc.orig}") from exc
        except ConstraintViolation as exc:
            logger.warning(f"Update of contract {contract_id} refused: {exc.message}")
            raise
        except SQLAlchemyError as exc:
            logger.error(f"Error updating contract {contract_id}: {exc}")
            raise

        logger.info(f"Updated contract with ID {contract_id}")
        return result

    def archive(self, contract_id: int, archived_on: Optional[date] = None) -> ContractOut:
        """Soft delete: the row stays, flagged as archived."""
        with session_scope(self._session_factory) as db:
            contract = self._require(db, contract_id)
            contract = contracts_crud.archive(db, contract, archived_on)
            result = to_contract_out(contract)

        logger.info(f"Archived contract with ID {contract_id}")
        return result

    def delete(self, contract_id: int) -> None:
        try:
            with session_scope(self._session_factory) as db:
                self._require(db, contract_id)

                if self.delete_policy == DeletePolicy.restrict:
                    counts = contract_children_crud.count_children(db, contract_id)
                    clones = contracts_crud.query_clones_of(db, contract_id).count()
                    if counts or clones:
                        owned = ", ".join(
                            f"{kind.value}={total}" for kind, total in counts.items())
                        if clones:
                            owned = ", ".join(filter(None, [owned, f"clones={clones}"]))
                        raise ConstraintViolation(
                            f"Contract {contract_id} is still referenced ({owned})")
                else:
                    removed = contract_children_crud.delete_children(db, contract_id)
                    detached = contracts_crud.detach_clones(db, contract_id)
                    logger.info(
                        f"Cascade for contract {contract_id}: removed {removed} owned rows, detached {detached} clones")

                contracts_crud.delete(db, contract_id)
        except IntegrityError as exc:
            logger.warning(
                f"Delete of contract {contract_id} rejected by the database: {exc.orig}")
            raise ConstraintViolation(
                f"Contract {contract_id} is still referenced: {exc.orig}") from exc
        except ConstraintViolation as exc:
            logger.warning(f"Delete of contract {contract_id} refused: {exc.message}")
            raise
        except SQLAlchemyError as exc:
            logger.error(f"Error deleting contract {contract_id}: {exc}")
            raise

        logger.info(f"Deleted contract with ID {contract_id}")

    def add_child(self, contract_id: int, kind, /, **fields):
        kind = contract_children_crud.resolve_kind(kind)
        try:
            with session_scope(self._session_factory) as db:
                if contracts_crud.get_by_id(db, contract_id) is None:
                    raise ConstraintViolation(
                        f"contract_id={contract_id} does not reference an existing Contract")
                row = contract_children_crud.add_child(db, contract_id, kind, fields)
                db.expunge(row)
        except IntegrityError as exc:
            raise ConstraintViolation(
                f"{kind.value} row violates a database constraint: {exc.orig}") from exc
        return row

    def link_subcontract(self, parent_id: int, child_id: int) -> SubcontractMappingOut:
        if parent_id == child_id:
            raise ConstraintViolation(
                f"Contract {child_id} cannot be its own sub-contract")

        with session_scope(self._session_factory) as db:
            self._require(db, parent_id)
            self._require(db, child_id)

            existing = contract_children_crud.get_parent_mapping(db, child_id)
            if existing is not None:
                raise ConstraintViolation(
                    f"Contract {child_id} already has parent {existing.parentcontract_id}",
                    status_code=AppStatusCode.DUPLICATE_ADD_ERROR)

            # walk up from the new parent; meeting the child would close a loop
            ancestor = contract_children_crud.get_parent_mapping(db, parent_id)
            seen = {parent_id}
            while ancestor is not None:
                if ancestor.parentcontract_id == child_id:
                    raise ConstraintViolation(
                        f"Contract {child_id} is an ancestor of contract {parent_id}")
                if ancestor.parentcontract_id in seen:
                    break
                seen.add(ancestor.parentcontract_id)
                ancestor = contract_children_crud.get_parent_mapping(
                    db, ancestor.parentcontract_id)

            try:
                mapping = contract_children_crud.add_mapping(db, parent_id, child_id)
            except IntegrityError as exc:
                # a concurrent link for the same child committed first
                logger.warning(
                    f"Link of contract {child_id} rejected by the database: {exc.orig}")
                raise ConstraintViolation(
                    f"Contract {child_id} already has a parent",
                    status_code=AppStatusCode.DUPLICATE_ADD_ERROR) from exc
            result = SubcontractMappingOut.model_validate(mapping)

        logger.info(f"Linked contract {child_id} under parent {parent_id}")
        return result

    def unlink_subcontract(self, child_id: int) -> bool:
        with session_scope(self._session_factory) as db:
            removed = contract_children_crud.remove_parent_mapping(db, child_id)
        return removed > 0

    # ----------------------------------------------------
    # Reads
    # ----------------------------------------------------
    def get(self, contract_id: int) -> ContractOut:
        with session_scope(self._session_factory) as db:
            return to_contract_out(self._require(db, contract_id))

    def find_by_entity_id(self, entity_id: UUID) -> ContractOut:
        if not isinstance(entity_id, UUID):
            try:
                entity_id = UUID(str(entity_id))
            except ValueError:
                raise InvalidArgument(f"Invalid entity_id: {entity_id!r}") from None
        with session_scope(self._session_factory) as db:
            contract = contracts_crud.get_by_entity_id(db, entity_id)
            if contract is None:
                raise NotFound(f"Contract with entity_id {entity_id} not found")
            return to_contract_out(contract)

    def list_by_vendor(self, vendor_id: int) -> RowSequence:
        """Contracts with this vendor, by id. Uses idx_contract_vendor."""
        return self._list_by("vendor_id", vendor_id)

    def list_by_contracted_party(self, party_id: int) -> RowSequence:
        """Contracts with this contracted party, by id. Uses idx_contract_contractedparty."""
        return self._list_by("contracted_party_id", party_id)

    def list_by_currency(self, currency_id: int) -> RowSequence:
        """Contracts in this currency, by id. Uses idx_contract_currency."""
        return self._list_by("currency_id", currency_id)

    def list_by_type(self, contract_type_id: int) -> RowSequence:
        """Contracts of this type, by id. Uses idx_contract_type."""
        return self._list_by("contract_type_id", contract_type_id)

    def list_active(self, limit: int = 1000) -> RowSequence:
        """Non-archived contracts, newest first. Full table scan."""
        return RowSequence(
            self._session_factory,
            lambda db: contracts_crud.query_active(db, limit),
            to_contract_out)

    def search(self, description: Optional[str] = None, status: Optional[str] = None,
               vendor_id: Optional[int] = None, contract_type_id: Optional[int] = None,
               limit: int = 500) -> RowSequence:
        """Non-archived contracts matching every filter given, newest first.

        Only the vendor and contract type filters can use an index; description
        and status are scanned.
        """
        return RowSequence(
            self._session_factory,
            lambda db: contracts_crud.query_search(
                db, description, status, vendor_id, contract_type_id, limit),
            to_contract_out)

    def children(self, contract_id: int, kind) -> RowSequence:
        kind = contract_children_crud.resolve_kind(kind)
        self.get(contract_id)
        return RowSequence(
            self._session_factory,
            lambda db: contract_children_crud.query_children(db, contract_id, kind))

    def get_child(self, kind, child_id: int):
        kind = contract_children_crud.resolve_kind(kind)
        with session_scope(self._session_factory) as db:
            row = contract_children_crud.get_child(db, kind, child_id)
            if row is None:
                raise NotFound(f"{kind.value} row {child_id} not found")
            db.expunge(row)
            return row

    def subcontracts_of(self, contract_id: int) -> RowSequence:
        self.get(contract_id)
        return RowSequence(
            self._session_factory,
            lambda db: contract_children_crud.query_children(
                db, contract_id, ContractChildKind.parent_subcontract_mappings),
            lambda mapping: to_contract_out(mapping.contract))

    def parent_of(self, contract_id: int) -> Optional[ContractOut]:
        with session_scope(self._session_factory) as db:
            self._require(db, contract_id)
            mapping = contract_children_crud.get_parent_mapping(db, contract_id)
            if mapping is None:
                return None
            return to_contract_out(mapping.parentcontract)

    # ----------------------------------------------------
    # Helpers
    # ----------------------------------------------------
    def _list_by(self, column: str, value: int) -> RowSequence:
        return RowSequence(
            self._session_factory,
            lambda db: contracts_crud.query_by_column(db, column, value),
            to_contract_out)

    @staticmethod
    def _require(db, contract_id: int):
        contract = contracts_crud.get_by_id(db, contract_id)
        if contract is None:
            raise NotFound(f"Contract with ID {contract_id} not found")
        return contract

    @staticmethod
    def _parse(schema, data):
        if isinstance(data, schema):
            return data
        if not isinstance(data, dict):
            if hasattr(data, "model_dump"):
                data = data.model_dump(exclude_unset=True)
            else:
                raise InvalidArgument(
                    f"Expected a mapping of contract fields, got {type(data).__name__}")
        try:
            return schema.model_validate(data)
        except ValidationError as exc:
            raise translate_validation_error(exc) from exc
