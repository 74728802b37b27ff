from datetime import date
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContractBase(BaseModel):
    # accepts both snake_case and the camelCase names of the source table
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    entity_id: Optional[UUID] = None

    contract_type_id: Optional[int] = None
    vendor_id: Optional[int] = None
    contracted_party_id: Optional[int] = None
    currency_id: Optional[int] = None
    cloned_from_contract_id: Optional[int] = None
    treasury_approver_id: Optional[int] = None

    description: Optional[str] = Field(default=None, max_length=200)
    reference_no: Optional[str] = Field(default=None, max_length=200)
    status: Optional[str] = Field(default=None, max_length=100)
    lifecycle_state: Optional[str] = Field(default=None, max_length=100)
    discriminator: Optional[str] = Field(default=None, max_length=128)
    notes: Optional[str] = None

    is_receivable: Optional[bool] = None
    is_archived: Optional[bool] = None
    is_in_holdover: Optional[bool] = None
    is_broken: Optional[bool] = None
    is_partial_building: Optional[bool] = None

    net_equivalent_factor: Optional[Decimal] = Field(
        default=None, max_digits=18, decimal_places=8)
    original_purchase_price: Optional[Decimal] = Field(
        default=None, max_digits=18, decimal_places=2)
    initial_prepayment: Optional[Decimal] = Field(
        default=None, max_digits=18, decimal_places=2)
    calculated_restoring_rate: Optional[Decimal] = Field(
        default=None, max_digits=18, decimal_places=8)
    termination_cost: Optional[Decimal] = Field(
        default=None, max_digits=16, decimal_places=2)

    make_good_date_of_obligation: Optional[date] = None
    lease_accounting_start_date: Optional[date] = None
    archived_date: Optional[date] = None
    holdover_start_date: Optional[date] = None
    termination_date: Optional[date] = None

    eol_take_ownership: Optional[bool] = None
    force_review: Optional[bool] = None
    useful_life: Optional[int] = None
    manual_override: Optional[int] = None
    lease_type: Optional[str] = Field(default=None, max_length=255)
    asset_category_type: Optional[str] = Field(default=None, max_length=255)
    ledger_system: Optional[str] = Field(default=None, max_length=255)
    accounting_code: Optional[str] = Field(default=None, max_length=100)


class ContractCreate(ContractBase):
    # left empty the store assigns one
    id: Optional[int] = None


class ContractUpdate(ContractBase):
    """Partial update; only the fields actually sent are applied."""
    pass


class ContractOut(ContractBase):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="ignore",
    )

    id: int


class SubcontractMappingOut(BaseModel):
    id: int
    contract_id: int
    parentcontract_id: int

    model_config = {"from_attributes": True}
