from sqlalchemy import Boolean, Column, Date, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from shared.core.database import Base
from shared.core.types import FixedDecimal


class Contract(Base):
    __tablename__ = "contracts_contract"
    __table_args__ = (
        Index("idx_contract_contractedparty", "contractedpartyid"),
        Index("idx_contract_currency", "currencyid"),
        Index("idx_contract_type", "contracttypeid"),
        Index("idx_contract_vendor", "vendorid"),
        Index("uq_contract_entityid", "entityid", unique=True),
        # ids are never handed out twice
        {"sqlite_autoincrement": True},
    )

    id = Column("id", Integer, primary_key=True, autoincrement=True)
    entity_id = Column("entityid", Uuid(as_uuid=True))

    contract_type_id = Column("contracttypeid", Integer, ForeignKey(
        "contracts_contracttype.id"))
    vendor_id = Column("vendorid", Integer, ForeignKey(
        "contacts_contacts.id"))
    contracted_party_id = Column("contractedpartyid", Integer, ForeignKey(
        "contacts_contacts.id"))
    currency_id = Column("currencyid", Integer, ForeignKey(
        "locale_currency.id"))
    cloned_from_contract_id = Column("clonedfromcontractid", Integer, ForeignKey(
        "contracts_contract.id"))
    # weak reference: no foreign key, never checked
    treasury_approver_id = Column("treasuryapproverid", Integer)

    description = Column("description", String(200))
    reference_no = Column("referenceno", String(200))
    status = Column("status", String(100))
    lifecycle_state = Column("lifecycle_state", String(100))
    discriminator = Column("discriminator", String(128))
    notes = Column("notes", Text)

    is_receivable = Column("isreceivable", Boolean)
    is_archived = Column("isarchived", Boolean)
    is_in_holdover = Column("isinholdover", Boolean)
    is_broken = Column("isbroken", Boolean)
    is_partial_building = Column("ispartialbuilding", Boolean)

    net_equivalent_factor = Column(
        "netequivalentfactor", FixedDecimal(18, 8))
    termination_cost = Column("terminationcost", FixedDecimal(16, 2))

    make_good_date_of_obligation = Column("makegooddateofobligation", Date)
    archived_date = Column("archiveddate", Date)
    holdover_start_date = Column("holdoverstartdate", Date)
    termination_date = Column("terminationdate", Date)

    # lease accounting
    original_purchase_price = Column(
        "leaseaccounting_originalpurchaseprice", FixedDecimal(18, 2))
    initial_prepayment = Column(
        "leaseaccounting_initialprepayment", FixedDecimal(18, 2))
    calculated_restoring_rate = Column(
        "leaseaccounting_calculatedrestoringrate", FixedDecimal(18, 8))
    eol_take_ownership = Column("leaseaccounting_eoltakeownership", Boolean)
    force_review = Column("leaseaccounting_forcereview", Boolean)
    useful_life = Column("leaseaccounting_usefullife", Integer)
    manual_override = Column("leaseaccounting_manualoverride", Integer)
    lease_type = Column("leaseaccounting_leasetype", String(255))
    asset_category_type = Column(
        "leaseaccounting_assetcategorytype", String(255))
    ledger_system = Column("leaseaccounting_ledgersystem", String(255))
    accounting_code = Column("leaseaccounting_accountingcode", String(100))
    lease_accounting_start_date = Column("leaseaccounting_startdate", Date)

    # relationships
    contract_type = relationship("ContractType", back_populates="contracts")
    currency = relationship("Currency", back_populates="contracts")
    vendor = relationship(
        "Contact", foreign_keys=[vendor_id], back_populates="vendor_contracts")
    contracted_party = relationship(
        "Contact", foreign_keys=[contracted_party_id], back_populates="contracted_party_contracts")
    cloned_from = relationship(
        "Contract", remote_side=[id], foreign_keys=[cloned_from_contract_id])

    # owned collections, read-only views; writes go through the child rows
    asset_schedules = relationship(
        "AssetSchedule", viewonly=True, order_by="AssetSchedule.id")
    break_clauses = relationship(
        "BreakClause", viewonly=True, order_by="BreakClause.id")
    clauses = relationship("Clause", viewonly=True, order_by="Clause.id")
    agreed_value_reviews = relationship(
        "AgreedValueReview", viewonly=True, order_by="AgreedValueReview.id")
    guarantees = relationship(
        "Guarantee", viewonly=True, order_by="Guarantee.id")
    contract_terms = relationship(
        "ContractTerm", viewonly=True, order_by="ContractTerm.id")
    exit_costs = relationship(
        "ExitCost", viewonly=True, order_by="ExitCost.id")
    incentives = relationship(
        "Incentive", viewonly=True, order_by="Incentive.id")
    initial_costs = relationship(
        "InitialCost", viewonly=True, order_by="InitialCost.id")
    make_good_costs = relationship(
        "MakeGoodCost", viewonly=True, order_by="MakeGoodCost.id")
    rate_reviews = relationship(
        "RateReview", viewonly=True, order_by="RateReview.id")
    synchronisation_events = relationship(
        "SynchronisationEvent", viewonly=True, order_by="SynchronisationEvent.id")
    vendor_histories = relationship(
        "VendorHistory", viewonly=True, order_by="VendorHistory.id")
    invoices = relationship("Invoice", viewonly=True, order_by="Invoice.id")
    invoice_templates = relationship(
        "InvoiceTemplate", viewonly=True, order_by="InvoiceTemplate.id")
    manual_override_histories = relationship(
        "ManualOverrideHistory", viewonly=True, order_by="ManualOverrideHistory.id")
    lease_accounting_reviews = relationship(
        "LeaseAccountingReview", viewonly=True, order_by="LeaseAccountingReview.id")
    subcontract_mappings = relationship(
        "SubcontractMapping", viewonly=True,
        foreign_keys="SubcontractMapping.contract_id",
        order_by="SubcontractMapping.id")
    parent_subcontract_mappings = relationship(
        "SubcontractMapping", viewonly=True,
        foreign_keys="SubcontractMapping.parentcontract_id",
        order_by="SubcontractMapping.id")
