# Import all models to ensure they are registered with SQLAlchemy
from .contacts.contacts import Contact
from .locale.currency import Currency
from .contracts.contract_type import ContractType
from .contracts.contracts import Contract
from .contracts.schedules import AssetSchedule, ContractTerm
from .contracts.clauses import Clause, BreakClause
from .contracts.costs import ExitCost, Incentive, InitialCost, MakeGoodCost
from .contracts.reviews import RateReview, AgreedValueReview
from .contracts.guarantees import Guarantee
from .contracts.history import VendorHistory, SynchronisationEvent
from .contracts.subcontract_mapping import SubcontractMapping
from .invoices.invoices import Invoice, InvoiceTemplate
from .lease_accounting.lease_accounting import ManualOverrideHistory, LeaseAccountingReview
