from sqlalchemy import Column, Date, String

from shared.core.database import Base
from shared.core.types import FixedDecimal
from ..contracts.contract_owned_mixin import ContractOwnedMixin


class Invoice(ContractOwnedMixin, Base):
    __tablename__ = "invoice_invoice"

    invoice_no = Column(String(100))
    invoice_date = Column(Date)
    amount = Column(FixedDecimal(18, 2))


class InvoiceTemplate(ContractOwnedMixin, Base):
    __tablename__ = "invoice_invoicetemplate"

    name = Column(String(200))
    frequency = Column(String(32))
    amount = Column(FixedDecimal(18, 2))
