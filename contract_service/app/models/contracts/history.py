from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text

from shared.core.database import Base
from .contract_owned_mixin import ContractOwnedMixin


class VendorHistory(ContractOwnedMixin, Base):
    __tablename__ = "contracts_vendorhistory"

    vendor_id = Column("vendorid", Integer, ForeignKey("contacts_contacts.id"))
    effective_date = Column(Date)


class SynchronisationEvent(ContractOwnedMixin, Base):
    __tablename__ = "contracts_synchronisationevent"

    event_type = Column(String(100))
    occurred_on = Column(Date)
    payload = Column(Text)
