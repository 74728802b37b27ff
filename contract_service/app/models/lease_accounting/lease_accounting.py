from sqlalchemy import Column, Date, Integer, String, Text

from shared.core.database import Base
from ..contracts.contract_owned_mixin import ContractOwnedMixin


class ManualOverrideHistory(ContractOwnedMixin, Base):
    __tablename__ = "leaseaccounting_manualoverridehistory"

    override_code = Column(Integer)
    changed_on = Column(Date)
    reason = Column(Text)


class LeaseAccountingReview(ContractOwnedMixin, Base):
    __tablename__ = "leaseaccounting_review"

    review_date = Column(Date)
    status = Column(String(100))
    notes = Column(Text)
