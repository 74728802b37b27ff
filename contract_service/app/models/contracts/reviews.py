from sqlalchemy import Column, Date, String

from shared.core.database import Base
from shared.core.types import FixedDecimal
from .contract_owned_mixin import ContractOwnedMixin


class RateReview(ContractOwnedMixin, Base):
    __tablename__ = "contracts_ratereview"

    review_date = Column(Date)
    review_type = Column(String(100))
    new_rate = Column(FixedDecimal(18, 8))


class AgreedValueReview(ContractOwnedMixin, Base):
    __tablename__ = "contracts_contract_agreedvaluereview"

    review_date = Column(Date)
    agreed_value = Column(FixedDecimal(18, 2))
    status = Column(String(100))
