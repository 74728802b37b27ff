from sqlalchemy import Column, Date, String

from shared.core.database import Base
from shared.core.types import FixedDecimal
from .contract_owned_mixin import ContractOwnedMixin


class Guarantee(ContractOwnedMixin, Base):
    __tablename__ = "contracts_contract_guarantee"

    guarantor = Column(String(200))
    amount = Column(FixedDecimal(18, 2))
    expiry_date = Column(Date)
