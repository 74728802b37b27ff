from sqlalchemy import Column, Date, String

from shared.core.database import Base
from shared.core.types import FixedDecimal
from .contract_owned_mixin import ContractOwnedMixin


class AssetSchedule(ContractOwnedMixin, Base):
    __tablename__ = "contracts_assetschedule"

    description = Column(String(200))
    start_date = Column(Date)
    end_date = Column(Date)
    amount = Column(FixedDecimal(18, 2))


class ContractTerm(ContractOwnedMixin, Base):
    __tablename__ = "contracts_contract_term"

    description = Column(String(200))
    start_date = Column(Date)
    end_date = Column(Date)
