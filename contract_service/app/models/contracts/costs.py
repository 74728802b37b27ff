from sqlalchemy import Column, Date, String

from shared.core.database import Base
from shared.core.types import FixedDecimal
from .contract_owned_mixin import ContractOwnedMixin


class ExitCost(ContractOwnedMixin, Base):
    __tablename__ = "contracts_exitcost"

    description = Column(String(200))
    amount = Column(FixedDecimal(18, 2))
    due_date = Column(Date)


class Incentive(ContractOwnedMixin, Base):
    __tablename__ = "contracts_incentive"

    description = Column(String(200))
    amount = Column(FixedDecimal(18, 2))
    start_date = Column(Date)
    end_date = Column(Date)


class InitialCost(ContractOwnedMixin, Base):
    __tablename__ = "contracts_initialcost"

    description = Column(String(200))
    amount = Column(FixedDecimal(18, 2))
    incurred_date = Column(Date)


class MakeGoodCost(ContractOwnedMixin, Base):
    __tablename__ = "contracts_makegoodcost"

    description = Column(String(200))
    amount = Column(FixedDecimal(18, 2))
    estimate_date = Column(Date)
