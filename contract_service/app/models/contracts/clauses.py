from sqlalchemy import Column, Date, Integer, String, Text

from shared.core.database import Base
from shared.core.types import FixedDecimal
from .contract_owned_mixin import ContractOwnedMixin


class Clause(ContractOwnedMixin, Base):
    __tablename__ = "contracts_clause"

    title = Column(String(200))
    clause_text = Column(Text)


class BreakClause(ContractOwnedMixin, Base):
    __tablename__ = "contracts_breakclause"

    break_date = Column(Date)
    notice_period_days = Column(Integer)
    penalty_amount = Column(FixedDecimal(18, 2))
    notes = Column(Text)
