from sqlalchemy import Column, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from shared.core.database import Base


class SubcontractMapping(Base):
    """Parent/sub-contract link kept outside the contract row.

    A contract appears at most once as ``contract_id``, so it has at most one
    parent. Reparenting is unlink then link.
    """
    __tablename__ = "contracts_subcontractmapping"
    __table_args__ = (
        Index("uq_subcontractmapping_contractid", "contractid", unique=True),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column("contractid", Integer, ForeignKey(
        "contracts_contract.id"), nullable=False)
    parentcontract_id = Column("parentcontractid", Integer, ForeignKey(
        "contracts_contract.id"), nullable=False, index=True)

    contract = relationship("Contract", foreign_keys=[contract_id])
    parentcontract = relationship("Contract", foreign_keys=[parentcontract_id])
