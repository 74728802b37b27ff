from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import declared_attr, relationship


class ContractOwnedMixin:
    """Integer id plus the non-null ``contractid`` link back to the owning contract."""

    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)

    @declared_attr
    def contract_id(cls):
        return Column("contractid", Integer, ForeignKey(
            "contracts_contract.id"), nullable=False, index=True)

    @declared_attr
    def contract(cls):
        return relationship("Contract")
