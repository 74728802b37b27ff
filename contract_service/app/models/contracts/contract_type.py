from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from shared.core.database import Base


class ContractType(Base):
    __tablename__ = "contracts_contracttype"

    id = Column(Integer, primary_key=True, autoincrement=True)
    description = Column(String(200))

    contracts = relationship("Contract", back_populates="contract_type")
