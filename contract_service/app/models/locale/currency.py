from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from shared.core.database import Base


class Currency(Base):
    __tablename__ = "locale_currency"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(3), nullable=False)
    name = Column(String(100))

    contracts = relationship("Contract", back_populates="currency")
