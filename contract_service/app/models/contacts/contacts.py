from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from shared.core.database import Base


class Contact(Base):
    __tablename__ = "contacts_contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    phone1 = Column(String(50))
    phone2 = Column(String(50))
    mobile = Column(String(50))
    email = Column(String(200))
    fax = Column(String(50))
    notes = Column(Text)
    loissystemid = Column(String(255))
    contactshortname = Column(Text)
    la_id = Column(Text)
    la_roles = Column(Text)

    # same target, two roles; kept apart on purpose
    vendor_contracts = relationship(
        "Contract", foreign_keys="Contract.vendor_id", back_populates="vendor")
    contracted_party_contracts = relationship(
        "Contract", foreign_keys="Contract.contracted_party_id", back_populates="contracted_party")
