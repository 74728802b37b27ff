"""
Pytest configuration and fixtures
"""
import pytest

from shared.core.database import Base, build_engine, build_session_factory, session_scope
from contract_service.app import models  # noqa: F401  registers every table
from contract_service.app.enum.contracts_enum import DeletePolicy
from contract_service.app.models import Contact, ContractType, Currency
from contract_service.app.services.contract_store import ContractStore


@pytest.fixture(scope="function")
def session_factory(tmp_path):
    """Fresh SQLite file per test, schema built from the models."""
    engine = build_engine(f"sqlite:///{tmp_path / 'contracts.db'}")
    Base.metadata.create_all(bind=engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def store(session_factory):
    return ContractStore(session_factory, DeletePolicy.restrict)


@pytest.fixture
def cascade_store(session_factory):
    return ContractStore(session_factory, DeletePolicy.cascade)


@pytest.fixture
def refs(session_factory):
    """Reference rows every contract test can point at."""
    with session_scope(session_factory) as db:
        vendor = Contact(email="vendor@example.com", contactshortname="Vendor Pty")
        other_vendor = Contact(email="other@example.com", contactshortname="Other Vendor")
        party = Contact(email="party@example.com", contactshortname="Tenant Co")
        aud = Currency(code="AUD", name="Australian Dollar")
        usd = Currency(code="USD", name="US Dollar")
        lease = ContractType(description="Property lease")
        equipment = ContractType(description="Equipment lease")
        db.add_all([vendor, other_vendor, party, aud, usd, lease, equipment])
        db.flush()
        ids = {
            "vendor": vendor.id,
            "other_vendor": other_vendor.id,
            "party": party.id,
            "aud": aud.id,
            "usd": usd.id,
            "lease": lease.id,
            "equipment": equipment.id,
        }
    return ids
