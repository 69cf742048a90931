"""Shared fixtures: an in-memory database seeded with the default RBAC data and a few users."""
import os

# Settings are read at import time, so set them before importing jobboard
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-jobboard-suite-0123456789")
os.environ.setdefault("DB_URL", "sqlite://")
os.environ["CHECK_PWNED_PASSWORDS"] = "false"

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from jobboard.db.database import Session, prepare_database
from jobboard.db.models import Category, Company, Location, Password, Role, SalaryRange, User
from jobboard.db.seed import seed_lookups, seed_rbac
from jobboard.utils import hash_password

PASSWORD = "Sup3r!Secret#42"
_PASSWORD_HASH = hash_password(PASSWORD)


class FakeRequest:
    def __init__(self, headers=None):
        self.headers = headers or {}


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool,
    )
    prepare_database(engine)
    Session.configure(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session() as session:
        seed_rbac(session)
        seed_lookups(session)
        yield session


def make_user(session, username, role_name, is_active=True):
    role = session.query(Role).filter(Role.name == role_name).one()
    user = User(username=username, email=f"{username}@jobboard.io", role_id=role.id, is_active=is_active)
    session.add(user)
    session.flush()
    session.add(Password(user_id=user.id, password_hash=_PASSWORD_HASH))
    session.commit()
    return user


@pytest.fixture
def admin(session):
    return make_user(session, "alice", "admin")


@pytest.fixture
def employer(session):
    return make_user(session, "bob", "employer")


@pytest.fixture
def viewer(session):
    return make_user(session, "vera", "viewer")


@pytest.fixture
def inactive_admin(session):
    return make_user(session, "ivan", "admin", is_active=False)


@pytest.fixture
def lookups(session):
    """Ids of one seeded location, salary range and category."""
    return {
        "location_id": session.query(Location).filter(Location.name == "Remote").one().id,
        "salary_range_id": session.query(SalaryRange).filter(SalaryRange.label == "50k - 100k").one().id,
        "category_id": session.query(Category).filter(Category.name == "Engineering").one().id,
    }


@pytest.fixture
def company(session, admin):
    company = Company(name="MetaTechA", website="https://metatecha.example", created_by=admin.id, updated_by=admin.id)
    session.add(company)
    session.commit()
    return company


@pytest.fixture
def job_fields(lookups, company):
    return dict(
        title="Software Engineer",
        description="Develop web apps",
        company_id=company.id,
        **lookups,
    )
