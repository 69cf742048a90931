# jobboard/db/seed.py
"""Default RBAC and lookup rows, plus the first administrator.

Rows written here predate any user, so their audit user columns stay NULL.
Every function is idempotent.
"""
import logging

from jobboard.db.data import (
    categories_data, locations_data, permissions_data, roles_data, salary_ranges_data,
)
from jobboard.db.models import (
    Category, Location, Password, Permission, Role, RoleToPermission, SalaryRange, User,
)
from jobboard.utils import hash_password, is_password_strong, validate_user_email

log = logging.getLogger(__name__)


def _get_or_create(session, model, lookup, **defaults):
    obj = session.query(model).filter_by(**lookup).first()
    if obj is None:
        obj = model(**lookup, **defaults)
        session.add(obj)
        session.flush()
        log.debug(f"Seeded {model.__tablename__}: {lookup}")
    return obj


def seed_rbac(session):
    """Ensures the default permissions, roles and grants exist."""
    by_key = {}
    for permission in permissions_data:
        by_key[permission["key"]] = _get_or_create(
            session, Permission, {"key": permission["key"]},
            label=permission["label"], description=permission["description"],
        )
    for role_data in roles_data:
        role = _get_or_create(session, Role, {"name": role_data["name"]}, description=role_data["description"])
        for key in role_data["permissions"]:
            _get_or_create(session, RoleToPermission, {"role_id": role.id, "permission_id": by_key[key].id})
    session.commit()
    log.info(f"RBAC seeded: {len(permissions_data)} permissions, {len(roles_data)} roles.")


def seed_lookups(session):
    """Ensures the default locations, salary ranges and categories exist."""
    for row in locations_data:
        _get_or_create(session, Location, row)
    for row in salary_ranges_data:
        _get_or_create(session, SalaryRange, row)
    for row in categories_data:
        _get_or_create(session, Category, row)
    session.commit()
    log.info("Lookup tables seeded.")


def create_admin(session, username, email, password):
    """Creates an active user holding the 'admin' role. Raises ValueError on bad input."""
    normalized_email = validate_user_email(email)
    is_password_strong(password, username=username, email=normalized_email)

    role = session.query(Role).filter(Role.name == "admin").first()
    if role is None:
        raise ValueError("The 'admin' role does not exist; seed the RBAC data first.")
    existing = session.query(User).filter(
        (User.email == normalized_email) | (User.username == username)
    ).first()
    if existing is not None:
        raise ValueError(f"A user with username '{username}' or email '{normalized_email}' already exists (ID: {existing.id}).")

    admin = User(username=username, email=normalized_email, role_id=role.id, is_active=True)
    session.add(admin)
    session.flush()
    session.add(Password(user_id=admin.id, password_hash=hash_password(password)))
    session.commit()
    log.info(f"Admin user created: ID={admin.id}, Username={username}")
    return admin
