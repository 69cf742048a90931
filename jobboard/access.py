"""Role-based access control.

A user holds one role and a role holds a flat set of permission keys joined
through ``role_to_permissions``. Authorization is plain set membership: no
role hierarchy, no wildcards, no caching. Inactive users are never
authorized.
"""
import logging

from jobboard.db.database import Session
from jobboard.db.models import Permission, RoleToPermission, User
from jobboard.errors import Unauthenticated, Unauthorized

log = logging.getLogger(__name__)


def get_permission_keys(session, role_id) -> set[str]:
    """Returns exactly the permission keys granted to ``role_id``."""
    rows = (
        session.query(Permission.key)
        .join(RoleToPermission, RoleToPermission.permission_id == Permission.id)
        .filter(RoleToPermission.role_id == role_id)
        .all()
    )
    return {key for (key,) in rows}


def get_user_permission_keys(session, user_id) -> set[str]:
    """Permission keys in effect for a user; empty for unknown or inactive users."""
    user = session.get(User, user_id) if user_id is not None else None
    if user is None or not user.is_active:
        return set()
    return get_permission_keys(session, user.role_id)


def is_authorized(user_id, permission_key, session=None) -> bool:
    """True when the user is active and their role grants ``permission_key``."""
    if session is None:
        with Session() as own_session:
            return is_authorized(user_id, permission_key, session=own_session)

    user = session.get(User, user_id) if user_id is not None else None
    if user is None:
        log.debug(f"Authorization denied: user {user_id} does not exist.")
        return False
    if not user.is_active:
        log.info(f"Authorization denied: user {user_id} is inactive (wanted '{permission_key}').")
        return False
    granted = permission_key in get_permission_keys(session, user.role_id)
    if not granted:
        log.debug(f"Authorization denied: role {user.role_id} lacks '{permission_key}' (user {user_id}).")
    return granted


def require_permission(session, user_id, permission_key) -> User:
    """Returns the acting user, or raises Unauthenticated / Unauthorized."""
    if user_id is None:
        raise Unauthenticated("Authentication is required.")
    user = session.get(User, user_id)
    if user is None:
        log.warning(f"Unknown acting user ID {user_id}.")
        raise Unauthenticated("Authentication failed.")
    if not is_authorized(user_id, permission_key, session=session):
        log.warning(f"User {user_id} is not authorized for '{permission_key}'.")
        raise Unauthorized(f"You are not authorized to perform this action ({permission_key} required).")
    return user
