"""Data-access layer: one repository per entity.

Every operation takes an explicit ``session`` and the acting user's id, checks
the ``<prefix>.<action>`` permission, and runs in a single transaction. Audit
columns are always set here from ``actor_id``; values supplied by callers for
them are discarded.
"""
import logging

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError

from jobboard.access import require_permission
from jobboard.db.models import (
    Category, Company, Job, Location, Password, Permission, Role, RoleToPermission,
    SalaryRange, User, utcnow,
)
from jobboard.errors import (
    JobBoardError, NotFound, ReferentialError, Unauthenticated, Unauthorized, ValidationError,
)
from jobboard.utils import hash_password, is_password_strong, validate_user_email, verify_password

log = logging.getLogger(__name__)

AUDIT_FIELDS = ("created_by", "updated_by", "created_at", "updated_at")


class Repository:
    extra_update_hint = "it is only accepted on create."

    def __init__(self, model, prefix, fields, required=(), unique=(), references=None, extra_fields=()):
        self.model = model
        self.prefix = prefix
        self.fields = tuple(fields)
        self.required = tuple(required)
        # each entry is a column name or a tuple of names unique together
        self.unique = tuple((u,) if isinstance(u, str) else tuple(u) for u in unique)
        self.references = dict(references or {})
        self.extra_fields = tuple(extra_fields)
        self.label = prefix.replace("_", " ").capitalize()

    # --- read ---

    def list(self, session, actor_id):
        require_permission(session, actor_id, f"{self.prefix}.view")
        return session.query(self.model).order_by(self.model.id).all()

    def get(self, session, actor_id, id):
        require_permission(session, actor_id, f"{self.prefix}.view")
        return self._get_or_404(session, id)

    # --- write ---

    def create(self, session, actor_id, **values):
        try:
            require_permission(session, actor_id, f"{self.prefix}.create")
            values, extra = self._clean(values)
            missing = [f for f in self.required if _is_blank(values.get(f))]
            if missing:
                raise ValidationError(f"{self.label}: missing required field(s): {', '.join(missing)}.")
            values = self._prepare(session, values)
            self._check_unique(session, values)
            self._check_references(session, values)

            obj = self.model(**values)
            now = utcnow()
            obj.created_by = obj.updated_by = actor_id
            obj.created_at = obj.updated_at = now
            session.add(obj)
            session.flush()
            self._after_insert(session, actor_id, obj, extra)
            session.commit()
        except JobBoardError:
            session.rollback()
            raise
        except IntegrityError as e:
            session.rollback()
            log.warning(f"Integrity error creating {self.prefix}: {e.orig}")
            raise ValidationError(f"{self.label} conflicts with an existing record.")
        log.info(f"{self.label} created: ID={obj.id} by user {actor_id}")
        return self._load(session, obj.id)

    def update(self, session, actor_id, id, **values):
        """Applies the given fields. When every value equals the stored one nothing is
        written, so updated_by/updated_at keep their previous values."""
        try:
            require_permission(session, actor_id, f"{self.prefix}.update")
            obj = self._get_or_404(session, id)
            values, extra = self._clean(values)
            if extra:
                raise ValidationError(
                    f"{self.label}: {', '.join(sorted(extra))} cannot be changed by update; {self.extra_update_hint}"
                )
            blank = [f for f in self.required if f in values and _is_blank(values[f])]
            if blank:
                raise ValidationError(f"{self.label}: required field(s) cannot be empty: {', '.join(blank)}.")
            values = self._prepare(session, values, current=obj)
            changes = {k: v for k, v in values.items() if getattr(obj, k) != v}
            if not changes:
                log.info(f"No effective changes for {self.prefix} ID={id}")
                return obj
            self._check_unique(session, changes, exclude_id=obj.id, current=obj)
            self._check_references(session, changes)

            for field, value in changes.items():
                setattr(obj, field, value)
            obj.updated_by = actor_id
            obj.updated_at = utcnow()
            session.commit()
        except JobBoardError:
            session.rollback()
            raise
        except IntegrityError as e:
            session.rollback()
            log.warning(f"Integrity error updating {self.prefix} {id}: {e.orig}")
            raise ValidationError(f"{self.label} conflicts with an existing record.")
        log.info(f"{self.label} updated: ID={id} by user {actor_id} ({', '.join(sorted(changes))})")
        return self._load(session, id)

    def delete(self, session, actor_id, id):
        try:
            require_permission(session, actor_id, f"{self.prefix}.delete")
            obj = self._get_or_404(session, id)
            session.delete(obj)
            session.commit()
        except JobBoardError:
            session.rollback()
            raise
        except IntegrityError as e:
            session.rollback()
            log.warning(f"Delete of {self.prefix} {id} blocked by references: {e.orig}")
            raise ReferentialError(f"Cannot delete {self.prefix.replace('_', ' ')} {id}: it is still referenced by other records.")
        log.info(f"{self.label} deleted: ID={id} by user {actor_id}")
        return True

    # --- hooks ---

    def _prepare(self, session, values, current=None):
        return values

    def _after_insert(self, session, actor_id, obj, extra):
        pass

    # --- helpers ---

    def _get_or_404(self, session, id):
        obj = session.get(self.model, id)
        if obj is None:
            raise NotFound(f"{self.label} with ID {id} not found.")
        return obj

    def _load(self, session, id):
        return session.query(self.model).populate_existing().filter(self.model.id == id).one()

    def _clean(self, values):
        cleaned, extra = {}, {}
        for field, value in values.items():
            if field in AUDIT_FIELDS:
                log.warning(f"Ignoring client-supplied audit field '{field}' for {self.prefix}.")
            elif field in self.extra_fields:
                extra[field] = value
            elif field in self.fields:
                cleaned[field] = value.strip() if isinstance(value, str) else value
            else:
                raise ValidationError(f"{self.label}: unknown field '{field}'.")
        return cleaned, extra

    def _check_unique(self, session, values, exclude_id=None, current=None):
        for columns in self.unique:
            if not any(c in values for c in columns):
                continue
            wanted = {c: values[c] if c in values else getattr(current, c) for c in columns}
            query = session.query(self.model).filter(
                and_(*[getattr(self.model, c) == v for c, v in wanted.items()])
            )
            if exclude_id is not None:
                query = query.filter(self.model.id != exclude_id)
            if query.first() is not None:
                described = ", ".join(f"{c}={v!r}" for c, v in wanted.items())
                raise ValidationError(f"{self.label} with {described} already exists.")

    def _check_references(self, session, values):
        for field, target in self.references.items():
            if field not in values:
                continue
            if values[field] is None or session.get(target, values[field]) is None:
                raise ReferentialError(f"{target.__name__} with ID {values[field]} does not exist ({field}).")


def _is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


class UserRepository(Repository):
    """ Users carry a Password row created in the same transaction. """

    extra_update_hint = "use set_password (the changePassword mutation) instead."

    def _prepare(self, session, values, current=None):
        if "username" in values and len(values["username"]) < 3:
            raise ValidationError("Username must be at least 3 characters long.")
        if "email" in values:
            try:
                values["email"] = validate_user_email(values["email"])
            except ValueError as ve:
                raise ValidationError(str(ve))
        return values

    def _after_insert(self, session, actor_id, obj, extra):
        password = extra.get("password")
        if not password:
            raise ValidationError("User: missing required field(s): password.")
        try:
            is_password_strong(password, username=obj.username, email=obj.email)
        except ValueError as ve:
            raise ValidationError(str(ve))
        session.add(Password(
            user_id=obj.id, password_hash=hash_password(password),
            created_by=actor_id, updated_by=actor_id,
        ))

    def update(self, session, actor_id, id, **values):
        # Users cannot lock themselves out: no self-deactivation, no changing their own role
        if actor_id is not None and actor_id == id:
            current = session.get(User, id)
            if current is not None:
                if "is_active" in values and not values["is_active"]:
                    raise ValidationError("You cannot deactivate your own account.")
                if "role_id" in values and values["role_id"] != current.role_id:
                    raise ValidationError("You cannot change your own role.")
        return super().update(session, actor_id, id, **values)

    def delete(self, session, actor_id, id):
        if actor_id is not None and actor_id == id:
            raise ValidationError("You cannot delete your own account.")
        return super().delete(session, actor_id, id)

    def set_password(self, session, actor_id, user_id, new_password, current_password=None):
        """A user may change their own password with the current one; anyone else needs user.update."""
        try:
            if actor_id is None:
                raise Unauthenticated("Authentication is required.")
            user = self._get_or_404(session, user_id)
            record = session.query(Password).filter(Password.user_id == user_id).first()
            if actor_id == user_id and current_password is not None:
                if not user.is_active:
                    raise Unauthorized("Inactive users cannot change their password.")
                if record is None or not verify_password(record.password_hash, current_password):
                    raise Unauthorized("Current password is incorrect.")
            else:
                require_permission(session, actor_id, "user.update")
            try:
                is_password_strong(new_password, username=user.username, email=user.email)
            except ValueError as ve:
                raise ValidationError(str(ve))

            now = utcnow()
            if record is None:
                record = Password(user_id=user_id, created_by=actor_id, created_at=now)
                session.add(record)
            record.password_hash = hash_password(new_password)
            record.updated_by = actor_id
            record.updated_at = now
            session.commit()
        except JobBoardError:
            session.rollback()
            raise
        log.info(f"Password updated for user {user_id} by user {actor_id}")
        return True

    def authenticate(self, session, email, password):
        """Returns the active user owning these credentials, else raises Unauthenticated."""
        try:
            normalized_email = validate_user_email(email)
        except ValueError:
            raise Unauthenticated("Invalid email or password")
        user = session.query(User).filter(User.email == normalized_email).first()
        if user is None:
            log.warning(f"Login failed: User not found for email {normalized_email}")
            raise Unauthenticated("Invalid email or password")
        record = session.query(Password).filter(Password.user_id == user.id).first()
        if record is None or not verify_password(record.password_hash, password):
            log.warning(f"Login failed: bad password for user ID {user.id}")
            raise Unauthenticated("Invalid email or password")
        if not user.is_active:
            log.warning(f"Login refused: user ID {user.id} is inactive")
            raise Unauthenticated("This account is inactive.")
        log.info(f"Login successful for user ID {user.id}")
        return user


class RolePermissionRepository(Repository):
    """ Junction rows; grant/revoke address them by (role_id, permission_id). """

    def grant(self, session, actor_id, role_id, permission_id):
        return self.create(session, actor_id, role_id=role_id, permission_id=permission_id)

    def revoke(self, session, actor_id, role_id, permission_id):
        row = session.query(RoleToPermission).filter(
            RoleToPermission.role_id == role_id,
            RoleToPermission.permission_id == permission_id,
        ).first()
        if row is None:
            # Permission check first so an unauthorized caller learns nothing
            require_permission(session, actor_id, f"{self.prefix}.delete")
            raise NotFound(f"Role {role_id} does not hold permission {permission_id}.")
        return self.delete(session, actor_id, row.id)


roles = Repository(Role, "role", fields=("name", "description"), required=("name",), unique=("name",))
users = UserRepository(
    User, "user",
    fields=("username", "email", "role_id", "is_active"),
    required=("username", "email", "role_id"),
    unique=("username", "email"),
    references={"role_id": Role},
    extra_fields=("password",),
)
permissions = Repository(
    Permission, "permission", fields=("key", "label", "description"),
    required=("key", "label"), unique=("key",),
)
role_permissions = RolePermissionRepository(
    RoleToPermission, "role_permission",
    fields=("role_id", "permission_id"),
    required=("role_id", "permission_id"),
    unique=(("role_id", "permission_id"),),
    references={"role_id": Role, "permission_id": Permission},
)
locations = Repository(Location, "location", fields=("name",), required=("name",), unique=("name",))
salary_ranges = Repository(SalaryRange, "salary_range", fields=("label",), required=("label",))
categories = Repository(Category, "category", fields=("name",), required=("name",), unique=("name",))
companies = Repository(
    Company, "company", fields=("name", "website", "logo_path"), required=("name",), unique=("name",),
)
jobs = Repository(
    Job, "job",
    fields=("title", "description", "location_id", "salary_range_id", "category_id", "company_id"),
    required=("title", "description", "location_id", "salary_range_id", "category_id", "company_id"),
    unique=("title",),
    references={
        "location_id": Location,
        "salary_range_id": SalaryRange,
        "category_id": Category,
        "company_id": Company,
    },
)
