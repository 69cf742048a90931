from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func, true,
)
from sqlalchemy.orm import declarative_base, declared_attr, relationship

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


class AuditMixin:
    """ created_by/updated_by/created_at/updated_at carried by every table. """

    @declared_attr
    def created_by(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=True)

    @declared_attr
    def updated_by(cls):
        return Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    @declared_attr
    def creator(cls):
        return _audit_user_relationship(cls, "created_by")

    @declared_attr
    def updater(cls):
        return _audit_user_relationship(cls, "updated_by")


def _audit_user_relationship(cls, column):
    options = {}
    if cls.__name__ == "User":
        # self-referential many-to-one
        options["remote_side"] = "User.id"
    return relationship("User", foreign_keys=f"{cls.__name__}.{column}", lazy="selectin", **options)


class Role(AuditMixin, Base):
    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    description = Column(Text)

    # Deleting the acting user removes the roles they created or last touched
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE", use_alter=True, name="fk_roles_created_by_users"),
        nullable=True,
    )
    updated_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE", use_alter=True, name="fk_roles_updated_by_users"),
        nullable=True,
    )

    users = relationship("User", back_populates="role", foreign_keys="User.role_id", passive_deletes="all")
    permissions = relationship(
        "Permission", secondary="role_to_permissions", lazy="selectin", viewonly=True,
        order_by="Permission.key",
    )

    def __repr__(self):
        return f"<Role {self.name}>"


class User(AuditMixin, Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(150), unique=True, nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())

    role = relationship("Role", back_populates="users", foreign_keys=[role_id], lazy="selectin")
    password = relationship(
        "Password", back_populates="user", uselist=False, foreign_keys="Password.user_id",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self):
        return f"<User {self.username}>"


class Password(AuditMixin, Base):
    __tablename__ = "passwords"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)

    user = relationship("User", back_populates="password", foreign_keys=[user_id])


class Permission(AuditMixin, Base):
    __tablename__ = "permissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    key = Column(String(100), unique=True, nullable=False, index=True)
    label = Column(String(150), nullable=False)
    description = Column(Text)

    def __repr__(self):
        return f"<Permission {self.key}>"


class RoleToPermission(AuditMixin, Base):
    __tablename__ = "role_to_permissions"
    __table_args__ = (
        UniqueConstraint("role_id", "permission_id", name="uq_role_to_permissions_role_permission"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    role_id = Column(Integer, ForeignKey("roles.id", ondelete="CASCADE"), nullable=False)
    permission_id = Column(Integer, ForeignKey("permissions.id", ondelete="CASCADE"), nullable=False)

    role = relationship("Role", lazy="selectin")
    permission = relationship("Permission", lazy="selectin")


class Location(AuditMixin, Base):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), unique=True, nullable=False)


class SalaryRange(AuditMixin, Base):
    __tablename__ = "salary_ranges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    label = Column(String(100), nullable=False)


class Category(AuditMixin, Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), unique=True, nullable=False)


class Company(AuditMixin, Base):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False)
    website = Column(String(255))
    logo_path = Column(String(255))

    # Apply selectinload to efficiently load related jobs
    jobs = relationship("Job", back_populates="company", lazy="selectin", passive_deletes="all")


class Job(AuditMixin, Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), unique=True, nullable=False)
    description = Column(Text, nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id", ondelete="RESTRICT"), nullable=False)
    salary_range_id = Column(Integer, ForeignKey("salary_ranges.id", ondelete="RESTRICT"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="RESTRICT"), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="RESTRICT"), nullable=False)

    # Jobs are only ever posted by a user, never seeded
    created_by = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    updated_by = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)

    location = relationship("Location", lazy="selectin")
    salary_range = relationship("SalaryRange", lazy="selectin")
    category = relationship("Category", lazy="selectin")
    company = relationship("Company", back_populates="jobs", lazy="selectin")
