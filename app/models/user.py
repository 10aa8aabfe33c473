"""ORM models for storefront accounts and their roles (auth and RBAC)."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Table, func
from sqlalchemy.orm import relationship

from app.models.base import Base

# Many-to-many association; the composite primary key keeps assignment idempotent.
user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", Integer, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(Base):
    """Named role (e.g. 'Admin', 'User'), created the first time it is requested."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(64), nullable=False, unique=True, index=True)


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    username keeps the trimmed, case-preserved value supplied at registration;
    username_normalized (trimmed, lower-cased) carries the uniqueness constraint
    and is what logins and uniqueness checks match against.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False)
    username_normalized = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    roles = relationship(
        Role,
        secondary=user_roles,
        order_by=Role.id,
        lazy="selectin",
    )
