"""Role store: lazily created roles and their assignment to accounts."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models import Role, User

logger = logging.getLogger(__name__)


def _find_role(db: Session, name: str) -> Role | None:
    return db.query(Role).filter(Role.name == name).first()


def ensure_role_exists(db: Session, name: str) -> Role:
    """
    Return the role with this name, creating it if absent. Flushes, does not commit.

    The insert runs in a savepoint: if another transaction created the same
    role first, only the savepoint is rolled back and the committed row is used.
    """
    role = _find_role(db, name)
    if role is not None:
        return role
    try:
        with db.begin_nested():
            role = Role(name=name)
            db.add(role)
    except IntegrityError:
        role = _find_role(db, name)
        if role is None:
            raise
        logger.info("Role created concurrently; using existing row", extra={"role": name})
        return role
    logger.info("Created role", extra={"role": name})
    return role


def assign_role(db: Session, user: User, name: str) -> Role:
    """Associate the named role with user (creating the role if needed). Idempotent."""
    role = ensure_role_exists(db, name)
    if role not in user.roles:
        user.roles.append(role)
        db.flush()
    return role


def roles_of(user: User) -> set[str]:
    return {role.name for role in user.roles}


def primary_role(user: User) -> str:
    """First assigned role (by role id), or "" when the account has none."""
    return user.roles[0].name if user.roles else ""
