"""SQLAlchemy declarative Base shared by the account models and Alembic."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
