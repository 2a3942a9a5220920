"""ORM model for roles referenced by users."""

from sqlalchemy import Column, Integer, String

from app.models.base import Base


class Role(Base):
    """Named permission group. Seeded by migrations; read-only for this service."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(64), nullable=False, unique=True, index=True)
