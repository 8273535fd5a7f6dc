"""
Base model class with common fields
"""

from sqlalchemy import Column, DateTime, Integer, func

from roomescape.core.database import Base


class BaseModel(Base):
    """
    Abstract base model with common fields
    """
    __abstract__ = True

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True
    )
    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
