"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from rank_tracker.database import Base
from rank_tracker.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User account that owns tracked URLs."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    company = Column(String(255), nullable=False)

    # Relationships
    tracked_urls = relationship(
        "TrackedUrl",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
