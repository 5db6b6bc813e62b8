"""Tracked URL model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from rank_tracker.database import Base
from rank_tracker.models.mixins import TimestampMixin


class TrackedUrl(Base, TimestampMixin):
    """A (search phrase, location, url) tuple registered for rank checks."""

    __tablename__ = "tracked_urls"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    search_phrase = Column(String(255), nullable=False)
    location = Column(String(255), nullable=False)
    url = Column(Text, nullable=False)

    # Relationships
    user = relationship("User", back_populates="tracked_urls")
