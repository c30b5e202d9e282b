from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from jobboard.database import Base


class Listing(Base):
    """A job posting. Owned by the user who created it."""

    __tablename__ = "listings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # Set once at creation from the session identity
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    salary = Column(String(50), nullable=False)
    tags = Column(String(255))
    company = Column(String(255))
    address = Column(String(255))
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    phone = Column(String(50))
    email = Column(String(255), nullable=False)
    requirements = Column(Text)
    benefits = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    user = relationship("User", back_populates="listings")
