from datetime import datetime, timezone

from sqlalchemy.orm import relationship
from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String
from app.db import Base


def utcnow():
    return datetime.now(timezone.utc)


class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    room_number = Column(String, unique=True, index=True, nullable=False)
    capacity = Column(Integer, nullable=False)
    has_ac = Column(Boolean, nullable=False, default=False)
    has_attached_washroom = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    allocations = relationship(
        "Allocation", back_populates="room", cascade="all, delete-orphan"
    )

    __table_args__ = (CheckConstraint("capacity >= 1", name="check_room_capacity"),)
