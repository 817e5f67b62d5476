from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from app.db import Base
from app.models.room import utcnow


class Allocation(Base):
    __tablename__ = "allocations"

    id = Column(Integer, primary_key=True, index=True)
    room_id = Column(Integer, ForeignKey("rooms.id"), index=True, nullable=False)
    student_name = Column(String, nullable=False)
    student_number = Column(String, nullable=False)
    # one bed per allocation
    students_count = Column(Integer, nullable=False, default=1)
    # amenity snapshot taken from the room when the allocation is made
    needs_ac = Column(Boolean, nullable=False, default=False)
    needs_washroom = Column(Boolean, nullable=False, default=False)
    allocated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    room = relationship("Room", back_populates="allocations")
