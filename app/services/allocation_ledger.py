import logging
from typing import List, Tuple

from sqlalchemy.orm import Session, joinedload

from app.models.allocation import Allocation
from app.models.room import Room
from app.utils.errors import ConflictError, InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


def _required_text(value, message):
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(message)
    return value.strip()


def allocate_room(
    db: Session, student_name: str, student_number: str, room_id: int
) -> Tuple[Allocation, Room]:
    """
    Place one student in a chosen room.

    Steps run in a fixed order: resolve the room, count its allocations
    against capacity, then insert. The room row is locked for the duration
    on backends that support SELECT ... FOR UPDATE.
    """
    student_name = _required_text(student_name, "Student name is required")
    student_number = _required_text(student_number, "Student number is required")
    if room_id is None:
        raise InvalidInputError("Room selection is required")

    room = db.query(Room).filter(Room.id == room_id).with_for_update().first()
    if not room:
        logger.error(f"Room not found: {room_id}")
        raise NotFoundError("Room not found")

    occupied = db.query(Allocation).filter(Allocation.room_id == room.id).count()
    if occupied >= room.capacity:
        db.rollback()
        logger.error(f"Room {room.room_number} is full: {occupied}/{room.capacity}")
        raise ConflictError("Room is fully occupied")

    allocation = Allocation(
        room_id=room.id,
        student_name=student_name,
        student_number=student_number,
        students_count=1,
        needs_ac=room.has_ac,
        needs_washroom=room.has_attached_washroom,
    )
    db.add(allocation)
    db.commit()
    db.refresh(allocation)
    db.refresh(room)
    logger.debug(
        f"Allocated {student_number} to room {room.room_number} "
        f"({occupied + 1}/{room.capacity})"
    )
    return allocation, room


def list_allocations(db: Session) -> List[Allocation]:
    """All allocations with their room loaded, newest first."""
    allocations = (
        db.query(Allocation)
        .options(joinedload(Allocation.room))
        .order_by(Allocation.allocated_at.desc(), Allocation.id.desc())
        .all()
    )
    logger.debug(f"Retrieved {len(allocations)} allocations")
    return allocations


def list_allocations_by_room(db: Session, room_id: int) -> List[Allocation]:
    allocations = (
        db.query(Allocation)
        .filter(Allocation.room_id == room_id)
        .order_by(Allocation.allocated_at.desc(), Allocation.id.desc())
        .all()
    )
    logger.debug(f"Retrieved {len(allocations)} allocations for room {room_id}")
    return allocations
