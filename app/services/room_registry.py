import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.allocation import Allocation
from app.models.room import Room
from app.schemas.room import RoomFilter
from app.services.occupancy import annotate_occupancy
from app.utils.errors import DuplicateKeyError, InvalidInputError

logger = logging.getLogger(__name__)


def create_room(
    db: Session,
    room_number: str,
    capacity: int,
    has_ac: bool = False,
    has_attached_washroom: bool = False,
) -> Room:
    """
    Register a new room.

    Room numbers are unique (exact, case-sensitive match after trimming).
    """
    if not isinstance(room_number, str) or not room_number.strip():
        raise InvalidInputError("Room number is required")
    if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
        raise InvalidInputError("Capacity must be a positive integer")
    room_number = room_number.strip()

    existing = db.query(Room).filter(Room.room_number == room_number).first()
    if existing:
        logger.warning(f"Duplicate room number rejected: {room_number}")
        raise DuplicateKeyError(f'Room number "{room_number}" already exists')

    room = Room(
        room_number=room_number,
        capacity=capacity,
        has_ac=bool(has_ac),
        has_attached_washroom=bool(has_attached_washroom),
    )
    db.add(room)
    try:
        db.commit()
    except IntegrityError:
        # another request inserted the same number after our check
        db.rollback()
        logger.warning(f"Duplicate room number rejected on insert: {room_number}")
        raise DuplicateKeyError(f'Room number "{room_number}" already exists')
    db.refresh(room)
    logger.debug(f"Created room {room.id} ({room.room_number}), capacity {room.capacity}")
    return room


def list_rooms(db: Session, room_filter: Optional[RoomFilter] = None) -> List[dict]:
    """Rooms ordered by room number, each with its `occupied` count."""
    room_filter = room_filter or RoomFilter()
    query = db.query(Room)
    if room_filter.min_capacity:
        query = query.filter(Room.capacity >= room_filter.min_capacity)
    if room_filter.require_ac:
        query = query.filter(Room.has_ac.is_(True))
    if room_filter.require_washroom:
        query = query.filter(Room.has_attached_washroom.is_(True))
    rooms = query.order_by(Room.room_number).all()
    logger.debug(f"Retrieved {len(rooms)} rooms")
    return annotate_occupancy(db, rooms)


def delete_room(db: Session, room_id: int) -> bool:
    """
    Delete a room and every allocation referencing it.

    Both deletes are committed together. Returns False when no such room
    existed; that is not treated as an error.
    """
    purged = (
        db.query(Allocation)
        .filter(Allocation.room_id == room_id)
        .delete(synchronize_session=False)
    )
    deleted = db.query(Room).filter(Room.id == room_id).delete(synchronize_session=False)
    db.commit()
    if deleted:
        logger.debug(f"Deleted room {room_id} and {purged} allocations")
    else:
        logger.debug(f"Delete requested for missing room {room_id}")
    return bool(deleted)
