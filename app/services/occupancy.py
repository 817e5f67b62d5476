from typing import Dict, Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.allocation import Allocation
from app.models.room import Room


def occupied_counts(db: Session) -> Dict[int, int]:
    """Map room id to number of allocations, for rooms that have any."""
    rows = (
        db.query(Allocation.room_id, func.count(Allocation.id))
        .group_by(Allocation.room_id)
        .all()
    )
    return {room_id: count for room_id, count in rows}


def room_row(room: Room, occupied: int) -> dict:
    row = {name: getattr(room, name) for name in room.__table__.columns.keys()}
    row["occupied"] = occupied
    return row


def annotate_occupancy(db: Session, rooms: Iterable[Room]) -> List[dict]:
    counts = occupied_counts(db)
    return [room_row(room, counts.get(room.id, 0)) for room in rooms]


def search_available(
    db: Session,
    capacity: Optional[int] = None,
    beds_needed: int = 1,
    require_ac: bool = False,
    require_washroom: bool = False,
) -> List[dict]:
    """
    Find rooms with at least `beds_needed` free beds.

    `capacity` is an exact match on the room's bed count (a "2-seater"), not a
    minimum. Results are ordered by capacity, then room number.
    """
    query = db.query(Room)
    if capacity:
        query = query.filter(Room.capacity == capacity)
    if require_ac:
        query = query.filter(Room.has_ac.is_(True))
    if require_washroom:
        query = query.filter(Room.has_attached_washroom.is_(True))
    rooms = query.order_by(Room.capacity, Room.room_number).all()

    available = []
    for row in annotate_occupancy(db, rooms):
        row["free_beds"] = row["capacity"] - row["occupied"]
        if row["free_beds"] >= beds_needed:
            available.append(row)
    return available
