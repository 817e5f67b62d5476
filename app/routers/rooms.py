from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db import get_db
from app.schemas.room import (
    RoomAvailabilityResponse,
    RoomCreate,
    RoomFilter,
    RoomOccupancyResponse,
    RoomResponse,
)
from app.services import occupancy, room_registry
import logging

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/rooms",
    tags=["rooms"],
)


@router.post("", response_model=RoomResponse, status_code=status.HTTP_201_CREATED)
def create_room(room: RoomCreate, db: Session = Depends(get_db)):
    """
    Register a new room.

    - **roomNumber**: unique room number.
    - **capacity**: number of beds, at least 1.
    - **hasAC** / **hasAttachedWashroom**: amenity flags, default false.
    """
    return room_registry.create_room(
        db,
        room_number=room.room_number,
        capacity=room.capacity,
        has_ac=room.has_ac,
        has_attached_washroom=room.has_attached_washroom,
    )


@router.get("", response_model=List[RoomOccupancyResponse])
def get_rooms(
    capacity: Optional[int] = Query(default=None, description="Minimum capacity"),
    ac: bool = False,
    washroom: bool = False,
    db: Session = Depends(get_db),
):
    """
    List rooms ordered by room number, each with its occupied bed count.
    """
    room_filter = RoomFilter(
        min_capacity=capacity, require_ac=ac, require_washroom=washroom
    )
    return room_registry.list_rooms(db, room_filter)


@router.get("/available", response_model=List[RoomAvailabilityResponse])
def get_available_rooms(
    room_type: Optional[int] = Query(default=None, alias="type", description="Exact room capacity"),
    ac: bool = False,
    washroom: bool = False,
    db: Session = Depends(get_db),
):
    """
    Search rooms that still have a free bed, smallest rooms first.
    """
    rooms = occupancy.search_available(
        db, capacity=room_type, beds_needed=1, require_ac=ac, require_washroom=washroom
    )
    logger.debug(f"Found {len(rooms)} available rooms for type={room_type}, ac={ac}, washroom={washroom}")
    return rooms


@router.delete("/{room_id}")
def delete_room(room_id: int, db: Session = Depends(get_db)):
    """
    Delete a room together with all of its allocations.
    Deleting a room that does not exist is not an error.
    """
    room_registry.delete_room(db, room_id)
    return {"message": "Room deleted successfully"}
