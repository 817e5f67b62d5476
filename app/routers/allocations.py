from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from app.db import get_db
from app.schemas.allocation import (
    AllocationCreate,
    AllocationResponse,
    AllocationResult,
    AllocationWithRoomResponse,
)
from app.services import allocation_ledger

router = APIRouter(
    prefix="/api",
    tags=["allocations"],
)


@router.post(
    "/allocate",
    response_model=AllocationResult,
    summary="Allocate a student to a room",
    description="Place one student in the chosen room if it still has a free bed.",
)
def allocate(request: AllocationCreate, db: Session = Depends(get_db)):
    """
    - **studentName**: student's name.
    - **studentNumber**: student's registration number.
    - **roomId**: ID of the chosen room.

    Returns the new allocation and the room it was placed in.
    """
    allocation, room = allocation_ledger.allocate_room(
        db,
        student_name=request.student_name,
        student_number=request.student_number,
        room_id=request.room_id,
    )
    return {
        "message": "Room allocated successfully",
        "allocation": allocation,
        "room": room,
    }


@router.get(
    "/allocations",
    response_model=List[AllocationWithRoomResponse],
    summary="List all allocations",
)
def get_allocations(db: Session = Depends(get_db)):
    """All allocations with room details, most recent first."""
    return allocation_ledger.list_allocations(db)


@router.get(
    "/allocations/room/{room_id}",
    response_model=List[AllocationResponse],
    summary="List allocations for a room",
)
def get_room_allocations(room_id: int, db: Session = Depends(get_db)):
    return allocation_ledger.list_allocations_by_room(db, room_id)
