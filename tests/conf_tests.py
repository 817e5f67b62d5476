import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.orm import sessionmaker

from app.main import app
from app.db import Base, build_engine, get_db
from app.models.allocation import Allocation
from app.models.room import Room

# Test database setup
if not os.path.exists("./out"):
    os.makedirs("./out")

SQLALCHEMY_DATABASE_URL = "sqlite:///./out/tests.db"
engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create test tables
Base.metadata.create_all(bind=engine)


# Dependency override
def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db

client = TestClient(app)


# Fixtures
@pytest.fixture(autouse=True)
def clear_db():
    """Clear all data from all tables after each test"""
    with engine.connect() as conn:
        trans = conn.begin()
        conn.execute(text("PRAGMA foreign_keys = OFF"))
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())
        conn.execute(text("PRAGMA foreign_keys = ON"))
        trans.commit()


@pytest.fixture
def test_db():
    """Provide a database session for testing"""
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def make_room(db, room_number, capacity, has_ac=False, has_attached_washroom=False):
    """Insert a room directly, bypassing the API"""
    room = Room(
        room_number=room_number,
        capacity=capacity,
        has_ac=has_ac,
        has_attached_washroom=has_attached_washroom,
    )
    db.add(room)
    db.commit()
    db.refresh(room)
    return room


def make_allocation(db, room, student_name, student_number):
    """Insert an allocation directly, bypassing the capacity check"""
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
    return allocation
