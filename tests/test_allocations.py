import pytest
from fastapi import status
from fastapi.testclient import TestClient
from app.main import app
from app.models.allocation import Allocation
from tests.conf_tests import client, clear_db, test_db, make_room, make_allocation


@pytest.fixture
def test_room(test_db):
    return make_room(test_db, "A-101", 2, has_ac=True)


def allocate(student_name, student_number, room_id):
    return client.post(
        "/api/allocate",
        json={
            "studentName": student_name,
            "studentNumber": student_number,
            "roomId": room_id,
        },
    )


def free_beds(room_number):
    rooms = client.get("/api/rooms").json()
    room = next(room for room in rooms if room["roomNumber"] == room_number)
    return room["capacity"] - room["occupied"]


# Tests
def test_allocate_success(test_room):
    response = allocate("  Asha ", " S1 ", test_room.id)
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["message"] == "Room allocated successfully"
    allocation = data["allocation"]
    assert allocation["studentName"] == "Asha"
    assert allocation["studentNumber"] == "S1"
    assert allocation["roomId"] == test_room.id
    assert allocation["studentsCount"] == 1
    assert allocation["needsAC"] is True
    assert allocation["needsWashroom"] is False
    assert allocation["allocatedAt"].endswith(("Z", "+00:00"))
    assert data["room"]["roomNumber"] == "A-101"


def test_allocate_room_not_found(test_db):
    response = allocate("Asha", "S1", 9999)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Room not found"
    assert test_db.query(Allocation).count() == 0


def test_allocate_full_room(test_room, test_db):
    make_allocation(test_db, test_room, "Asha", "S1")
    make_allocation(test_db, test_room, "Bo", "S2")

    response = allocate("Cy", "S3", test_room.id)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["detail"] == "Room is fully occupied"
    assert test_db.query(Allocation).count() == 2


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"studentName": " ", "studentNumber": "S1", "roomId": 1}, "Student name is required"),
        ({"studentName": "Asha", "studentNumber": "", "roomId": 1}, "Student number is required"),
        ({"studentName": "Asha", "studentNumber": "S1"}, "roomId"),
        ({"studentName": "Asha", "studentNumber": "S1", "roomId": True}, "roomId"),
        ({"studentName": "Asha", "studentNumber": "S1", "roomId": "1"}, "roomId"),
    ],
)
def test_allocate_invalid_input(payload, message, test_db):
    response = client.post("/api/allocate", json=payload)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert message in response.json()["detail"]
    assert test_db.query(Allocation).count() == 0


def test_allocation_scenario(test_room):
    assert allocate("Asha", "S1", test_room.id).status_code == status.HTTP_200_OK
    assert free_beds("A-101") == 1
    assert allocate("Bo", "S2", test_room.id).status_code == status.HTTP_200_OK
    assert free_beds("A-101") == 0

    response = allocate("Cy", "S3", test_room.id)
    assert response.status_code == status.HTTP_409_CONFLICT
    assert len(client.get(f"/api/allocations/room/{test_room.id}").json()) == 2
    assert client.get("/api/rooms/available?type=2").json() == []

    assert client.delete(f"/api/rooms/{test_room.id}").status_code == status.HTTP_200_OK
    names = [a["studentName"] for a in client.get("/api/allocations").json()]
    assert "Asha" not in names
    assert "Bo" not in names
    rooms = [room["roomNumber"] for room in client.get("/api/rooms").json()]
    assert "A-101" not in rooms


def test_get_allocations_newest_first_with_room(test_db):
    room_a = make_room(test_db, "A-1", 2)
    room_b = make_room(test_db, "B-1", 1, has_attached_washroom=True)
    assert allocate("Asha", "S1", room_a.id).status_code == status.HTTP_200_OK
    assert allocate("Bo", "S2", room_b.id).status_code == status.HTTP_200_OK

    response = client.get("/api/allocations")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [a["studentName"] for a in data] == ["Bo", "Asha"]
    assert data[0]["room"]["roomNumber"] == "B-1"
    assert data[0]["needsWashroom"] is True
    assert data[1]["room"]["id"] == room_a.id


def test_get_allocations_by_room(test_db):
    room_a = make_room(test_db, "A-1", 3)
    room_b = make_room(test_db, "B-1", 3)
    allocate("Asha", "S1", room_a.id)
    allocate("Bo", "S2", room_b.id)
    allocate("Cy", "S3", room_a.id)

    response = client.get(f"/api/allocations/room/{room_a.id}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [a["studentName"] for a in data] == ["Cy", "Asha"]
    assert all(a["roomId"] == room_a.id for a in data)


def test_get_allocations_by_unknown_room():
    response = client.get("/api/allocations/room/9999")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_internal_error_is_opaque(monkeypatch):
    def broken(db):
        raise RuntimeError("database connection string leaked")

    monkeypatch.setattr("app.services.allocation_ledger.list_allocations", broken)
    safe_client = TestClient(app, raise_server_exceptions=False)
    response = safe_client.get("/api/allocations")
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Internal server error"}


def test_health():
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert "running" in response.json()["message"]
