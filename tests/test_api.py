"""End-to-end tests through the HTTP layer."""

from tests.conftest import OWNER_PASSWORD

GUEST = {
    "name": "Carla Souza",
    "email": "carla@example.com",
    "dateOfBirth": "2001-02-03T00:00:00Z",
    "document": "333.333.333-33",
}

NEW_EVENT = {
    "name": "Open Air",
    "description": "Concert",
    "categories": ["music"],
    "date": "2026-12-01T00:00:00Z",
    "location": {"address": "Parque", "city": "Recife", "state": "PE", "country": "Brasil"},
    "capacity": {"max": 300},
    "schedules": {"start": "2026-12-01T18:00:00Z", "end": "2026-12-01T23:00:00Z"},
    "inscriptionPrice": 25.5,
}


def register(client, user_id, event_id, **body):
    response = client.post("/api/inscription", json={"userId": user_id, "eventId": event_id, **body})
    assert response.status_code == 201, response.text
    return response.json()["inscription"]


def test_ticket_lifecycle(client, owner, attendee, event):
    inscription = register(client, attendee["id"], event["id"])
    assert inscription["status"] == "APROVADO"
    assert inscription["participation_status"] == "APROVADO"
    assert inscription["participants"]["document"] == attendee["cpf"]

    response = client.post(f"/api/event/validate-entry/{inscription['id']}", json={"eventCreatorId": owner["id"]})
    assert response.status_code == 200
    entered = response.json()["inscription"]
    assert entered["status"] == "USADO"
    assert entered["participation_status"] == "PARTICIPANDO"
    assert entered["checkin"]["in"] is not None

    response = client.post(f"/api/event/validate-exit/{inscription['id']}", json={"eventCreatorId": owner["id"]})
    assert response.status_code == 200
    left = response.json()["inscription"]
    assert left["participation_status"] == "PARTICIPADO"
    assert left["checkin"]["out"] is not None
    assert left["checkin"]["in"] == entered["checkin"]["in"]

    response = client.get(f"/api/event/dashboard/{owner['id']}")
    assert response.status_code == 200
    [summary] = response.json()["dashboardData"]
    assert summary["eventId"] == event["id"]
    assert summary["statusCounts"]["used"] == 1
    assert summary["participationStatusCounts"]["participated"] == 1


def test_entry_by_non_owner_is_forbidden(client, owner, attendee, event):
    inscription = register(client, attendee["id"], event["id"])

    response = client.post(f"/api/event/validate-entry/{inscription['id']}", json={"eventCreatorId": attendee["id"]})

    assert response.status_code == 403
    assert client.get(f"/api/inscription/{inscription['id']}").json()["status"] == "APROVADO"


def test_cancel_then_entry(client, owner, attendee, event):
    inscription = register(client, attendee["id"], event["id"])

    response = client.patch(f"/api/inscription/{inscription['id']}/cancel")
    assert response.status_code == 200
    assert response.json()["inscription"]["status"] == "EXPIRADO"
    assert response.json()["inscription"]["participation_status"] == "NAO_COMPARECEU"

    response = client.post(f"/api/event/validate-entry/{inscription['id']}", json={"eventCreatorId": owner["id"]})
    assert response.status_code == 400
    assert "expired" in response.json()["detail"]

    assert client.patch(f"/api/inscription/{inscription['id']}/cancel").status_code == 400


def test_duplicate_inscription_conflicts(client, owner, attendee, event):
    register(client, attendee["id"], event["id"], forAnotherOne=True, participants=GUEST)

    response = client.post(
        "/api/inscription",
        json={"userId": owner["id"], "eventId": event["id"], "forAnotherOne": True, "participants": GUEST},
    )

    assert response.status_code == 409


def test_missing_participant_fields(client, attendee, event):
    response = client.post(
        "/api/inscription",
        json={"userId": attendee["id"], "eventId": event["id"], "forAnotherOne": True, "participants": {"name": "X"}},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required participant fields: email, dateOfBirth, document"


def test_unknown_inscription(client):
    assert client.get("/api/inscription/64b7f0c2a1b2c3d4e5f60718").status_code == 404


def test_dashboard_without_events(client, attendee):
    response = client.get(f"/api/event/dashboard/{attendee['id']}")

    assert response.status_code == 200
    assert response.json()["dashboardData"] == []


def test_event_crud(client, owner, attendee):
    response = client.post("/api/event", json={**NEW_EVENT, "userId": owner["id"]})
    assert response.status_code == 201
    created = response.json()
    assert created["capacity"] == {"max": 300, "current": 0, "total": 0}
    assert created["type"] == "standard"

    response = client.patch(f"/api/event/{created['id']}", json={"userId": attendee["id"], "name": "Mine now"})
    assert response.status_code == 403

    response = client.patch(f"/api/event/{created['id']}", json={"userId": owner["id"], "name": "Open Air II"})
    assert response.status_code == 200
    assert response.json()["name"] == "Open Air II"

    response = client.get(f"/api/event/created-by/{owner['id']}")
    assert [e["id"] for e in response.json()] == [created["id"]]

    response = client.request("DELETE", f"/api/event/{created['id']}", json={"userId": owner["id"]})
    assert response.status_code == 200
    assert client.get(f"/api/event/{created['id']}").status_code == 404


def test_non_standard_event_rejected(client, owner):
    response = client.post("/api/event", json={**NEW_EVENT, "userId": owner["id"], "type": "vip"})

    assert response.status_code == 400


def test_request_validation_is_400(client):
    response = client.post("/api/inscription", json={"eventId": "x"})

    assert response.status_code == 400


def test_register_and_login(client):
    user = {
        "name": "Davi",
        "lastname": "Lima",
        "password": "Davi@2024",
        "dateOfBirth": "1995-07-10T00:00:00Z",
        "cpf": "444.444.444-44",
        "phone": "+55 31 97777-0000",
        "email": "davi@example.com",
    }
    response = client.post("/api/auth/register", json=user)
    assert response.status_code == 201
    assert "password" not in response.json()["user"]

    assert client.post("/api/auth/register", json=user).status_code == 409

    response = client.post("/api/auth/login", json={"email": "davi@example.com", "password": "Davi@2024"})
    assert response.status_code == 200
    assert response.json()["user"]["email"] == "davi@example.com"

    response = client.post("/api/auth/login", json={"email": "davi@example.com", "password": "Wrong@2024"})
    assert response.status_code == 401


def test_weak_password_rejected(client):
    response = client.post(
        "/api/auth/register",
        json={
            "name": "Eva",
            "lastname": "Reis",
            "password": "password",
            "dateOfBirth": "1999-01-01T00:00:00Z",
            "cpf": "555.555.555-55",
            "phone": "0",
            "email": "eva@example.com",
        },
    )

    assert response.status_code == 400


def test_owner_login(client, owner):
    response = client.post("/api/auth/login", json={"email": owner["email"], "password": OWNER_PASSWORD})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == owner["id"]
