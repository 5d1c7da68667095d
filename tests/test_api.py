import pytest
from fastapi.testclient import TestClient

from turismoflow.api.main import create_app
from turismoflow.application.config import Settings
from turismoflow.domain.errors import BackendSetupRequired, GeocodingError
from turismoflow.domain.models import Coordinates, GeocodeCandidate
from turismoflow.infrastructure.repository import InMemoryCrmRepository


class FakeGeocoder:
    def search(self, query):
        if query == "boom":
            raise GeocodingError("Geocoding failed (HTTP 503)")
        return [GeocodeCandidate(label="Rua A, Centro, Fortaleza, CE", short_label="Rua A, Centro, Fortaleza",
                                 coordinates=Coordinates(-3.7, -38.5))]


class FakeDrafter:
    def draft_partner_email(self, partner_name, passenger_count, trip_details, passenger_names):
        return f"Olá {partner_name}, {passenger_count} passageiros para {trip_details}"


class BrokenRepository(InMemoryCrmRepository):
    def list_trips(self):
        raise BackendSetupRequired("Table 'trips' not found in the backend")


def _client(repository=None):
    app = create_app(
        settings=Settings(seed_sample_data=False),
        repository=repository if repository is not None else InMemoryCrmRepository(),
        geocoder=FakeGeocoder(),
        drafter=FakeDrafter(),
    )
    return TestClient(app)


@pytest.fixture
def client():
    return _client()


def _create_trip(client, seats=4):
    response = client.post("/trips", json={"destination": "Jericoacoara", "total_seats": seats, "date": "2024-01-10"})
    assert response.status_code == 200
    return response.json()


def test_root(client):
    assert client.get("/").json()["status"] == "ok"


def test_trip_booking_flow(client):
    trip = _create_trip(client)
    assert trip["vehicle_type"] == "BUS"
    assert trip["origin"] == "Av. Beira Mar, 4000, Fortaleza - CE"

    ok = client.post(f"/trips/{trip['id']}/passengers", json={"name": "Ana", "pax_count": 3}).json()
    over = client.post(f"/trips/{trip['id']}/passengers", json={
        "name": "Família Souza", "pax_count": 2, "total_value": 400, "paid_amount": 100,
    }).json()

    assert ok["is_overbooked"] is False
    assert over["is_overbooked"] is True
    assert over["receivable_amount"] == 300.0

    stored = client.get(f"/trips/{trip['id']}").json()
    assert [p["name"] for p in stored["passengers"]] == ["Ana", "Família Souza"]

    queue = client.get("/overbooking").json()
    assert queue[0]["trip_id"] == trip["id"]
    assert [p["id"] for p in queue[0]["passengers"]] == [over["id"]]


def test_seat_map(client):
    trip = _create_trip(client, seats=5)
    for _ in range(3):
        client.post(f"/trips/{trip['id']}/passengers", json={"name": "G", "pax_count": 2})

    seat_map = client.get(f"/trips/{trip['id']}/seats").json()

    assert seat_map["available_seats"] == 0
    assert seat_map["rows"] == [[1, 2, 3, 4], [5]]
    assert [s["status"] for s in seat_map["seats"]] == ["occupied"] * 4 + ["overbooked"]


def test_route_plan(client):
    trip = _create_trip(client)
    client.post(f"/trips/{trip['id']}/passengers", json={
        "name": "Ana", "phone": "+55 85 9999-0000", "boarding_location": "Hotel Praiano",
        "boarding_coordinates": {"lat": -3.725, "lng": -38.495},
    })

    plan = client.get(f"/trips/{trip['id']}/route").json()

    assert plan["stops"][0]["order"] == 1
    assert plan["stops"][0]["whatsapp_url"] == "https://wa.me/558599990000"
    assert "destination=Hotel%20Praiano" in plan["directions_url"]
    assert plan["boarding"]["pending_pax"] == 1


def test_boarding_status_and_reassign(client):
    trip = _create_trip(client, seats=1)
    pax = client.post(f"/trips/{trip['id']}/passengers", json={"name": "Grupo", "pax_count": 4}).json()
    partner = client.post("/partners", json={"name": "Ceará Tours"}).json()

    bad = client.post(f"/trips/{trip['id']}/passengers/{pax['id']}/status", json={"status": "lost"})
    assert bad.status_code == 400
    boarded = client.post(f"/trips/{trip['id']}/passengers/{pax['id']}/status", json={"status": "no_show"})
    assert boarded.json()["boarding_status"] == "no_show"

    moved = client.post(f"/trips/{trip['id']}/passengers/{pax['id']}/reassign", json={"partner_id": partner["id"]})
    assert moved.json()["assigned_partner_id"] == partner["id"]
    assert client.get("/overbooking").json() == []

    missing = client.post(f"/trips/{trip['id']}/passengers/{pax['id']}/reassign", json={"partner_id": "x"})
    assert missing.status_code == 404


def test_partners_and_email_draft(client):
    partner = client.post("/partners", json={"name": "Nordeste Vip", "contact_person": "Paulo"}).json()
    updated = client.put(f"/partners/{partner['id']}", json={"phone": "123"}).json()
    assert updated["phone"] == "123" and updated["contact_person"] == "Paulo"
    assert len(client.get("/partners").json()) == 1

    trip = _create_trip(client, seats=1)
    pax = client.post(f"/trips/{trip['id']}/passengers", json={"name": "Grupo", "pax_count": 2}).json()
    draft = client.post(
        f"/partners/{partner['id']}/email-draft",
        json={"trip_id": trip["id"], "passenger_id": pax["id"]},
    ).json()
    assert draft["draft"] == "Olá Nordeste Vip, 2 passageiros para Jericoacoara às 08:00"

    missing = client.post(f"/partners/{partner['id']}/email-draft", json={"trip_id": trip["id"], "passenger_id": "x"})
    assert missing.status_code == 404


def test_dashboard(client):
    _create_trip(client)
    client.post("/trips", json={"destination": "Beach Park", "vehicle_type": "VAN", "date": "2024-01-20"})

    day = client.get("/dashboard", params={"start": "2024-01-10"}).json()
    span = client.get("/dashboard", params={"start": "2024-01-10", "end": "2024-01-20"}).json()

    assert day["totals"]["trip_count"] == 1
    assert span["totals"]["trip_count"] == 2
    assert span["totals"]["total_capacity"] == 19


def test_company_profile(client):
    assert client.get("/company").json()["name"] == "TurismoFlow Agência"
    saved = client.put("/company", json={"name": "Nova", "address": "Rua B", "address_coordinates": {"lat": 1, "lng": 2}})
    assert saved.status_code == 200
    assert client.get("/company").json()["address_coordinates"] == {"lat": 1.0, "lng": 2.0}
    assert client.put("/company", json={"name": "", "address": "x"}).status_code == 400


def test_geocode(client):
    results = client.get("/geocode", params={"q": "Rua A"}).json()
    assert results[0]["coordinates"] == {"lat": -3.7, "lng": -38.5}
    assert client.get("/geocode", params={"q": "boom"}).status_code == 502


def test_seed(client):
    counts = client.post("/seed").json()
    assert counts == {"trips": 2, "passengers": 2, "partners": 2}
    assert len(client.get("/trips").json()) == 2


def test_error_mapping():
    client = _client(BrokenRepository())
    response = client.get("/trips")
    assert response.status_code == 503
    assert response.json()["detail"]["setup_required"] is True

    assert _client().get("/trips/unknown").status_code == 404
    assert _client().post("/trips", json={"destination": "X", "total_seats": 0}).status_code == 400
