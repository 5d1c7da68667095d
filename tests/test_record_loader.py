from factories import make_passenger, make_trip

from turismoflow.domain.models import BoardingStatus, VehicleType
from turismoflow.infrastructure.record_loader import (
    dump_company_profile,
    dump_trip,
    load_company_profile,
    load_coordinates,
    load_passenger,
    load_trip,
)


def test_load_trip_row_with_embedded_passengers():
    trip = load_trip({
        "id": "t1",
        "date": "2024-01-10",
        "time": "07:30",
        "vehicle_type": "VAN",
        "vehicle_model": "Sprinter",
        "total_seats": 15,
        "origin": "Av. Beira Mar",
        "destination": "Cumbuco",
        "stops": ["Caucaia"],
        "driver_name": None,
        "passengers": [
            {"id": "p1", "name": "Ana", "pax_count": 2, "boarding_coordinates": {"lat": -3.7, "lng": -38.5},
             "boarding_status": "boarded", "total_value": "150.5"},
            {"id": "p2", "name": "Bia"},
        ],
    })
    assert trip.vehicle_type == VehicleType.VAN
    assert trip.driver_name is None
    assert [p.id for p in trip.passengers] == ["p1", "p2"]
    assert trip.passengers[0].boarding_status == BoardingStatus.BOARDED
    assert trip.passengers[0].total_value == 150.5
    assert trip.passengers[1].pax_count == 1
    assert trip.passengers[1].boarding_coordinates is None


def test_incomplete_coordinates_are_dropped():
    assert load_coordinates(None) is None
    assert load_coordinates({"lat": 1.0}) is None


def test_dump_trip_rows_use_snake_case_values():
    trip = make_trip(passengers=[make_passenger("a", 2, at=(1.0, 2.0))])
    row = dump_trip(trip, include_passengers=True)

    assert row["vehicle_type"] == "BUS"
    assert "passengers" not in dump_trip(trip)
    pax = row["passengers"][0]
    assert pax["trip_id"] == trip.id
    assert pax["boarding_coordinates"] == {"lat": 1.0, "lng": 2.0}
    assert pax["boarding_status"] == "pending"
    assert load_passenger(pax) == trip.passengers[0]


def test_company_profile_row():
    row = {"name": "Agência", "address": "Rua 1", "address_coordinates": {"lat": 1, "lng": 2}}
    profile = load_company_profile(row)
    assert profile.address_coordinates.lat == 1.0
    assert dump_company_profile(profile)["address_coordinates"] == {"lat": 1.0, "lng": 2.0}


def test_trip_row_without_seats_or_model_gets_vehicle_defaults():
    bus = load_trip({"id": "t1", "destination": "Jericoacoara"})
    van = load_trip({"id": "t2", "vehicle_type": "VAN", "total_seats": 0, "vehicle_model": ""})

    assert (bus.total_seats, bus.vehicle_model) == (50, "Genérico")
    assert (van.total_seats, van.vehicle_model) == (15, "Genérico")
