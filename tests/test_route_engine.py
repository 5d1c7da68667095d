import pytest
from factories import make_company, make_passenger, make_trip

from turismoflow.application.config import DEFAULT_ROUTING_POLICY
from turismoflow.core.route_engine import (
    build_directions_url,
    haversine_km,
    order_pickups,
    phone_link,
    plan_pickup_route,
    resolve_origin,
    whatsapp_link,
)
from turismoflow.domain.models import Coordinates

BASE = "https://www.google.com/maps/dir/?api=1"
ORIGIN = Coordinates(lat=0.0, lng=0.0)


@pytest.fixture
def abc():
    return [
        make_passenger("A", at=(0.0, 1.0), location="Hotel A"),
        make_passenger("B", at=(0.0, 3.0), location="Hotel B"),
        make_passenger("C", at=(0.0, 2.0), location="Hotel C"),
    ]


def test_haversine_one_degree_on_equator():
    assert haversine_km(ORIGIN, Coordinates(0.0, 1.0)) == pytest.approx(111.19, abs=0.01)
    assert haversine_km(ORIGIN, ORIGIN) == 0.0


def test_nearest_first_order(abc):
    assert [p.id for p in order_pickups(ORIGIN, abc)] == ["A", "C", "B"]


def test_link_waypoints_exclude_final_stop(abc):
    url = build_directions_url("Agência", order_pickups(ORIGIN, abc), BASE)
    assert url == (
        BASE
        + "&origin=Ag%C3%AAncia"
        + "&destination=Hotel%20B"
        + "&waypoints=Hotel%20A|Hotel%20C"
    )


def test_link_deduplicates_addresses():
    ordered = [
        make_passenger("1", location="Hotel X"),
        make_passenger("2", location="Hotel X"),
        make_passenger("3", location="Praia, 10"),
    ]
    url = build_directions_url("Base", ordered, BASE)
    assert url.endswith("&destination=Praia%2C%2010&waypoints=Hotel%20X")


def test_link_without_passengers_has_origin_only():
    assert build_directions_url("Base", [], BASE) == BASE + "&origin=Base"


def test_overbooked_and_partner_groups_never_routed(abc):
    passengers = abc + [
        make_passenger("OB", at=(0.0, 0.1), is_overbooked=True),
        make_passenger("PT", at=(0.0, 0.2), assigned_partner_id="p1"),
    ]
    ids = [p.id for p in order_pickups(ORIGIN, passengers)]
    assert "OB" not in ids and "PT" not in ids
    assert ids == ["A", "C", "B"]


def test_passengers_without_coordinates_go_last_in_input_order():
    passengers = [
        make_passenger("n1"),
        make_passenger("far", at=(0.0, 5.0)),
        make_passenger("n2"),
        make_passenger("near", at=(0.0, 1.0)),
    ]
    assert [p.id for p in order_pickups(ORIGIN, passengers)] == ["near", "far", "n1", "n2"]


def test_ties_keep_input_order():
    passengers = [
        make_passenger("east", at=(0.0, 1.0)),
        make_passenger("west", at=(0.0, -1.0)),
    ]
    assert [p.id for p in order_pickups(ORIGIN, passengers)][0] == "east"


def test_empty_passenger_list():
    assert order_pickups(ORIGIN, []) == []


def test_resolve_origin_placeholder_uses_company():
    company = make_company(at=(-3.7, -38.5))
    trip = make_trip(origin=DEFAULT_ROUTING_POLICY.origin_placeholder)
    name, coords = resolve_origin(trip, company, DEFAULT_ROUTING_POLICY)
    assert name == company.address
    assert coords == Coordinates(-3.7, -38.5)

    name, _ = resolve_origin(make_trip(origin="Terminal Rodoviário"), company, DEFAULT_ROUTING_POLICY)
    assert name == "Terminal Rodoviário"


def test_resolve_origin_without_company_coordinates_falls_back():
    _, coords = resolve_origin(make_trip(), make_company(at=None), DEFAULT_ROUTING_POLICY)
    assert coords == Coordinates(DEFAULT_ROUTING_POLICY.fallback_lat, DEFAULT_ROUTING_POLICY.fallback_lng)


def test_plan_pickup_route(abc):
    plan = plan_pickup_route(make_trip(passengers=abc), make_company(), DEFAULT_ROUTING_POLICY)

    assert [s.order for s in plan.stops] == [1, 2, 3]
    assert [s.passenger.id for s in plan.stops] == ["A", "C", "B"]
    assert plan.total_distance_km == pytest.approx(3 * 111.19, abs=0.05)
    assert plan.origin_name == "Rua A, 1"
    assert "&waypoints=Hotel%20A|Hotel%20C" in plan.directions_url


def test_plan_is_repeatable(abc):
    trip, company = make_trip(passengers=abc), make_company()
    assert plan_pickup_route(trip, company, DEFAULT_ROUTING_POLICY) == plan_pickup_route(
        trip, company, DEFAULT_ROUTING_POLICY
    )


def test_contact_links():
    assert whatsapp_link("+55 (85) 99999-9999") == "https://wa.me/5585999999999"
    assert phone_link("+55 85 1234") == "tel:+55 85 1234"
