from datetime import date

import pytest
from factories import make_company, make_passenger, make_trip

from turismoflow.application.config import DEFAULT_COMPANY_PROFILE
from turismoflow.application.sample_data import seed_sample_data
from turismoflow.application.use_cases.operations import (
    build_dashboard,
    get_company_profile,
    plan_trip_route,
    save_company_profile,
    trip_seat_map,
)
from turismoflow.domain.errors import NotFoundError
from turismoflow.domain.models import BoardingStatus, CompanyProfile, SeatStatus, VehicleType


def test_dashboard_filters_by_day(repository):
    repository.add_trip(make_trip("t1", trip_date="2024-01-10", passengers=[make_passenger("a", 5)]))
    repository.add_trip(make_trip("t2", trip_date="2024-01-20"))

    day = build_dashboard(repository, "2024-01-10")
    both = build_dashboard(repository, "2024-01-10", "2024-01-20")

    assert [s.trip_id for s in day.trips] == ["t1"]
    assert day.totals.occupancy_pct == 50
    assert both.totals.trip_count == 2


def test_seat_map(repository):
    repository.add_trip(make_trip("t1", total_seats=5, vehicle_type=VehicleType.VAN, passengers=[
        make_passenger("a", 2), make_passenger("b", 1, is_overbooked=True),
    ]))
    seats, rows = trip_seat_map(repository, "t1")
    assert [s.status for s in seats][:4] == [
        SeatStatus.OCCUPIED, SeatStatus.OCCUPIED, SeatStatus.OVERBOOKED, SeatStatus.AVAILABLE,
    ]
    assert rows == [[1, 2, 3], [4, 5]]

    with pytest.raises(NotFoundError):
        trip_seat_map(repository, "missing")


def test_company_profile_defaults_then_saved(repository):
    assert get_company_profile(repository) == DEFAULT_COMPANY_PROFILE
    company = make_company()
    save_company_profile(repository, company)
    assert get_company_profile(repository) == company

    with pytest.raises(ValueError):
        save_company_profile(repository, CompanyProfile(name=" ", address="x"))


def test_route_uses_stored_company_and_counts_routable_only(repository):
    save_company_profile(repository, make_company(at=(0.0, 0.0)))
    repository.add_trip(make_trip("t1", passengers=[
        make_passenger("far", 2, at=(0.0, 2.0), boarding_status=BoardingStatus.BOARDED),
        make_passenger("near", 1, at=(0.0, 1.0)),
        make_passenger("ob", 3, at=(0.0, 0.5), is_overbooked=True),
    ]))

    plan, summary = plan_trip_route(repository, "t1")

    assert [s.passenger.id for s in plan.stops] == ["near", "far"]
    assert plan.origin_name == "Rua A, 1"
    assert (summary.total_pax, summary.boarded_pax, summary.pending_pax) == (3, 2, 1)


def test_seed_sample_data(repository):
    counts = seed_sample_data(repository, day=date(2024, 5, 1))

    assert counts == {"trips": 2, "passengers": 2, "partners": 2}
    trips = repository.list_trips()
    assert {t.destination for t in trips} == {"Jericoacoara", "Beach Park"}
    assert all(t.date == "2024-05-01" for t in trips)
    assert len(repository.list_partners()) == 2
    assert repository.get_company_profile() == DEFAULT_COMPANY_PROFILE
