"""
Read-side use cases: dashboard, seat map, pickup route, company profile.
Flow: repository -> pure engines -> result. No FastAPI.
"""

import logging
from typing import List, Optional, Tuple

from turismoflow.application.config import (
    DEFAULT_COMPANY_PROFILE,
    DEFAULT_FLEET_POLICY,
    DEFAULT_ROUTING_POLICY,
)
from turismoflow.core.report_engine import (
    boarding_summary,
    compute_fleet_totals,
    filter_trips_by_date,
    summarize_trip,
)
from turismoflow.core.route_engine import plan_pickup_route, routable_passengers
from turismoflow.core.seat_engine import allocate_seats, seat_rows
from turismoflow.domain.constraints import RoutingPolicy
from turismoflow.domain.models import (
    BoardingSummary,
    CompanyProfile,
    Dashboard,
    RoutePlan,
    Seat,
)
from turismoflow.infrastructure.repository import CrmRepository

_logger = logging.getLogger(__name__)


def build_dashboard(
    repository: CrmRepository,
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> Dashboard:
    trips = filter_trips_by_date(repository.list_trips(), start, end)
    return Dashboard(
        start=start or None,
        end=end or None,
        totals=compute_fleet_totals(trips),
        trips=[summarize_trip(t) for t in trips],
    )


def trip_seat_map(repository: CrmRepository, trip_id: str) -> Tuple[List[Seat], List[List[int]]]:
    """Seats of the trip (recomputed from its passenger list) and the row layout."""
    trip = repository.get_trip(trip_id)
    seats = allocate_seats(trip.passengers, trip.total_seats)
    return seats, seat_rows(trip.total_seats, trip.vehicle_type, DEFAULT_FLEET_POLICY)


def get_company_profile(repository: CrmRepository) -> CompanyProfile:
    """Stored profile, or the configured default when none has been saved."""
    return repository.get_company_profile() or DEFAULT_COMPANY_PROFILE


def save_company_profile(repository: CrmRepository, profile: CompanyProfile) -> CompanyProfile:
    if not profile.name.strip():
        raise ValueError("company name is required")
    stored = repository.save_company_profile(profile)
    _logger.info("Company profile saved: %s", stored.name)
    return stored


def plan_trip_route(
    repository: CrmRepository,
    trip_id: str,
    policy: RoutingPolicy = DEFAULT_ROUTING_POLICY,
) -> Tuple[RoutePlan, BoardingSummary]:
    """Pickup order + directions link for a trip, and its check-in summary."""
    trip = repository.get_trip(trip_id)
    company = get_company_profile(repository)
    plan = plan_pickup_route(trip, company, policy)
    summary = boarding_summary(routable_passengers(trip.passengers))
    _logger.info(
        "Route planned: trip=%s stops=%d distance=%.2f km",
        trip.id, len(plan.stops), plan.total_distance_km,
    )
    return plan, summary
