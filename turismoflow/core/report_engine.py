"""
Financial / occupancy aggregator. Pure scoring. No I/O.
"""

import math
from typing import Iterable, List, Optional, Sequence

from turismoflow.core.capacity_engine import pax_total, trip_occupancy
from turismoflow.domain.models import (
    BoardingStatus,
    BoardingSummary,
    FleetTotals,
    Passenger,
    Trip,
    TripSummary,
)


def occupancy_pct(passengers: int, capacity: int) -> int:
    """round(100 * passengers / capacity), halves rounded up; 0 when there is no capacity."""
    if capacity <= 0:
        return 0
    return int(math.floor(100.0 * passengers / capacity + 0.5))


def filter_trips_by_date(
    trips: Iterable[Trip],
    start: Optional[str] = None,
    end: Optional[str] = None,
) -> List[Trip]:
    """
    Date filter over ISO "YYYY-MM-DD" strings (they sort correctly as text).

    - neither bound: every trip
    - start only: trips ON that day (not "from that day on")
    - start and end: inclusive range
    - end only: every trip
    """
    trips = list(trips)
    if not start:
        return trips
    if not end:
        return [t for t in trips if t.date == start]
    return [t for t in trips if start <= t.date <= end]


def _money(value: Optional[float]) -> float:
    return float(value or 0.0)


def summarize_trip(trip: Trip) -> TripSummary:
    occupied = trip_occupancy(trip)
    overbooked = pax_total(p for p in trip.passengers if p.is_overbooked)
    return TripSummary(
        trip_id=trip.id,
        date=trip.date,
        destination=trip.destination,
        occupied=occupied,
        capacity=trip.total_seats,
        overbooked_pax=overbooked,
        receivable_amount=math.fsum(_money(p.receivable_amount) for p in trip.passengers),
        is_full=occupied >= trip.total_seats,
        is_over_capacity=occupied > trip.total_seats,
        occupancy_pct=occupancy_pct(occupied, trip.total_seats),
    )


def compute_fleet_totals(trips: Sequence[Trip]) -> FleetTotals:
    passengers = [p for t in trips for p in t.passengers]
    total_pax = pax_total(passengers)
    total_capacity = sum(t.total_seats for t in trips)
    return FleetTotals(
        trip_count=len(trips),
        total_passengers=total_pax,
        total_capacity=total_capacity,
        overbooked_passengers=pax_total(p for p in passengers if p.is_overbooked),
        total_value=math.fsum(_money(p.total_value) for p in passengers),
        total_paid=math.fsum(_money(p.paid_amount) for p in passengers),
        total_receivable=math.fsum(_money(p.receivable_amount) for p in passengers),
        occupancy_pct=occupancy_pct(total_pax, total_capacity),
    )


def boarding_summary(passengers: Sequence[Passenger]) -> BoardingSummary:
    """People counts by check-in status."""

    def _count(status: BoardingStatus) -> int:
        return pax_total(p for p in passengers if p.boarding_status == status)

    return BoardingSummary(
        total_pax=pax_total(passengers),
        boarded_pax=_count(BoardingStatus.BOARDED),
        no_show_pax=_count(BoardingStatus.NO_SHOW),
        pending_pax=_count(BoardingStatus.PENDING),
    )
