"""
Trip and booking use cases. Orchestrates domain + persistence. No FastAPI.
"""

import logging
import uuid
from datetime import date
from typing import List, Optional, Sequence, Union

from turismoflow.application.config import (
    DEFAULT_FLEET_POLICY,
    DEFAULT_ROUTING_POLICY,
    DEFAULT_TRIP_TIME,
    DEFAULT_VEHICLE_MODEL,
)
from turismoflow.core.capacity_engine import evaluate_booking
from turismoflow.core.seat_engine import default_seats
from turismoflow.domain.constraints import RoutingPolicy
from turismoflow.domain.models import (
    BoardingStatus,
    CompanyProfile,
    Coordinates,
    Passenger,
    Trip,
    VehicleType,
)
from turismoflow.infrastructure.repository import CrmRepository

_logger = logging.getLogger(__name__)


def new_id() -> str:
    return str(uuid.uuid4())


def parse_stops(stops: Union[str, Sequence[str], None]) -> List[str]:
    """Comma-separated text (or list) -> trimmed stop names, blanks dropped."""
    if stops is None:
        return []
    items = stops.split(",") if isinstance(stops, str) else list(stops)
    return [s.strip() for s in items if s and s.strip()]


def create_trip(
    repository: CrmRepository,
    company: Optional[CompanyProfile],
    destination: str,
    vehicle_type: VehicleType = VehicleType.BUS,
    total_seats: Optional[int] = None,
    trip_date: Optional[str] = None,
    time: Optional[str] = None,
    vehicle_model: Optional[str] = None,
    origin: Optional[str] = None,
    stops: Union[str, Sequence[str], None] = None,
    driver_name: Optional[str] = None,
    guide_name: Optional[str] = None,
    policy: RoutingPolicy = DEFAULT_ROUTING_POLICY,
) -> Trip:
    """
    Create a trip with no passengers.

    - total_seats defaults from the vehicle type (bus 50, other 15); must be > 0.
    - An empty or placeholder origin becomes the company address.
    """
    if not destination or not destination.strip():
        raise ValueError("destination is required")
    seats = default_seats(vehicle_type, DEFAULT_FLEET_POLICY) if total_seats is None else int(total_seats)
    if seats <= 0:
        raise ValueError("total_seats must be a positive integer")

    resolved_origin = origin or ""
    if company is not None and (not resolved_origin or resolved_origin == policy.origin_placeholder):
        resolved_origin = company.address

    trip = Trip(
        id=new_id(),
        date=trip_date or date.today().isoformat(),
        time=time or DEFAULT_TRIP_TIME,
        vehicle_type=vehicle_type,
        vehicle_model=vehicle_model or DEFAULT_VEHICLE_MODEL,
        total_seats=seats,
        origin=resolved_origin or policy.origin_placeholder,
        destination=destination.strip(),
        stops=parse_stops(stops),
        driver_name=driver_name or None,
        guide_name=guide_name or None,
    )
    stored = repository.add_trip(trip)
    _logger.info(
        "Trip created: id=%s date=%s destination=%s seats=%d",
        stored.id, stored.date, stored.destination, stored.total_seats,
    )
    return stored


def book_passenger(
    repository: CrmRepository,
    trip_id: str,
    name: str,
    pax_count: int = 1,
    phone: str = "",
    email: str = "",
    children_count: int = 0,
    children_ages: Optional[str] = None,
    total_value: float = 0.0,
    paid_amount: float = 0.0,
    boarding_location: str = "",
    address_number: str = "",
    boarding_coordinates: Optional[Coordinates] = None,
    boarding_time: Optional[str] = None,
    notes: Optional[str] = None,
) -> Passenger:
    """
    Book a group onto a trip.

    The overbooking flag is decided against the trip as stored at the moment the
    passenger is appended (the repository does both under one lock), and never
    revisited afterwards. receivable = total - paid at booking time.
    """
    if pax_count < 1:
        raise ValueError("pax_count must be at least 1")
    if children_count < 0:
        raise ValueError("children_count cannot be negative")

    location = boarding_location.strip() if boarding_location else ""
    if location and address_number and address_number.strip():
        location = f"{location}, {address_number.strip()}"

    def build(trip: Trip) -> Passenger:
        return Passenger(
            id=new_id(),
            name=name,
            phone=phone or "",
            email=email or "",
            pax_count=pax_count,
            children_count=children_count,
            children_ages=children_ages or None,
            total_value=float(total_value or 0.0),
            paid_amount=float(paid_amount or 0.0),
            receivable_amount=float(total_value or 0.0) - float(paid_amount or 0.0),
            boarding_location=location or trip.origin,
            boarding_coordinates=boarding_coordinates,
            boarding_time=boarding_time or trip.time,
            notes=notes or None,
            is_overbooked=evaluate_booking(trip, pax_count),
        )

    stored = repository.book_passenger(trip_id, build)

    if stored.is_overbooked:
        _logger.warning("Overbooking: trip=%s group=%s pax=%d", trip_id, stored.name, stored.pax_count)
    else:
        _logger.info("Passenger booked: trip=%s group=%s pax=%d", trip_id, stored.name, stored.pax_count)
    return stored


def update_boarding_status(
    repository: CrmRepository,
    trip_id: str,
    passenger_id: str,
    status: Union[BoardingStatus, str],
) -> Passenger:
    """Day-of-operation check-in: pending | boarded | no_show."""
    try:
        status = BoardingStatus(status)
    except ValueError:
        raise ValueError(f"Invalid boarding status {status!r}; allowed: pending, boarded, no_show") from None
    passenger = repository.update_passenger(trip_id, passenger_id, boarding_status=status)
    _logger.info("Boarding status: trip=%s passenger=%s status=%s", trip_id, passenger_id, status.value)
    return passenger


def reassign_passenger(
    repository: CrmRepository,
    trip_id: str,
    passenger_id: str,
    partner_id: str,
) -> Passenger:
    """
    Hand an (overbooked) group to a partner company. The partner must exist.
    The stored overbooking flag is left as it is.
    """
    partner = repository.get_partner(partner_id)
    passenger = repository.update_passenger(trip_id, passenger_id, assigned_partner_id=partner.id)
    _logger.info("Passenger reassigned: trip=%s passenger=%s partner=%s", trip_id, passenger_id, partner.name)
    return passenger
