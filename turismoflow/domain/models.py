"""
TurismoFlow domain models. Dataclasses only. No FastAPI, no external deps beyond dataclasses/typing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


DEFAULT_VEHICLE_MODEL = "Genérico"


class VehicleType(str, Enum):
    BUS = "BUS"
    VAN = "VAN"
    MINIBUS = "MINIBUS"


class BoardingStatus(str, Enum):
    PENDING = "pending"
    BOARDED = "boarded"
    NO_SHOW = "no_show"


class SeatStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    OVERBOOKED = "overbooked"


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float


@dataclass(frozen=True)
class Passenger:
    """A booked group: one or more people travelling under one booking."""
    id: str
    name: str
    phone: str = ""
    email: str = ""
    pax_count: int = 1
    children_count: int = 0
    children_ages: Optional[str] = None
    total_value: float = 0.0
    paid_amount: float = 0.0
    receivable_amount: float = 0.0  # total_value - paid_amount at booking time
    boarding_location: str = ""
    boarding_coordinates: Optional[Coordinates] = None
    boarding_time: str = ""
    notes: Optional[str] = None
    # Stored once at booking; never recomputed when the trip changes later.
    is_overbooked: bool = False
    assigned_partner_id: Optional[str] = None
    boarding_status: BoardingStatus = BoardingStatus.PENDING


@dataclass(frozen=True)
class Trip:
    id: str
    date: str  # "YYYY-MM-DD"
    time: str  # "HH:MM"
    vehicle_type: VehicleType
    total_seats: int
    destination: str
    vehicle_model: str = DEFAULT_VEHICLE_MODEL
    origin: str = ""
    stops: List[str] = field(default_factory=list)
    driver_name: Optional[str] = None
    guide_name: Optional[str] = None
    passengers: List[Passenger] = field(default_factory=list)


@dataclass(frozen=True)
class Partner:
    id: str
    name: str
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    specialty: Optional[str] = None


@dataclass(frozen=True)
class CompanyProfile:
    """Singleton agency profile; its address is the default route origin."""
    name: str
    address: str
    address_coordinates: Optional[Coordinates] = None
    phone: str = ""
    email: str = ""


# --- Derived views (computed on demand, never persisted) ---


@dataclass(frozen=True)
class Seat:
    number: int
    status: SeatStatus
    passenger: Optional[Passenger] = None


@dataclass(frozen=True)
class RouteStop:
    order: int  # 1-based
    passenger: Passenger
    leg_km: Optional[float] = None  # None when the stop has no coordinates


@dataclass
class RoutePlan:
    trip_id: str
    origin_name: str
    origin_coordinates: Coordinates
    stops: List[RouteStop]
    directions_url: str
    total_distance_km: float = 0.0


@dataclass(frozen=True)
class BoardingSummary:
    total_pax: int
    boarded_pax: int
    no_show_pax: int
    pending_pax: int


@dataclass(frozen=True)
class TripSummary:
    trip_id: str
    date: str
    destination: str
    occupied: int
    capacity: int
    overbooked_pax: int
    receivable_amount: float
    is_full: bool
    is_over_capacity: bool
    occupancy_pct: int


@dataclass(frozen=True)
class FleetTotals:
    trip_count: int
    total_passengers: int
    total_capacity: int
    overbooked_passengers: int
    total_value: float
    total_paid: float
    total_receivable: float
    occupancy_pct: int


@dataclass
class Dashboard:
    start: Optional[str]
    end: Optional[str]
    totals: FleetTotals
    trips: List[TripSummary]


@dataclass(frozen=True)
class OverbookingEntry:
    """One trip with passengers still waiting for a partner vehicle."""
    trip: Trip
    passengers: List[Passenger]


@dataclass(frozen=True)
class GeocodeCandidate:
    label: str
    short_label: str
    coordinates: Coordinates
