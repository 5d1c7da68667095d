"""
API request/response schemas. Pydantic only in api layer.
"""

from pydantic import BaseModel

from turismoflow.domain.models import BoardingStatus, SeatStatus, VehicleType


class CoordinatesSchema(BaseModel):
    lat: float
    lng: float


class PassengerSchema(BaseModel):
    id: str
    name: str
    phone: str = ""
    email: str = ""
    pax_count: int
    children_count: int = 0
    children_ages: str | None = None
    total_value: float = 0.0
    paid_amount: float = 0.0
    receivable_amount: float = 0.0
    boarding_location: str = ""
    boarding_coordinates: CoordinatesSchema | None = None
    boarding_time: str = ""
    notes: str | None = None
    is_overbooked: bool = False
    assigned_partner_id: str | None = None
    boarding_status: BoardingStatus = BoardingStatus.PENDING


class TripSchema(BaseModel):
    id: str
    date: str
    time: str
    vehicle_type: VehicleType
    vehicle_model: str
    total_seats: int
    origin: str
    destination: str
    stops: list[str]
    driver_name: str | None = None
    guide_name: str | None = None
    passengers: list[PassengerSchema]


class TripCreateRequest(BaseModel):
    destination: str
    vehicle_type: VehicleType = VehicleType.BUS
    total_seats: int | None = None  # por defecto según vehículo (BUS 50, otros 15)
    date: str | None = None  # "YYYY-MM-DD"; hoy si no se envía
    time: str | None = None  # "HH:MM"
    vehicle_model: str | None = None
    origin: str | None = None  # vacío o "Agência Sede" -> dirección de la agencia
    stops: str | list[str] | None = None  # "Paraipaba, Jijoca" o lista
    driver_name: str | None = None
    guide_name: str | None = None


class PassengerCreateRequest(BaseModel):
    name: str
    pax_count: int = 1
    phone: str = ""
    email: str = ""
    children_count: int = 0
    children_ages: str | None = None
    total_value: float = 0.0
    paid_amount: float = 0.0
    boarding_location: str = ""
    address_number: str = ""
    boarding_coordinates: CoordinatesSchema | None = None
    boarding_time: str | None = None
    notes: str | None = None


class BoardingStatusRequest(BaseModel):
    status: str  # "pending" | "boarded" | "no_show"


class ReassignRequest(BaseModel):
    partner_id: str


class PartnerSchema(BaseModel):
    id: str
    name: str
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    specialty: str | None = None


class PartnerCreateRequest(BaseModel):
    name: str
    contact_person: str = ""
    email: str = ""
    phone: str = ""
    specialty: str | None = None


class PartnerUpdateRequest(BaseModel):
    """Only the fields sent are changed."""
    name: str | None = None
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    specialty: str | None = None


class SeatSchema(BaseModel):
    number: int
    status: SeatStatus
    passenger_id: str | None = None
    passenger_name: str | None = None


class SeatMapSchema(BaseModel):
    trip_id: str
    vehicle_type: VehicleType
    total_seats: int
    available_seats: int
    rows: list[list[int]]
    seats: list[SeatSchema]


class RouteStopSchema(BaseModel):
    order: int
    leg_km: float | None = None
    passenger: PassengerSchema
    whatsapp_url: str
    phone_url: str


class BoardingSummarySchema(BaseModel):
    total_pax: int
    boarded_pax: int
    no_show_pax: int
    pending_pax: int


class RoutePlanSchema(BaseModel):
    trip_id: str
    origin_name: str
    origin_coordinates: CoordinatesSchema
    stops: list[RouteStopSchema]
    directions_url: str
    total_distance_km: float
    boarding: BoardingSummarySchema


class TripSummarySchema(BaseModel):
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


class FleetTotalsSchema(BaseModel):
    trip_count: int
    total_passengers: int
    total_capacity: int
    overbooked_passengers: int
    total_value: float
    total_paid: float
    total_receivable: float
    occupancy_pct: int


class DashboardSchema(BaseModel):
    start: str | None = None
    end: str | None = None
    totals: FleetTotalsSchema
    trips: list[TripSummarySchema]


class OverbookingEntrySchema(BaseModel):
    trip_id: str
    date: str
    time: str
    origin: str
    destination: str
    passengers: list[PassengerSchema]


class GeocodeCandidateSchema(BaseModel):
    label: str
    short_label: str
    coordinates: CoordinatesSchema


class EmailDraftRequest(BaseModel):
    trip_id: str
    passenger_id: str


class EmailDraftSchema(BaseModel):
    partner_id: str
    trip_id: str
    passenger_id: str
    draft: str


class CompanyProfileSchema(BaseModel):
    name: str
    address: str
    address_coordinates: CoordinatesSchema | None = None
    phone: str = ""
    email: str = ""


class SeedResultSchema(BaseModel):
    trips: int
    passengers: int
    partners: int
