"""
TurismoFlow API router. Calls application only. No business logic.
Collaborators (repository, geocoder, drafter) come from app.state, set in main.create_app.
"""

import logging
from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from turismoflow.api.schemas import (
    BoardingStatusRequest,
    CompanyProfileSchema,
    DashboardSchema,
    EmailDraftRequest,
    EmailDraftSchema,
    GeocodeCandidateSchema,
    OverbookingEntrySchema,
    PartnerCreateRequest,
    PartnerSchema,
    PartnerUpdateRequest,
    PassengerCreateRequest,
    PassengerSchema,
    ReassignRequest,
    RoutePlanSchema,
    SeatMapSchema,
    SeatSchema,
    SeedResultSchema,
    TripCreateRequest,
    TripSchema,
)
from turismoflow.application.sample_data import seed_sample_data
from turismoflow.application.use_cases import booking, operations, partners
from turismoflow.core.route_engine import phone_link, whatsapp_link
from turismoflow.core.seat_engine import available_seat_count
from turismoflow.domain.errors import (
    BackendSetupRequired,
    GeocodingError,
    NotFoundError,
    PersistenceError,
)
from turismoflow.domain.models import CompanyProfile, Coordinates
from turismoflow.infrastructure.email_drafter import EmailDrafter
from turismoflow.infrastructure.geocoding import Geocoder
from turismoflow.infrastructure.repository import CrmRepository

_logger = logging.getLogger(__name__)

router = APIRouter()

SETUP_HINT = (
    "The database tables are missing. Create trips, passengers, partners and "
    "company_profiles in Supabase, or unset SUPABASE_URL to use the in-memory store."
)


def _repository(request: Request) -> CrmRepository:
    return request.app.state.repository


def _geocoder(request: Request) -> Geocoder:
    return request.app.state.geocoder


def _drafter(request: Request) -> EmailDrafter:
    return request.app.state.drafter


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, BackendSetupRequired):
        return HTTPException(
            status_code=503,
            detail={"message": str(e), "setup_required": True, "hint": SETUP_HINT},
        )
    if isinstance(e, (PersistenceError, GeocodingError)):
        return HTTPException(status_code=502, detail=str(e))
    if isinstance(e, ValueError):
        return HTTPException(status_code=400, detail=str(e))
    _logger.exception("Unhandled error")
    return HTTPException(status_code=500, detail=str(e))


def _coords(schema) -> Optional[Coordinates]:
    if schema is None:
        return None
    return Coordinates(lat=schema.lat, lng=schema.lng)


@router.get("/")
def root():
    """Endpoint raíz"""
    return {"message": "TurismoFlow API", "status": "ok"}


@router.get("/trips", response_model=list[TripSchema])
def get_trips(request: Request):
    try:
        return [asdict(t) for t in _repository(request).list_trips()]
    except Exception as e:
        raise _http_error(e) from e


@router.post("/trips", response_model=TripSchema)
def post_trip(body: TripCreateRequest, request: Request):
    """
    POST /trips
    Seats default from the vehicle type; an empty origin becomes the agency address.
    """
    try:
        repository = _repository(request)
        trip = booking.create_trip(
            repository,
            operations.get_company_profile(repository),
            destination=body.destination,
            vehicle_type=body.vehicle_type,
            total_seats=body.total_seats,
            trip_date=body.date,
            time=body.time,
            vehicle_model=body.vehicle_model,
            origin=body.origin,
            stops=body.stops,
            driver_name=body.driver_name,
            guide_name=body.guide_name,
        )
        return asdict(trip)
    except Exception as e:
        raise _http_error(e) from e


@router.get("/trips/{trip_id}", response_model=TripSchema)
def get_trip(trip_id: str, request: Request):
    try:
        return asdict(_repository(request).get_trip(trip_id))
    except Exception as e:
        raise _http_error(e) from e


@router.post("/trips/{trip_id}/passengers", response_model=PassengerSchema)
def post_passenger(trip_id: str, body: PassengerCreateRequest, request: Request):
    """
    POST /trips/{trip_id}/passengers
    Always accepted; is_overbooked tells whether the group went past capacity.
    """
    try:
        passenger = booking.book_passenger(
            _repository(request),
            trip_id,
            name=body.name,
            pax_count=body.pax_count,
            phone=body.phone,
            email=body.email,
            children_count=body.children_count,
            children_ages=body.children_ages,
            total_value=body.total_value,
            paid_amount=body.paid_amount,
            boarding_location=body.boarding_location,
            address_number=body.address_number,
            boarding_coordinates=_coords(body.boarding_coordinates),
            boarding_time=body.boarding_time,
            notes=body.notes,
        )
        return asdict(passenger)
    except Exception as e:
        raise _http_error(e) from e


@router.post("/trips/{trip_id}/passengers/{passenger_id}/status", response_model=PassengerSchema)
def post_boarding_status(trip_id: str, passenger_id: str, body: BoardingStatusRequest, request: Request):
    try:
        passenger = booking.update_boarding_status(_repository(request), trip_id, passenger_id, body.status)
        return asdict(passenger)
    except Exception as e:
        raise _http_error(e) from e


@router.post("/trips/{trip_id}/passengers/{passenger_id}/reassign", response_model=PassengerSchema)
def post_reassign(trip_id: str, passenger_id: str, body: ReassignRequest, request: Request):
    try:
        passenger = booking.reassign_passenger(_repository(request), trip_id, passenger_id, body.partner_id)
        return asdict(passenger)
    except Exception as e:
        raise _http_error(e) from e


@router.get("/trips/{trip_id}/seats", response_model=SeatMapSchema)
def get_seat_map(trip_id: str, request: Request):
    try:
        repository = _repository(request)
        trip = repository.get_trip(trip_id)
        seats, rows = operations.trip_seat_map(repository, trip_id)
        return SeatMapSchema(
            trip_id=trip.id,
            vehicle_type=trip.vehicle_type,
            total_seats=trip.total_seats,
            available_seats=available_seat_count(seats),
            rows=rows,
            seats=[
                SeatSchema(
                    number=s.number,
                    status=s.status,
                    passenger_id=s.passenger.id if s.passenger else None,
                    passenger_name=s.passenger.name if s.passenger else None,
                )
                for s in seats
            ],
        )
    except Exception as e:
        raise _http_error(e) from e


@router.get("/trips/{trip_id}/route", response_model=RoutePlanSchema)
def get_route(trip_id: str, request: Request):
    """
    GET /trips/{trip_id}/route
    Pickup order from the agency (nearest neighbour), Google Maps link and check-in counts.
    """
    try:
        plan, summary = operations.plan_trip_route(_repository(request), trip_id)
        return {
            "trip_id": plan.trip_id,
            "origin_name": plan.origin_name,
            "origin_coordinates": asdict(plan.origin_coordinates),
            "stops": [
                {
                    **asdict(stop),
                    "whatsapp_url": whatsapp_link(stop.passenger.phone),
                    "phone_url": phone_link(stop.passenger.phone),
                }
                for stop in plan.stops
            ],
            "directions_url": plan.directions_url,
            "total_distance_km": plan.total_distance_km,
            "boarding": asdict(summary),
        }
    except Exception as e:
        raise _http_error(e) from e


@router.get("/dashboard", response_model=DashboardSchema)
def get_dashboard(request: Request, start: Optional[str] = None, end: Optional[str] = None):
    """
    GET /dashboard?start=YYYY-MM-DD&end=YYYY-MM-DD
    The filter applies only when start is given.
    """
    try:
        return asdict(operations.build_dashboard(_repository(request), start, end))
    except Exception as e:
        raise _http_error(e) from e


@router.get("/overbooking", response_model=list[OverbookingEntrySchema])
def get_overbooking(request: Request):
    try:
        queue = partners.overbooking_queue(_repository(request))
        return [
            {
                "trip_id": entry.trip.id,
                "date": entry.trip.date,
                "time": entry.trip.time,
                "origin": entry.trip.origin,
                "destination": entry.trip.destination,
                "passengers": [asdict(p) for p in entry.passengers],
            }
            for entry in queue
        ]
    except Exception as e:
        raise _http_error(e) from e


@router.get("/partners", response_model=list[PartnerSchema])
def get_partners(request: Request):
    try:
        return [asdict(p) for p in partners.list_partners(_repository(request))]
    except Exception as e:
        raise _http_error(e) from e


@router.post("/partners", response_model=PartnerSchema)
def post_partner(body: PartnerCreateRequest, request: Request):
    try:
        partner = partners.add_partner(_repository(request), **body.model_dump())
        return asdict(partner)
    except Exception as e:
        raise _http_error(e) from e


@router.put("/partners/{partner_id}", response_model=PartnerSchema)
def put_partner(partner_id: str, body: PartnerUpdateRequest, request: Request):
    try:
        fields = body.model_dump(exclude_unset=True)
        return asdict(partners.update_partner(_repository(request), partner_id, **fields))
    except Exception as e:
        raise _http_error(e) from e


@router.post("/partners/{partner_id}/email-draft", response_model=EmailDraftSchema)
def post_email_draft(partner_id: str, body: EmailDraftRequest, request: Request):
    """
    POST /partners/{partner_id}/email-draft
    Draft only; the operator reviews and sends it. Generation failures come back as text.
    """
    try:
        repository = _repository(request)
        partner = repository.get_partner(partner_id)
        trip = repository.get_trip(body.trip_id)
        passenger = next((p for p in trip.passengers if p.id == body.passenger_id), None)
        if passenger is None:
            raise NotFoundError(f"Passenger not found on trip {trip.id}: {body.passenger_id}")
        draft = partners.draft_partner_email(_drafter(request), partner, trip, passenger)
        return EmailDraftSchema(
            partner_id=partner.id,
            trip_id=trip.id,
            passenger_id=passenger.id,
            draft=draft,
        )
    except Exception as e:
        raise _http_error(e) from e


@router.get("/geocode", response_model=list[GeocodeCandidateSchema])
def get_geocode(q: str, request: Request):
    try:
        return [asdict(c) for c in _geocoder(request).search(q)]
    except Exception as e:
        raise _http_error(e) from e


@router.get("/company", response_model=CompanyProfileSchema)
def get_company(request: Request):
    try:
        return asdict(operations.get_company_profile(_repository(request)))
    except Exception as e:
        raise _http_error(e) from e


@router.put("/company", response_model=CompanyProfileSchema)
def put_company(body: CompanyProfileSchema, request: Request):
    try:
        profile = CompanyProfile(
            name=body.name,
            address=body.address,
            address_coordinates=_coords(body.address_coordinates),
            phone=body.phone,
            email=body.email,
        )
        return asdict(operations.save_company_profile(_repository(request), profile))
    except Exception as e:
        raise _http_error(e) from e


@router.post("/seed", response_model=SeedResultSchema)
def post_seed(request: Request):
    """POST /seed: add the demo trips and partners to the current backend."""
    try:
        return seed_sample_data(_repository(request))
    except Exception as e:
        raise _http_error(e) from e
