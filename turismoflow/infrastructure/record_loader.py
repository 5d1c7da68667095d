"""
Record loader. Raw rows (snake_case columns, as stored by the backend) <-> domain records.
"""

from typing import Any, Optional

from turismoflow.core.seat_engine import default_seats
from turismoflow.domain.models import (
    DEFAULT_VEHICLE_MODEL,
    BoardingStatus,
    CompanyProfile,
    Coordinates,
    Partner,
    Passenger,
    Trip,
    VehicleType,
)


def _opt_str(value: Any) -> Optional[str]:
    """None for missing or blank values."""
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def _float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


def load_coordinates(raw: Any) -> Optional[Coordinates]:
    """{"lat": .., "lng": ..} -> Coordinates. None if absent or incomplete."""
    if not isinstance(raw, dict):
        return None
    lat = raw.get("lat")
    lng = raw.get("lng")
    if lat is None or lng is None:
        return None
    return Coordinates(lat=float(lat), lng=float(lng))


def dump_coordinates(coords: Optional[Coordinates]) -> Optional[dict]:
    if coords is None:
        return None
    return {"lat": coords.lat, "lng": coords.lng}


def load_passenger(raw: dict) -> Passenger:
    status = raw.get("boarding_status") or BoardingStatus.PENDING.value
    return Passenger(
        id=str(raw.get("id", "")),
        name=str(raw.get("name") or ""),
        phone=str(raw.get("phone") or ""),
        email=str(raw.get("email") or ""),
        pax_count=int(raw.get("pax_count") or 1),
        children_count=int(raw.get("children_count") or 0),
        children_ages=_opt_str(raw.get("children_ages")),
        total_value=_float(raw.get("total_value")),
        paid_amount=_float(raw.get("paid_amount")),
        receivable_amount=_float(raw.get("receivable_amount")),
        boarding_location=str(raw.get("boarding_location") or ""),
        boarding_coordinates=load_coordinates(raw.get("boarding_coordinates")),
        boarding_time=str(raw.get("boarding_time") or ""),
        notes=_opt_str(raw.get("notes")),
        is_overbooked=bool(raw.get("is_overbooked", False)),
        assigned_partner_id=_opt_str(raw.get("assigned_partner_id")),
        boarding_status=BoardingStatus(status),
    )


def dump_passenger(passenger: Passenger, trip_id: str) -> dict:
    return {
        "id": passenger.id,
        "trip_id": trip_id,
        "name": passenger.name,
        "phone": passenger.phone,
        "email": passenger.email,
        "pax_count": passenger.pax_count,
        "children_count": passenger.children_count,
        "children_ages": passenger.children_ages,
        "total_value": passenger.total_value,
        "paid_amount": passenger.paid_amount,
        "receivable_amount": passenger.receivable_amount,
        "boarding_location": passenger.boarding_location,
        "boarding_coordinates": dump_coordinates(passenger.boarding_coordinates),
        "boarding_time": passenger.boarding_time,
        "notes": passenger.notes,
        "is_overbooked": passenger.is_overbooked,
        "assigned_partner_id": passenger.assigned_partner_id,
        "boarding_status": passenger.boarding_status.value,
    }


def load_trip(raw: dict) -> Trip:
    """
    Trip row; embedded `passengers` rows (if any) keep the order they come in.
    Missing or non-positive seats fall back to the vehicle default, a blank model to "Genérico".
    """
    vehicle_type = VehicleType(raw.get("vehicle_type") or VehicleType.BUS.value)
    seats = int(raw.get("total_seats") or 0)
    return Trip(
        id=str(raw.get("id", "")),
        date=str(raw.get("date") or ""),
        time=str(raw.get("time") or ""),
        vehicle_type=vehicle_type,
        vehicle_model=str(raw.get("vehicle_model") or DEFAULT_VEHICLE_MODEL),
        total_seats=seats if seats > 0 else default_seats(vehicle_type),
        origin=str(raw.get("origin") or ""),
        destination=str(raw.get("destination") or ""),
        stops=[str(s) for s in (raw.get("stops") or [])],
        driver_name=_opt_str(raw.get("driver_name")),
        guide_name=_opt_str(raw.get("guide_name")),
        passengers=[load_passenger(p) for p in (raw.get("passengers") or [])],
    )


def dump_trip(trip: Trip, include_passengers: bool = False) -> dict:
    row = {
        "id": trip.id,
        "date": trip.date,
        "time": trip.time,
        "vehicle_type": trip.vehicle_type.value,
        "vehicle_model": trip.vehicle_model,
        "total_seats": trip.total_seats,
        "origin": trip.origin,
        "destination": trip.destination,
        "stops": list(trip.stops),
        "driver_name": trip.driver_name,
        "guide_name": trip.guide_name,
    }
    if include_passengers:
        row["passengers"] = [dump_passenger(p, trip.id) for p in trip.passengers]
    return row


def load_partner(raw: dict) -> Partner:
    return Partner(
        id=str(raw.get("id", "")),
        name=str(raw.get("name") or ""),
        contact_person=str(raw.get("contact_person") or ""),
        email=str(raw.get("email") or ""),
        phone=str(raw.get("phone") or ""),
        specialty=_opt_str(raw.get("specialty")),
    )


def dump_partner(partner: Partner) -> dict:
    return {
        "id": partner.id,
        "name": partner.name,
        "contact_person": partner.contact_person,
        "email": partner.email,
        "phone": partner.phone,
        "specialty": partner.specialty,
    }


def load_company_profile(raw: dict) -> CompanyProfile:
    return CompanyProfile(
        name=str(raw.get("name") or ""),
        address=str(raw.get("address") or ""),
        address_coordinates=load_coordinates(raw.get("address_coordinates")),
        phone=str(raw.get("phone") or ""),
        email=str(raw.get("email") or ""),
    )


def dump_company_profile(profile: CompanyProfile) -> dict:
    return {
        "name": profile.name,
        "address": profile.address,
        "address_coordinates": dump_coordinates(profile.address_coordinates),
        "phone": profile.phone,
        "email": profile.email,
    }
