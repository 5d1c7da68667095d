"""Small builders for domain records used across the test modules."""

from typing import List, Optional, Tuple

from turismoflow.domain.models import (
    BoardingStatus,
    CompanyProfile,
    Coordinates,
    Passenger,
    Trip,
    VehicleType,
)


def make_passenger(
    pid: str,
    pax_count: int = 1,
    at: Optional[Tuple[float, float]] = None,
    location: Optional[str] = None,
    **kwargs,
) -> Passenger:
    coords = Coordinates(lat=at[0], lng=at[1]) if at is not None else None
    kwargs.setdefault("boarding_status", BoardingStatus.PENDING)
    return Passenger(
        id=pid,
        name=kwargs.pop("name", f"Grupo {pid}"),
        pax_count=pax_count,
        boarding_location=location if location is not None else f"Hotel {pid}",
        boarding_coordinates=coords,
        **kwargs,
    )


def make_trip(
    tid: str = "t1",
    total_seats: int = 10,
    passengers: Optional[List[Passenger]] = None,
    trip_date: str = "2024-01-10",
    **kwargs,
) -> Trip:
    return Trip(
        id=tid,
        date=trip_date,
        time=kwargs.pop("time", "08:00"),
        vehicle_type=kwargs.pop("vehicle_type", VehicleType.BUS),
        total_seats=total_seats,
        destination=kwargs.pop("destination", "Jericoacoara"),
        passengers=list(passengers or []),
        **kwargs,
    )


def make_company(at: Optional[Tuple[float, float]] = (0.0, 0.0)) -> CompanyProfile:
    return CompanyProfile(
        name="Agência Teste",
        address="Rua A, 1",
        address_coordinates=Coordinates(lat=at[0], lng=at[1]) if at is not None else None,
    )
