"""
Demo data (two trips out of Fortaleza, two partner agencies, the agency profile).
Loaded on an empty in-memory backend at startup, or on demand through seed_sample_data().
"""

import dataclasses
import logging
import uuid
from datetime import date
from typing import List, Optional

from turismoflow.application.config import DEFAULT_COMPANY_PROFILE
from turismoflow.domain.models import (
    BoardingStatus,
    Coordinates,
    Partner,
    Passenger,
    Trip,
    VehicleType,
)
from turismoflow.infrastructure.repository import CrmRepository

_logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


def sample_trips(day: Optional[date] = None) -> List[Trip]:
    today = (day or date.today()).isoformat()
    origin = DEFAULT_COMPANY_PROFILE.address
    return [
        Trip(
            id=_new_id(),
            date=today,
            time="07:30",
            vehicle_type=VehicleType.BUS,
            vehicle_model="Volvo B12R",
            total_seats=50,
            origin=origin,
            destination="Jericoacoara",
            stops=["Paraipaba", "Jijoca"],
            driver_name="Carlos Silva",
            guide_name="Ana Maria",
            passengers=[
                Passenger(
                    id=_new_id(),
                    name="Roberto Alvez",
                    phone="+55 (85) 99999-9999",
                    email="rob@test.com",
                    pax_count=2,
                    total_value=500.0,
                    paid_amount=200.0,
                    receivable_amount=300.0,
                    boarding_location="Hotel Gran Marquise, Fortaleza",
                    boarding_coordinates=Coordinates(lat=-3.7258, lng=-38.4870),
                    boarding_time="07:00",
                    boarding_status=BoardingStatus.PENDING,
                ),
                Passenger(
                    id=_new_id(),
                    name="Família Souza",
                    phone="+55 (85) 88888-8888",
                    email="souza@test.com",
                    pax_count=4,
                    children_count=2,
                    children_ages="5, 8",
                    total_value=1200.0,
                    paid_amount=1200.0,
                    receivable_amount=0.0,
                    boarding_location="Praiano Hotel, Fortaleza",
                    boarding_coordinates=Coordinates(lat=-3.7250, lng=-38.4950),
                    boarding_time="07:15",
                    boarding_status=BoardingStatus.PENDING,
                ),
            ],
        ),
        Trip(
            id=_new_id(),
            date=today,
            time="09:00",
            vehicle_type=VehicleType.VAN,
            vehicle_model="Mercedes Sprinter",
            total_seats=15,
            origin=origin,
            destination="Beach Park",
            stops=["Porto das Dunas"],
            driver_name="João Santos",
            guide_name="Pedro",
        ),
    ]


def sample_partners() -> List[Partner]:
    return [
        Partner(
            id=_new_id(),
            name="Ceará Tours",
            contact_person="Mariana",
            email="contato@cearatours.com",
            phone="+55 85 91234-5678",
            specialty="Vans",
        ),
        Partner(
            id=_new_id(),
            name="Nordeste Vip",
            contact_person="Paulo",
            email="paulo@nvip.com",
            phone="+55 85 98765-4321",
            specialty="Ônibus de Luxo",
        ),
    ]


def seed_sample_data(repository: CrmRepository, day: Optional[date] = None) -> dict:
    """
    Store the demo company profile if none exists (first, so a backend that refuses
    it fails before any trip is written), then add the demo trips and partners.
    Passengers go through add_passenger so backends that keep them in their own table get them too.
    """
    if repository.get_company_profile() is None:
        repository.save_company_profile(DEFAULT_COMPANY_PROFILE)

    trips = sample_trips(day)
    for trip in trips:
        repository.add_trip(dataclasses.replace(trip, passengers=[]))
        for pax in trip.passengers:
            repository.add_passenger(trip.id, pax)

    partners = sample_partners()
    for partner in partners:
        repository.add_partner(partner)

    n_pax = sum(len(t.passengers) for t in trips)
    _logger.info("Sample data loaded: trips=%d passengers=%d partners=%d", len(trips), n_pax, len(partners))
    return {"trips": len(trips), "passengers": n_pax, "partners": len(partners)}
