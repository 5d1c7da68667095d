"""
Partner network and overbooking queue use cases.
"""

import dataclasses
import logging
from typing import List, Optional

from turismoflow.application.use_cases.booking import new_id
from turismoflow.core.capacity_engine import pending_overbooking
from turismoflow.domain.models import OverbookingEntry, Partner, Passenger, Trip
from turismoflow.infrastructure.email_drafter import EmailDrafter
from turismoflow.infrastructure.repository import CrmRepository

_logger = logging.getLogger(__name__)


def list_partners(repository: CrmRepository) -> List[Partner]:
    return repository.list_partners()


def add_partner(
    repository: CrmRepository,
    name: str,
    contact_person: str = "",
    email: str = "",
    phone: str = "",
    specialty: Optional[str] = None,
) -> Partner:
    if not name or not name.strip():
        raise ValueError("partner name is required")
    partner = Partner(
        id=new_id(),
        name=name.strip(),
        contact_person=contact_person or "",
        email=email or "",
        phone=phone or "",
        specialty=specialty or None,
    )
    stored = repository.add_partner(partner)
    _logger.info("Partner added: id=%s name=%s", stored.id, stored.name)
    return stored


def update_partner(repository: CrmRepository, partner_id: str, **fields) -> Partner:
    """Change the given fields of an existing partner; the id never changes."""
    fields.pop("id", None)
    if "name" in fields and not (fields["name"] or "").strip():
        raise ValueError("partner name is required")
    current = repository.get_partner(partner_id)
    return repository.update_partner(dataclasses.replace(current, **fields))


def overbooking_queue(repository: CrmRepository) -> List[OverbookingEntry]:
    """Trips with overbooked groups still waiting for a partner vehicle."""
    return pending_overbooking(repository.list_trips())


def trip_description(trip: Trip) -> str:
    return f"{trip.destination} às {trip.time}"


def draft_partner_email(
    drafter: EmailDrafter,
    partner: Partner,
    trip: Trip,
    passenger: Passenger,
) -> str:
    """Draft the transfer request for one overbooked group; shown to the operator before sending."""
    _logger.info("Drafting partner e-mail: partner=%s trip=%s group=%s", partner.name, trip.id, passenger.name)
    return drafter.draft_partner_email(
        partner.name,
        passenger.pax_count,
        trip_description(trip),
        [passenger.name],
    )
