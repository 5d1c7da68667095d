"""
Persistence port and the in-memory implementation.

The in-memory store is the default backend (demo, tests, single process). It is
volatile and resets when the service restarts; use SupabaseCrmRepository for real data.
"""

import dataclasses
import logging
import threading
from typing import Callable, Dict, List, Optional, Protocol

from turismoflow.domain.errors import NotFoundError
from turismoflow.domain.models import CompanyProfile, Partner, Passenger, Trip

_logger = logging.getLogger(__name__)

# Passenger fields an operator may change after booking.
UPDATABLE_PASSENGER_FIELDS = frozenset({"boarding_status", "assigned_partner_id"})


class CrmRepository(Protocol):
    """Persistence collaborator: trips (with passengers), partners and the company profile."""

    def list_trips(self) -> List[Trip]:
        ...

    def get_trip(self, trip_id: str) -> Trip:
        """Raises NotFoundError for unknown ids."""
        ...

    def add_trip(self, trip: Trip) -> Trip:
        ...

    def add_passenger(self, trip_id: str, passenger: Passenger) -> Passenger:
        ...

    def book_passenger(self, trip_id: str, build: Callable[[Trip], Passenger]) -> Passenger:
        """
        Append build(trip) to the trip, where `trip` is the stored trip at the moment
        of the append. Raises NotFoundError for unknown ids.
        """
        ...

    def update_passenger(self, trip_id: str, passenger_id: str, **changes) -> Passenger:
        ...

    def list_partners(self) -> List[Partner]:
        ...

    def get_partner(self, partner_id: str) -> Partner:
        ...

    def add_partner(self, partner: Partner) -> Partner:
        ...

    def update_partner(self, partner: Partner) -> Partner:
        ...

    def get_company_profile(self) -> Optional[CompanyProfile]:
        ...

    def save_company_profile(self, profile: CompanyProfile) -> CompanyProfile:
        ...


def check_passenger_changes(changes: dict) -> None:
    unknown = set(changes) - UPDATABLE_PASSENGER_FIELDS
    if unknown:
        raise ValueError(f"Passenger fields cannot be updated: {sorted(unknown)}")


class InMemoryCrmRepository:
    """Thread-safe in-memory store. Records are immutable; updates replace them."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._trips: Dict[str, Trip] = {}
        self._partners: Dict[str, Partner] = {}
        self._company: Optional[CompanyProfile] = None

    def list_trips(self) -> List[Trip]:
        with self._lock:
            return list(self._trips.values())

    def get_trip(self, trip_id: str) -> Trip:
        with self._lock:
            return self._get_trip_locked(trip_id)

    def _get_trip_locked(self, trip_id: str) -> Trip:
        trip = self._trips.get(trip_id)
        if trip is None:
            raise NotFoundError(f"Trip not found: {trip_id}")
        return trip

    def add_trip(self, trip: Trip) -> Trip:
        with self._lock:
            if trip.id in self._trips:
                raise ValueError(f"Trip already exists: {trip.id}")
            self._trips[trip.id] = trip
        _logger.debug("Trip stored: id=%s destination=%s", trip.id, trip.destination)
        return trip

    def add_passenger(self, trip_id: str, passenger: Passenger) -> Passenger:
        with self._lock:
            trip = self._get_trip_locked(trip_id)
            self._trips[trip_id] = dataclasses.replace(
                trip, passengers=[*trip.passengers, passenger]
            )
        return passenger

    def book_passenger(self, trip_id: str, build: Callable[[Trip], Passenger]) -> Passenger:
        with self._lock:
            trip = self._get_trip_locked(trip_id)
            passenger = build(trip)
            self._trips[trip_id] = dataclasses.replace(
                trip, passengers=[*trip.passengers, passenger]
            )
        return passenger

    def update_passenger(self, trip_id: str, passenger_id: str, **changes) -> Passenger:
        check_passenger_changes(changes)
        with self._lock:
            trip = self._get_trip_locked(trip_id)
            updated: Optional[Passenger] = None
            passengers: List[Passenger] = []
            for p in trip.passengers:
                if p.id == passenger_id:
                    updated = dataclasses.replace(p, **changes)
                    passengers.append(updated)
                else:
                    passengers.append(p)
            if updated is None:
                raise NotFoundError(f"Passenger not found on trip {trip_id}: {passenger_id}")
            self._trips[trip_id] = dataclasses.replace(trip, passengers=passengers)
        return updated

    def list_partners(self) -> List[Partner]:
        with self._lock:
            return list(self._partners.values())

    def get_partner(self, partner_id: str) -> Partner:
        with self._lock:
            partner = self._partners.get(partner_id)
        if partner is None:
            raise NotFoundError(f"Partner not found: {partner_id}")
        return partner

    def add_partner(self, partner: Partner) -> Partner:
        with self._lock:
            if partner.id in self._partners:
                raise ValueError(f"Partner already exists: {partner.id}")
            self._partners[partner.id] = partner
        return partner

    def update_partner(self, partner: Partner) -> Partner:
        with self._lock:
            if partner.id not in self._partners:
                raise NotFoundError(f"Partner not found: {partner.id}")
            self._partners[partner.id] = partner
        return partner

    def get_company_profile(self) -> Optional[CompanyProfile]:
        with self._lock:
            return self._company

    def save_company_profile(self, profile: CompanyProfile) -> CompanyProfile:
        with self._lock:
            self._company = profile
        return profile
