"""
Capacity / overbooking evaluator. Pure logic only.

The overbooking flag is decided once, when a group is booked, and stored on the
passenger. Nothing here recomputes it for passengers already on the trip.
"""

from typing import Iterable, List

from turismoflow.domain.models import OverbookingEntry, Passenger, Trip


def pax_total(passengers: Iterable[Passenger]) -> int:
    return sum(p.pax_count for p in passengers)


def trip_occupancy(trip: Trip) -> int:
    """People currently booked on the trip (sum of group sizes)."""
    return pax_total(trip.passengers)


def would_overbook(current_occupancy: int, capacity: int, group_size: int) -> bool:
    return (current_occupancy + group_size) > capacity


def evaluate_booking(trip: Trip, group_size: int) -> bool:
    """True when adding `group_size` people to the trip exceeds its seats."""
    return would_overbook(trip_occupancy(trip), trip.total_seats, group_size)


def pending_overbooking(trips: Iterable[Trip]) -> List[OverbookingEntry]:
    """
    Trips with overbooked passengers not yet reassigned to a partner.
    Trip order and passenger order are preserved; trips with nothing pending are left out.
    """
    entries: List[OverbookingEntry] = []
    for trip in trips:
        waiting = [p for p in trip.passengers if p.is_overbooked and not p.assigned_partner_id]
        if waiting:
            entries.append(OverbookingEntry(trip=trip, passengers=waiting))
    return entries
