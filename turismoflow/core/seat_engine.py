"""
Seat allocator. Pure logic only.

Seats are not stored: the map is rebuilt from the passenger list on every call,
walking it in stored order and giving each group `pax_count` consecutive seats.
Appending a passenger therefore never moves the seats of earlier passengers.
A group straddling the last seat is truncated; its remaining members simply do
not appear on the map.
"""

from typing import Dict, List, Sequence

from turismoflow.domain.constraints import FleetPolicy
from turismoflow.domain.models import Passenger, Seat, SeatStatus, VehicleType


def default_seats(vehicle_type: VehicleType, policy: FleetPolicy = FleetPolicy()) -> int:
    if vehicle_type == VehicleType.BUS:
        return policy.bus_default_seats
    return policy.other_default_seats


def allocate_seats(passengers: Sequence[Passenger], total_seats: int) -> List[Seat]:
    assignments: Dict[int, Passenger] = {}
    current_seat = 1
    for pax in passengers:
        if current_seat > total_seats:
            break
        for _ in range(pax.pax_count):
            if current_seat > total_seats:
                break
            assignments[current_seat] = pax
            current_seat += 1

    seats: List[Seat] = []
    for number in range(1, total_seats + 1):
        pax = assignments.get(number)
        if pax is None:
            status = SeatStatus.AVAILABLE
        elif pax.is_overbooked:
            status = SeatStatus.OVERBOOKED
        else:
            status = SeatStatus.OCCUPIED
        seats.append(Seat(number=number, status=status, passenger=pax))
    return seats


def available_seat_count(seats: Sequence[Seat]) -> int:
    return sum(1 for s in seats if s.status == SeatStatus.AVAILABLE)


def seat_rows(
    total_seats: int,
    vehicle_type: VehicleType,
    policy: FleetPolicy = FleetPolicy(),
) -> List[List[int]]:
    """Seat numbers grouped by row: 4 per row on a bus, 3 otherwise. Last row may be short."""
    per_row = policy.bus_seats_per_row if vehicle_type == VehicleType.BUS else policy.other_seats_per_row
    return [
        list(range(start, min(start + per_row, total_seats + 1)))
        for start in range(1, total_seats + 1, per_row)
    ]
