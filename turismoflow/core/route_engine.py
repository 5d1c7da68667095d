"""
Pickup route sequencer. Pure logic only: no geocoding client, no FastAPI.

Greedy nearest neighbour over haversine distance, starting at the agency:
- Passengers that are overbooked or already handed to a partner are not picked up.
- Each step moves to the closest remaining passenger with coordinates
  (first minimum wins, so ties keep input order).
- Once no remaining passenger has coordinates, the rest are appended in their
  current relative order.

This is a heuristic, not a TSP optimum. Each step computes the distances to all
remaining candidates (numpy, one vectorised pass), so a plan costs O(n²); fine for
manifests of tens of groups, not for thousands of stops.
"""

import re
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

import numpy as np

from turismoflow.domain.constraints import RoutingPolicy
from turismoflow.domain.models import (
    CompanyProfile,
    Coordinates,
    Passenger,
    RoutePlan,
    RouteStop,
    Trip,
)

_EARTH_RADIUS_KM = 6371.0

# Characters encodeURIComponent leaves untouched.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def haversine_km(a: Coordinates, b: Coordinates) -> float:
    """Great-circle distance in km between two points."""
    return float(_haversine_km_many(a, np.array([b.lat]), np.array([b.lng]))[0])


def _haversine_km_many(origin: Coordinates, lats: np.ndarray, lngs: np.ndarray) -> np.ndarray:
    lat1 = np.radians(origin.lat)
    lat2 = np.radians(lats)
    dlat = lat2 - lat1
    dlon = np.radians(lngs - origin.lng)
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    c = 2 * np.arcsin(np.sqrt(np.minimum(1.0, a)))
    return _EARTH_RADIUS_KM * c


def is_routable(passenger: Passenger) -> bool:
    """Overbooked groups and groups assigned to a partner travel by other means."""
    return not passenger.is_overbooked and not passenger.assigned_partner_id


def routable_passengers(passengers: Sequence[Passenger]) -> List[Passenger]:
    return [p for p in passengers if is_routable(p)]


def _greedy_sequence(
    origin: Coordinates,
    passengers: Sequence[Passenger],
) -> List[Tuple[Passenger, Optional[float]]]:
    """Visit order with the leg distance (km) to each stop; None for stops without coordinates."""
    remaining = list(passengers)
    current = origin
    sequence: List[Tuple[Passenger, Optional[float]]] = []

    while remaining:
        candidates = [i for i, p in enumerate(remaining) if p.boarding_coordinates is not None]
        if not candidates:
            sequence.extend((p, None) for p in remaining)
            break

        lats = np.array([remaining[i].boarding_coordinates.lat for i in candidates], dtype=float)
        lngs = np.array([remaining[i].boarding_coordinates.lng for i in candidates], dtype=float)
        distances = _haversine_km_many(current, lats, lngs)
        best = int(np.argmin(distances))  # argmin returns the first minimum

        nearest = remaining.pop(candidates[best])
        sequence.append((nearest, float(distances[best])))
        current = nearest.boarding_coordinates

    return sequence


def order_pickups(origin: Coordinates, passengers: Sequence[Passenger]) -> List[Passenger]:
    """
    Pickup order for the routable passengers, starting at `origin`.
    Excluded passengers (overbooked / partner-assigned) never appear in the result.
    """
    return [p for p, _ in _greedy_sequence(origin, routable_passengers(passengers))]


def _encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_directions_url(
    origin_name: str,
    ordered: Sequence[Passenger],
    base_url: str,
) -> str:
    """
    Shareable driving-directions link. Boarding addresses are de-duplicated by exact
    string (first occurrence kept); the last one is the destination, the others waypoints.
    """
    addresses: List[str] = []
    seen = set()
    for p in ordered:
        if p.boarding_location not in seen:
            seen.add(p.boarding_location)
            addresses.append(p.boarding_location)

    url = f"{base_url}&origin={_encode_component(origin_name)}"
    if addresses:
        url += f"&destination={_encode_component(addresses[-1])}"
    waypoints = addresses[:-1]
    if waypoints:
        url += "&waypoints=" + "|".join(_encode_component(w) for w in waypoints)
    return url


def resolve_origin(
    trip: Trip,
    company: CompanyProfile,
    policy: RoutingPolicy,
) -> Tuple[str, Coordinates]:
    """Origin text (trip origin unless empty/placeholder) and the coordinates to measure from."""
    if trip.origin and trip.origin != policy.origin_placeholder:
        origin_name = trip.origin
    else:
        origin_name = company.address
    origin_coords = company.address_coordinates or Coordinates(
        lat=policy.fallback_lat, lng=policy.fallback_lng
    )
    return origin_name, origin_coords


def plan_pickup_route(trip: Trip, company: CompanyProfile, policy: RoutingPolicy) -> RoutePlan:
    origin_name, origin_coords = resolve_origin(trip, company, policy)
    sequence = _greedy_sequence(origin_coords, routable_passengers(trip.passengers))

    stops = [
        RouteStop(order=i + 1, passenger=p, leg_km=leg)
        for i, (p, leg) in enumerate(sequence)
    ]
    total_km = float(sum(s.leg_km for s in stops if s.leg_km is not None))

    return RoutePlan(
        trip_id=trip.id,
        origin_name=origin_name,
        origin_coordinates=origin_coords,
        stops=stops,
        directions_url=build_directions_url(
            origin_name, [s.passenger for s in stops], policy.directions_base_url
        ),
        total_distance_km=total_km,
    )


def whatsapp_link(phone: str) -> str:
    return "https://wa.me/" + re.sub(r"[^0-9]", "", phone or "")


def phone_link(phone: str) -> str:
    return f"tel:{phone}"
