"""
TurismoFlow domain constraints. Dataclasses only. No FastAPI, no external deps beyond dataclasses/typing.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class RoutingPolicy:
    # Trip origin value meaning "start at the agency"; replaced by the company address.
    origin_placeholder: str
    directions_base_url: str
    # Origin used for distances when the company has no coordinates.
    fallback_lat: float = 0.0
    fallback_lng: float = 0.0


@dataclass(frozen=True)
class FleetPolicy:
    bus_default_seats: int = 50
    other_default_seats: int = 15
    bus_seats_per_row: int = 4
    other_seats_per_row: int = 3
