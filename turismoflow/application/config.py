"""
Default configuration for the TurismoFlow use cases (agency profile, routing and fleet presets)
plus environment settings for the collaborators.
Un solo lugar para evitar duplicar valores entre API, CLI y motores.
"""

import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

from turismoflow.domain.constraints import FleetPolicy, RoutingPolicy
from turismoflow.domain.models import DEFAULT_VEHICLE_MODEL, CompanyProfile, Coordinates  # noqa: F401

DEFAULT_ORIGIN_PLACEHOLDER = "Agência Sede"
DEFAULT_TRIP_TIME = "08:00"
MAPS_DIRECTIONS_BASE_URL = "https://www.google.com/maps/dir/?api=1"

# Agencia por defecto (Fortaleza) cuando no hay perfil guardado
DEFAULT_COMPANY_PROFILE = CompanyProfile(
    name="TurismoFlow Agência",
    address="Av. Beira Mar, 4000, Fortaleza - CE",
    address_coordinates=Coordinates(lat=-3.71839, lng=-38.5434),
    phone="+55 (85) 33333-3333",
    email="contato@turismoflow.com",
)

DEFAULT_ROUTING_POLICY = RoutingPolicy(
    origin_placeholder=DEFAULT_ORIGIN_PLACEHOLDER,
    directions_base_url=MAPS_DIRECTIONS_BASE_URL,
)

DEFAULT_FLEET_POLICY = FleetPolicy()

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"
DEFAULT_NOMINATIM_URL = "https://nominatim.openstreetmap.org/search"


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    supabase_user_id: Optional[str] = None
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    nominatim_url: str = DEFAULT_NOMINATIM_URL
    geocoder_country: str = "br"
    geocoder_user_agent: str = "turismoflow/1.0"
    http_timeout_seconds: float = 20.0
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:5173"])
    seed_sample_data: bool = True
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment (and a local .env file when present)."""
    load_dotenv()
    return Settings(
        supabase_url=os.getenv("SUPABASE_URL") or None,
        supabase_key=os.getenv("SUPABASE_KEY") or None,
        supabase_user_id=os.getenv("SUPABASE_USER_ID") or None,
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
        nominatim_url=os.getenv("NOMINATIM_URL", DEFAULT_NOMINATIM_URL),
        geocoder_country=os.getenv("GEOCODER_COUNTRY", "br"),
        geocoder_user_agent=os.getenv("GEOCODER_USER_AGENT", "turismoflow/1.0"),
        http_timeout_seconds=float(os.getenv("HTTP_TIMEOUT_SECONDS", "20") or 20),
        cors_origins=_env_list("CORS_ORIGINS", ["http://localhost:5173"]),
        seed_sample_data=_env_bool("SEED_SAMPLE_DATA", True),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
