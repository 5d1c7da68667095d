"""
FastAPI para TurismoFlow.

Capa API HTTP sobre los casos de uso. Backend in-memory por defecto;
Supabase cuando SUPABASE_URL está configurado.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from turismoflow.api.router import router
from turismoflow.application.config import Settings, load_settings
from turismoflow.application.sample_data import seed_sample_data
from turismoflow.infrastructure.email_drafter import EmailDrafter, GeminiEmailDrafter
from turismoflow.infrastructure.geocoding import Geocoder, NominatimGeocoder
from turismoflow.infrastructure.repository import CrmRepository, InMemoryCrmRepository
from turismoflow.infrastructure.supabase_repository import SupabaseCrmRepository

_logger = logging.getLogger(__name__)


def build_repository(settings: Settings) -> CrmRepository:
    if settings.supabase_url and settings.supabase_key:
        _logger.info("Using Supabase backend at %s", settings.supabase_url)
        if not settings.supabase_user_id:
            _logger.warning("SUPABASE_USER_ID is not set; the company profile cannot be saved")
        return SupabaseCrmRepository(
            settings.supabase_url,
            settings.supabase_key,
            user_id=settings.supabase_user_id,
            timeout=settings.http_timeout_seconds,
        )
    _logger.info("Using in-memory backend (data is lost on restart)")
    repository = InMemoryCrmRepository()
    if settings.seed_sample_data:
        seed_sample_data(repository)
    return repository


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[CrmRepository] = None,
    geocoder: Optional[Geocoder] = None,
    drafter: Optional[EmailDrafter] = None,
) -> FastAPI:
    """Tests pass their own collaborators; anything missing is built from settings."""
    settings = settings or load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="TurismoFlow API",
        description="CRM de viagens: reservas, overbooking, assentos e rota de embarque",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.repository = repository if repository is not None else build_repository(settings)
    app.state.geocoder = geocoder or NominatimGeocoder(
        api_url=settings.nominatim_url,
        country_codes=settings.geocoder_country,
        user_agent=settings.geocoder_user_agent,
        timeout=settings.http_timeout_seconds,
    )
    app.state.drafter = drafter or GeminiEmailDrafter(
        settings.gemini_api_key,
        model=settings.gemini_model,
    )
    app.include_router(router)
    return app


app = create_app()


# Bloque para ejecutar con uvicorn
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("turismoflow.api.main:app", host="0.0.0.0", port=8000, reload=True)
