"""
Hosted persistence backend (Supabase / PostgREST) over httpx.

Tables: trips, passengers, partners, company_profiles (snake_case columns, row-level
security scoped to the authenticated user). When the tables do not exist yet the
backend answers 404 / relation-missing codes; that is raised as BackendSetupRequired,
never as an empty result, so the caller can point the operator at the setup script.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

import httpx

from turismoflow.domain.errors import BackendSetupRequired, NotFoundError, PersistenceError
from turismoflow.domain.models import CompanyProfile, Partner, Passenger, Trip
from turismoflow.infrastructure.record_loader import (
    dump_company_profile,
    dump_partner,
    dump_passenger,
    dump_trip,
    load_company_profile,
    load_partner,
    load_passenger,
    load_trip,
)
from turismoflow.infrastructure.repository import check_passenger_changes

_logger = logging.getLogger(__name__)

# PostgREST / Postgres codes for "relation does not exist".
_MISSING_TABLE_CODES = frozenset({"42P01", "PGRST205"})


class SupabaseCrmRepository:
    def __init__(
        self,
        url: str,
        api_key: str,
        user_id: Optional[str] = None,
        timeout: float = 20.0,
        client: Optional[httpx.Client] = None,
    ):
        """
        Args:
            url: project URL (https://<project>.supabase.co)
            api_key: anon or service key; also sent as bearer token
            user_id: owner written into user_id columns on insert (RLS)
            timeout: HTTP timeout in seconds
            client: optional pre-built httpx.Client (tests inject a MockTransport)
        """
        self.rest_url = url.rstrip("/") + "/rest/v1"
        self.user_id = user_id
        self._headers = {
            "apikey": api_key,
            "Authorization": f"Bearer {api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        self._client = client or httpx.Client(timeout=timeout)

    # --- HTTP plumbing ---

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[Dict[str, str]] = None,
        json: Any = None,
        prefer: Optional[str] = None,
    ) -> Any:
        headers = dict(self._headers)
        if prefer:
            headers["Prefer"] = prefer
        try:
            response = self._client.request(
                method, f"{self.rest_url}/{table}", params=params, json=json, headers=headers
            )
        except httpx.RequestError as e:
            _logger.error("Persistence backend unreachable: %s %s: %s", method, table, e)
            raise PersistenceError(f"Backend request failed: {e}") from e

        if response.status_code >= 400:
            self._raise_for_error(response, table)
        if not response.content:
            return None
        return response.json()

    def _raise_for_error(self, response: httpx.Response, table: str) -> None:
        code = ""
        detail = response.text[:500]
        try:
            body = response.json()
            if isinstance(body, dict):
                code = str(body.get("code") or "")
                detail = str(body.get("message") or detail)
        except ValueError:
            pass

        if code in _MISSING_TABLE_CODES or response.status_code == 404:
            _logger.error("Backend table missing: table=%s code=%s", table, code)
            raise BackendSetupRequired(
                f"Table '{table}' not found in the backend; run the database setup script"
            )
        _logger.error(
            "Backend error: table=%s status=%d code=%s detail=%s",
            table, response.status_code, code, detail,
        )
        raise PersistenceError(f"Backend error (HTTP {response.status_code}): {detail}")

    def _owned(self, row: dict) -> dict:
        if self.user_id:
            row = {**row, "user_id": self.user_id}
        return row

    # --- Trips & passengers ---

    def list_trips(self) -> List[Trip]:
        rows = self._request(
            "GET",
            "trips",
            params={
                "select": "*,passengers(*)",
                "order": "date.asc,time.asc",
                "passengers.order": "created_at.asc",
            },
        )
        return [load_trip(r) for r in rows or []]

    def get_trip(self, trip_id: str) -> Trip:
        rows = self._request(
            "GET",
            "trips",
            params={
                "select": "*,passengers(*)",
                "id": f"eq.{trip_id}",
                "passengers.order": "created_at.asc",
            },
        )
        if not rows:
            raise NotFoundError(f"Trip not found: {trip_id}")
        return load_trip(rows[0])

    def add_trip(self, trip: Trip) -> Trip:
        rows = self._request(
            "POST", "trips", json=self._owned(dump_trip(trip)), prefer="return=representation"
        )
        _logger.info("Trip stored: id=%s destination=%s", trip.id, trip.destination)
        return load_trip(rows[0]) if rows else trip

    def add_passenger(self, trip_id: str, passenger: Passenger) -> Passenger:
        rows = self._request(
            "POST",
            "passengers",
            json=self._owned(dump_passenger(passenger, trip_id)),
            prefer="return=representation",
        )
        return load_passenger(rows[0]) if rows else passenger

    def book_passenger(self, trip_id: str, build: Callable[[Trip], Passenger]) -> Passenger:
        """
        Read-then-insert over two requests: concurrent bookings from other clients can
        land in between, so the overbooking flag here is best-effort.
        """
        return self.add_passenger(trip_id, build(self.get_trip(trip_id)))

    def update_passenger(self, trip_id: str, passenger_id: str, **changes) -> Passenger:
        check_passenger_changes(changes)
        payload = {
            key: (value.value if hasattr(value, "value") else value)
            for key, value in changes.items()
        }
        rows = self._request(
            "PATCH",
            "passengers",
            params={"id": f"eq.{passenger_id}", "trip_id": f"eq.{trip_id}"},
            json=payload,
            prefer="return=representation",
        )
        if not rows:
            raise NotFoundError(f"Passenger not found on trip {trip_id}: {passenger_id}")
        return load_passenger(rows[0])

    # --- Partners ---

    def list_partners(self) -> List[Partner]:
        rows = self._request("GET", "partners", params={"select": "*", "order": "name.asc"})
        return [load_partner(r) for r in rows or []]

    def get_partner(self, partner_id: str) -> Partner:
        rows = self._request("GET", "partners", params={"select": "*", "id": f"eq.{partner_id}"})
        if not rows:
            raise NotFoundError(f"Partner not found: {partner_id}")
        return load_partner(rows[0])

    def add_partner(self, partner: Partner) -> Partner:
        rows = self._request(
            "POST", "partners", json=self._owned(dump_partner(partner)), prefer="return=representation"
        )
        return load_partner(rows[0]) if rows else partner

    def update_partner(self, partner: Partner) -> Partner:
        row = dump_partner(partner)
        row.pop("id")
        rows = self._request(
            "PATCH",
            "partners",
            params={"id": f"eq.{partner.id}"},
            json=row,
            prefer="return=representation",
        )
        if not rows:
            raise NotFoundError(f"Partner not found: {partner.id}")
        return load_partner(rows[0])

    # --- Company profile (one row per user) ---

    def get_company_profile(self) -> Optional[CompanyProfile]:
        params = {"select": "*", "limit": "1"}
        if self.user_id:
            params["user_id"] = f"eq.{self.user_id}"
        rows = self._request("GET", "company_profiles", params=params)
        if not rows:
            return None
        return load_company_profile(rows[0])

    def save_company_profile(self, profile: CompanyProfile) -> CompanyProfile:
        """Upsert keyed on user_id; without an owner every save would add another row."""
        if not self.user_id:
            raise ValueError("SUPABASE_USER_ID is required to store the company profile")
        rows = self._request(
            "POST",
            "company_profiles",
            params={"on_conflict": "user_id"},
            json=self._owned(dump_company_profile(profile)),
            prefer="resolution=merge-duplicates,return=representation",
        )
        return load_company_profile(rows[0]) if rows else profile
