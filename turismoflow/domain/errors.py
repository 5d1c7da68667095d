"""
Domain errors shared by the use cases, the adapters and the API layer.

Invalid operator input is reported with plain ValueError; the classes below
describe missing records and collaborator failures.
"""


class CrmError(Exception):
    """Base class for TurismoFlow errors."""


class NotFoundError(CrmError):
    """A trip, passenger or partner id does not exist."""


class PersistenceError(CrmError):
    """The persistence backend rejected or could not serve a request."""


class BackendSetupRequired(PersistenceError):
    """The backing tables are missing; the backend needs its setup script."""


class GeocodingError(CrmError):
    """The geocoding service failed (as opposed to returning no matches)."""
