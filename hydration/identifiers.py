"""Event identifiers."""

from uuid import uuid4


IMPORT_ID_PREFIX = "import-"


def new_event_id() -> str:
    """Create a new unique event identifier."""
    return str(uuid4())


def import_event_id(day_key: str) -> str:
    """
    Deterministic identifier for the placeholder event of a migrated day.

    Derived from the date only, so migrating the same data twice never
    produces two different placeholder events.
    """
    return f"{IMPORT_ID_PREFIX}{day_key}"
