from dataclasses import dataclass
from typing import Optional

from django.db import DEFAULT_DB_ALIAS, connections
from django.db.utils import Error as DatabaseError


@dataclass(frozen=True)
class DatabaseStatus:
    connected: bool
    vendor: str
    error: Optional[str] = None

    @property
    def label(self) -> str:
        return "connected" if self.connected else "disconnected"


def database_status(alias: str = DEFAULT_DB_ALIAS) -> DatabaseStatus:
    """Ask the connection handler whether the database answers right now."""
    connection = connections[alias]
    try:
        connection.ensure_connection()
        with connection.cursor() as cursor:
            cursor.execute("SELECT 1")
            cursor.fetchone()
    except DatabaseError as exc:
        return DatabaseStatus(connected=False, vendor=connection.vendor, error=str(exc))
    return DatabaseStatus(connected=True, vendor=connection.vendor)
