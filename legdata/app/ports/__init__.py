"""Port interfaces for the legdata application layer.

Domain logic depends on these ports, never on concrete implementations.
"""

__all__ = [
    "CalendarDataPort",
    "StoragePort",
]

from legdata.app.ports.calendar import CalendarDataPort
from legdata.app.ports.storage import StoragePort
