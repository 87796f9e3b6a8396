"""legdata - Offline-first legislative data ingest CLI.

Daybreak file staging, archival, and calendar spot-check reporting for
legislative data maintainers.
"""

__version__ = "0.1.0"
__author__ = "legdata Contributors"

from legdata.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
