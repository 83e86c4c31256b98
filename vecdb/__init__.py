"""vecdb - embedding-backed similarity store.

Keeps a durable text → vector record store and an approximate nearest
neighbour index over those vectors in sync across process restarts.
"""

__version__ = "0.1.0"
__author__ = "vecdb Contributors"

from vecdb.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
