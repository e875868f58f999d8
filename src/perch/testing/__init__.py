"""Test utilities for perch routers.

    from perch.testing import TestClient, fetch_event
"""

from perch.testing.client import TestClient
from perch.testing.events import fetch_event

__all__ = [
    "TestClient",
    "fetch_event",
]
