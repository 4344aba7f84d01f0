# Fake implementations for testing

from .fake_store import FakeStoreClient, T0

__all__ = ["FakeStoreClient", "T0"]
