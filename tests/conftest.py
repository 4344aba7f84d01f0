"""Root pytest configuration for ceph-transfer tests."""
import pytest

from ceph_transfer.settings import Settings
from ceph_transfer.operations.facade import Operations
from .fakes.fake_store import FakeStoreClient


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires a live RGW endpoint)"
    )


# Set up test environment variables
@pytest.fixture(autouse=True)
def test_env(monkeypatch):
    """Automatically set up test environment variables."""
    monkeypatch.setenv("CEPH_ACCESS_KEY", "KEY")
    monkeypatch.setenv("CEPH_SECRET_KEY", "SECRET")
    monkeypatch.setenv("CEPH_ENDPOINT", "https://x")
    monkeypatch.setenv("CEPH_ROOT_BUCKET", "data")


@pytest.fixture
def settings():
    """Standard test settings."""
    return Settings(
        access_key="KEY",
        secret_key="SECRET",
        endpoint="https://x",
        root_bucket="data",
    )


@pytest.fixture
def store():
    """Fake store with the root bucket and one unrelated bucket."""
    return FakeStoreClient(buckets=["data", "other"])


@pytest.fixture
def client_factory(store):
    """Client factory handing out the shared fake store."""
    return lambda settings: store


@pytest.fixture
def operations(settings, client_factory):
    """Operations facade wired to the fake store."""
    return Operations(settings, client_factory=client_factory)
