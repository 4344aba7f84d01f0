"""
Tests for the transfer flows.

Runs connect-and-resolve, upload and download-latest against FakeStoreClient,
covering the failure taxonomy and the integrity check.
"""
from __future__ import annotations

import logging
import stat
import sys
from datetime import timedelta
from pathlib import Path

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError, IncompleteReadError

from ceph_transfer import transfer
from ceph_transfer.errors import (
    BucketNotFoundError, CephConnectionError, CephIntegrityError, CephListingError,
    CephTransferError, ErrorKind, NoObjectsFoundError,
)
from ceph_transfer.path_safety import TMP_DIRECTORY_PREFIX
from tests.fakes.fake_store import FakeStoreClient, T0


def _client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class TestConnectAndResolve:

    def test_resolves_root_bucket(self, settings, store, client_factory):
        client, bucket = transfer.connect_and_resolve(settings, client_factory=client_factory)
        assert client is store
        assert bucket.name == "data"

    def test_factory_failure_is_connection_error(self, settings):
        def broken(_settings):
            raise ValueError("Invalid endpoint")

        with pytest.raises(CephConnectionError) as exc_info:
            transfer.connect_and_resolve(settings, client_factory=broken)
        assert exc_info.value.kind is ErrorKind.CONNECTION

    def test_bucket_listing_failure_is_connection_error(self, settings, store, client_factory):
        store.fail("list_buckets", EndpointConnectionError(endpoint_url="http://x"))
        with pytest.raises(CephConnectionError, match="Cannot list buckets"):
            transfer.connect_and_resolve(settings, client_factory=client_factory)

    def test_missing_bucket(self, settings):
        store = FakeStoreClient(buckets=["other"])
        with pytest.raises(BucketNotFoundError) as exc_info:
            transfer.connect_and_resolve(settings, client_factory=lambda s: store)
        assert exc_info.value.bucket == "data"
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert [name for name, _ in store.calls] == ["list_buckets"]


class TestUpload:

    def test_upload_uses_base_name_as_key(self, settings, store, client_factory, tmp_path):
        source = tmp_path / "f.txt"
        source.write_text("Message")

        key = transfer.upload(settings, source, client_factory=client_factory)

        assert key == "f.txt"
        assert store.object_bytes("data", "f.txt") == b"Message"

    def test_upload_overwrites_existing_key(self, settings, store, client_factory, tmp_path):
        store.add_object("data", "f.txt", b"old")
        source = tmp_path / "f.txt"
        source.write_bytes(b"new")

        transfer.upload(settings, source, client_factory=client_factory)
        assert store.object_bytes("data", "f.txt") == b"new"

    def test_put_failure_is_transfer_error(self, settings, store, client_factory, tmp_path):
        source = tmp_path / "f.txt"
        source.write_text("Message")
        store.fail("put_object", _client_error("AccessDenied", "PutObject"))

        with pytest.raises(CephTransferError, match="Cannot upload file 'f.txt'"):
            transfer.upload(settings, source, client_factory=client_factory)

    def test_missing_local_file(self, settings, store, client_factory, tmp_path):
        with pytest.raises(CephTransferError, match="Local file not found"):
            transfer.upload(settings, tmp_path / "absent.txt", client_factory=client_factory)
        assert not store.called("put_object")

    def test_missing_bucket_stops_before_put(self, settings, tmp_path):
        store = FakeStoreClient(buckets=["other"])
        source = tmp_path / "f.txt"
        source.write_text("Message")

        with pytest.raises(BucketNotFoundError):
            transfer.upload(settings, source, client_factory=lambda s: store)
        assert not store.called("put_object")


class TestDownloadLatest:

    def test_downloads_latest_into_new_temp_directory(self, settings, store, client_factory):
        store.add_object("data", "a.txt", b"first", modified=T0)
        store.add_object("data", "b.txt", b"second", modified=T0 + timedelta(minutes=5))

        path = transfer.download_latest(settings, client_factory=client_factory)

        assert path.name == "b.txt"
        assert path.parent.name.startswith(TMP_DIRECTORY_PREFIX)
        assert path.read_bytes() == b"second"
        assert ("get_object", ("data", "b.txt", path)) in store.calls

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX permissions")
    def test_temp_directory_permissions(self, settings, store, client_factory):
        store.add_object("data", "a.txt", b"x")
        path = transfer.download_latest(settings, client_factory=client_factory)
        assert stat.S_IMODE(path.parent.stat().st_mode) == 0o744

    def test_each_call_uses_a_fresh_directory(self, settings, store, client_factory):
        store.add_object("data", "a.txt", b"x")
        first = transfer.download_latest(settings, client_factory=client_factory)
        second = transfer.download_latest(settings, client_factory=client_factory)
        assert first.parent != second.parent

    def test_destination_directory_is_used_as_is(self, settings, store, client_factory, tmp_path):
        store.add_object("data", "a.txt", b"content")
        path = transfer.download_latest(settings, tmp_path, client_factory=client_factory)
        assert path == tmp_path / "a.txt"

    def test_key_with_prefix_creates_parent_directories(self, settings, store, client_factory, tmp_path):
        store.add_object("data", "reports/2024/day.csv", b"a,b\n")
        path = transfer.download_latest(settings, tmp_path, client_factory=client_factory)
        assert path == tmp_path / "reports" / "2024" / "day.csv"
        assert path.read_bytes() == b"a,b\n"

    def test_empty_bucket_fails_without_get(self, settings, store, client_factory):
        with pytest.raises(NoObjectsFoundError) as exc_info:
            transfer.download_latest(settings, client_factory=client_factory)
        assert exc_info.value.kind is ErrorKind.NOT_FOUND
        assert not store.called("get_object")

    def test_missing_bucket_fails_before_listing(self, settings):
        store = FakeStoreClient(buckets=["other"])
        with pytest.raises(BucketNotFoundError):
            transfer.download_latest(settings, client_factory=lambda s: store)
        assert not store.called("list_objects")
        assert not store.called("get_object")

    def test_listing_failure(self, settings, store, client_factory):
        store.fail("list_objects", _client_error("NoSuchBucket", "ListObjects"))
        with pytest.raises(CephListingError):
            transfer.download_latest(settings, client_factory=client_factory)

    def test_get_failure_is_transfer_error(self, settings, store, client_factory, tmp_path):
        store.add_object("data", "a.txt", b"x")
        store.fail("get_object", _client_error("AccessDenied", "GetObject"))
        with pytest.raises(CephTransferError, match="Cannot download 'a.txt'"):
            transfer.download_latest(settings, tmp_path, client_factory=client_factory)

    def test_length_mismatch_is_integrity_error(self, settings, store, client_factory, tmp_path):
        store.add_object("data", "a.bin", b"x" * 99)
        store.length_skew = 1  # store reports 100 bytes, writes 99

        with pytest.raises(CephIntegrityError) as exc_info:
            transfer.download_latest(settings, tmp_path, client_factory=client_factory)

        assert exc_info.value.expected == 100
        assert exc_info.value.actual == 99
        assert exc_info.value.kind is ErrorKind.INTEGRITY
        # partial file is left in place
        assert (tmp_path / "a.bin").stat().st_size == 99

    def test_incomplete_read_is_integrity_error(self, settings, store, client_factory, tmp_path):
        store.add_object("data", "a.bin", b"x" * 99)
        store.fail("get_object", IncompleteReadError(actual_bytes=99, expected_bytes=100))

        with pytest.raises(CephIntegrityError, match="expected 100, got 99") as exc_info:
            transfer.download_latest(settings, tmp_path, client_factory=client_factory)

        assert exc_info.value.expected == 100
        assert exc_info.value.actual == 99

    @pytest.mark.parametrize("exc", [KeyError("ContentLength"), TypeError("'NoneType' object is not subscriptable")])
    def test_malformed_get_response_is_transfer_error(self, settings, store, client_factory, tmp_path, exc):
        store.add_object("data", "a.txt", b"x")
        store.fail("get_object", exc)
        with pytest.raises(CephTransferError, match="Cannot download 'a.txt'"):
            transfer.download_latest(settings, tmp_path, client_factory=client_factory)

    def test_malformed_bucket_listing_is_connection_error(self, settings, store, client_factory):
        store.fail("list_buckets", KeyError("Name"))
        with pytest.raises(CephConnectionError):
            transfer.download_latest(settings, client_factory=client_factory)

    def test_logs_listing_and_content(self, settings, store, client_factory, tmp_path, caplog):
        store.add_object("data", "a.txt", b"one", modified=T0)
        store.add_object("data", "b.txt", b"line 1\nline 2\n", modified=T0 + timedelta(seconds=1))

        with caplog.at_level(logging.INFO, logger="ceph_transfer.transfer"):
            transfer.download_latest(settings, tmp_path, client_factory=client_factory)

        messages = [r.getMessage() for r in caplog.records]
        assert "Found '2' files" in messages
        assert f"a.txt, 3 bytes, {T0.isoformat()}" in messages
        assert "Found last modified file: b.txt" in messages
        assert "line 1" in messages
        assert "line 2" in messages


class TestRoundTrip:

    def test_upload_then_download_latest(self, settings, store, client_factory, tmp_path):
        source_dir = tmp_path / "src"
        source_dir.mkdir()
        source = source_dir / "f.txt"
        source.write_text("Message")
        store.add_object("data", "older.txt", b"old", modified=T0 - timedelta(days=1))

        transfer.upload(settings, source, client_factory=client_factory)
        downloaded = transfer.download_latest(settings, client_factory=client_factory)

        assert downloaded.name == "f.txt"
        assert downloaded.stat().st_size == source.stat().st_size == 7
        assert downloaded.read_text() == "Message"


class TestLogFileContent:

    def test_binary_content_does_not_raise(self, tmp_path, caplog):
        path = tmp_path / "blob.bin"
        path.write_bytes(bytes(range(256)))
        with caplog.at_level(logging.INFO, logger="ceph_transfer.transfer"):
            transfer.log_file_content(path)
        assert "Downloaded local file content:" in caplog.text

    def test_unreadable_file_is_logged(self, tmp_path, caplog):
        with caplog.at_level(logging.ERROR, logger="ceph_transfer.transfer"):
            transfer.log_file_content(tmp_path / "missing.txt")
        assert "Cannot print downloaded file" in caplog.text
