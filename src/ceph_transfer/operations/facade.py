"""
Operations Facade - public boundary of ceph-transfer.

Wraps the raising flows of ``transfer`` and collapses every ``CephError``
into a tagged ``Err`` after logging it, so callers branch on ``Result.kind``
instead of catching exceptions or parsing logs.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from .. import transfer
from ..errors import CephError
from ..result import Err, Ok, Result
from ..selection import select_latest
from ..settings import Settings
from ..storage.base import ObjectSummary
from ..storage.s3_client import connect
from ..transfer import ClientFactory

__all__ = ["Operations", "write_file", "read_last_file"]

logger = logging.getLogger(__name__)


class Operations:
    """
    Application service facade over the transfer flows.

    Stateless apart from the injected settings and client factory; every call
    builds its own client, so one instance may be shared between threads.
    """

    def __init__(self, settings: Settings, client_factory: ClientFactory = connect):
        self.settings = settings
        self.client_factory = client_factory

    def write_file(self, local_file: Union[str, Path]) -> Result[str]:
        """
        Upload a local file under its base name.

        Returns:
            Ok(key) on success, Err(kind, message) otherwise
        """
        try:
            key = transfer.upload(self.settings, Path(local_file), client_factory=self.client_factory)
        except CephError as e:
            logger.error(f"Upload of {local_file} failed ({e.kind.value}): {e}")
            return Err.from_exception(e)
        return Ok(key)

    def read_last_file(self, destination_directory: Optional[Union[str, Path]] = None) -> Result[str]:
        """
        Download the latest object of the root bucket.

        Returns:
            Ok(file URI) on success, Err(kind, message) otherwise
        """
        dest = Path(destination_directory) if destination_directory is not None else None
        try:
            path = transfer.download_latest(self.settings, dest, client_factory=self.client_factory)
        except CephError as e:
            logger.error(f"Download of latest object from {self.settings.root_bucket} "
                         f"failed ({e.kind.value}): {e}")
            return Err.from_exception(e)
        return Ok(path.as_uri())

    def list_objects(self) -> Result[Tuple[List[ObjectSummary], Optional[ObjectSummary]]]:
        """
        List the root bucket and mark its latest object.

        Returns:
            Ok((summaries, latest)) on success, Err(kind, message) otherwise
        """
        try:
            client, bucket = transfer.connect_and_resolve(self.settings, client_factory=self.client_factory)
            summaries = transfer.list_objects(client, bucket)
        except CephError as e:
            logger.error(f"Listing of {self.settings.root_bucket} failed ({e.kind.value}): {e}")
            return Err.from_exception(e)
        return Ok((summaries, select_latest(summaries)))


def write_file(settings: Settings, local_file: Union[str, Path]) -> Result[str]:
    """Upload ``local_file`` to ``settings.root_bucket``; see Operations.write_file."""
    return Operations(settings, client_factory=connect).write_file(local_file)


def read_last_file(settings: Settings,
                   destination_directory: Optional[Union[str, Path]] = None) -> Result[str]:
    """Download the latest object of ``settings.root_bucket``; see Operations.read_last_file."""
    return Operations(settings, client_factory=connect).read_last_file(destination_directory)
