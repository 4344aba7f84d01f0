"""
ceph-transfer: upload files to a Ceph RGW bucket and fetch its latest object.
"""
from .errors import ErrorKind
from .operations.facade import Operations, read_last_file, write_file
from .result import Err, Ok, Result
from .settings import Settings, TransportConfig, create_settings_from_env

__all__ = [
    "ErrorKind",
    "Err",
    "Ok",
    "Operations",
    "Result",
    "Settings",
    "TransportConfig",
    "create_settings_from_env",
    "read_last_file",
    "write_file",
]
