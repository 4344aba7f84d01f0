"""
Operations package - public boundary between callers and the transfer flows.

Provides the Operations facade that turns flow exceptions into tagged
results, plus exit-code mapping for the CLI.
"""
from .facade import Operations, read_last_file, write_file
from .mappers import exit_code_for, run_and_exit

__all__ = ["Operations", "read_last_file", "write_file", "exit_code_for", "run_and_exit"]
