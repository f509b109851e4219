"""Structural fingerprinting of SQL statements."""

from sql_fingerprint.fingerprint import fingerprint_many, fingerprint_one
from sql_fingerprint.sql_toolkit import Dialect

__version__ = "0.1.0"

__all__ = [
    "Dialect",
    "fingerprint_many",
    "fingerprint_one",
    "__version__",
]
