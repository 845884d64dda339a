"""
Port interfaces for the Nginx request exporter.

This module defines the port interfaces (Protocols) that define
the contracts between the observation pipeline and external adapters.
"""

from .ingest import SyslogIngestPort
from .metrics import HistogramRegistryPort

__all__ = ["SyslogIngestPort", "HistogramRegistryPort"]
