"""
Adapters for the Nginx request exporter.

This module contains the concrete implementations of port interfaces
that handle external I/O and infrastructure concerns.
"""

from .syslog import SyslogIngestor

__all__ = ["SyslogIngestor"]
