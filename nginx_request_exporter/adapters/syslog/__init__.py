"""
Syslog ingress adapter.

This module contains the RFC3164 decoder and the datagram listener
that feed raw Nginx log payloads into the observation pipeline.
"""

from .listener import SyslogIngestor
from .rfc3164 import parse_rfc3164

__all__ = ["SyslogIngestor", "parse_rfc3164"]
