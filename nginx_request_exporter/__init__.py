"""
Nginx request exporter.

Receives Nginx access-log lines over syslog and exposes the numeric
values embedded in them as Prometheus histograms.
"""

__version__ = "0.1.0"
