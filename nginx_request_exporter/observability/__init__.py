"""
Observability for the Nginx request exporter: logging, fixed counters
and the HTTP exposition endpoints.
"""
