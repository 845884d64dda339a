"""
Orchestrators for the Nginx request exporter.

This module contains the orchestrator that coordinates
the flow between the ingest port and the histogram registry.
"""
from .orchestrator import Orchestrator

__all__ = ["Orchestrator"]
