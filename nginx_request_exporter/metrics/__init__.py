"""
Dynamic histogram registry for the Nginx request exporter.
"""

from .registry import HistogramRegistry

__all__ = ["HistogramRegistry"]
