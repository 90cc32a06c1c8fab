"""
Candlestick Pattern Recognition Module

This module contains the predicates and detectors that decide whether a
trading day, or a short run of days, forms a named candlestick pattern.

Pattern Types:
- Single day patterns (Hammer)
- Three day patterns (Three White Soldiers, Evening Star)

Import detectors from their submodules; this package stays import-free so
that the models can use the shape arithmetic in shapes.py.
"""

__all__ = []
