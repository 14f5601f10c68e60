# -*- coding: utf-8 -*-
"""
Scanwarp Exception Hierarchy - Domain-specific exceptions for warp operations.

Provides a small exception hierarchy that lets downstream consumers (e.g.,
ground-station product pipelines) catch scanwarp errors distinctly from
Python built-in exceptions. All scanwarp exceptions subclass both
``ScanwarpError`` and the appropriate built-in exception for backward
compatibility.

Author
------
scanwarp contributors

License
-------
MIT License
Copyright (c) 2026 scanwarp contributors
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""


class ScanwarpError(Exception):
    """Base exception for all scanwarp errors."""


class ValidationError(ScanwarpError, ValueError):
    """Invalid input data, parameters, or configuration.

    Raised for raster shape problems, non-positive output dimensions,
    byte budgets or channel counts, and out-of-range configuration values.
    """


class InsufficientGCPError(ValidationError):
    """Too few ground control points for the requested operation.

    Raised when a GCP list has fewer than two distinct scanlines (segment
    planning), fewer points than a thin-plate spline needs, or no points
    at all (crop planning).
    """


class MemoryBudgetError(ScanwarpError, MemoryError):
    """The output mosaic cannot fit in the configured byte budget.

    Raised when shrinking the output grid would push a dimension below
    the configured minimum before the footprint drops under the budget.
    """


class WarpError(ScanwarpError, RuntimeError):
    """Transform fitting or evaluation failure during a segment warp.

    Raised when the thin-plate-spline solve fails, for example on a
    singular system from collinear GCPs.
    """


class GeolocationError(ScanwarpError, RuntimeError):
    """Geodesic computation failure.

    Raised for non-finite coordinates or an inverse geodesic solution
    that does not converge.
    """
