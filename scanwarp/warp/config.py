# -*- coding: utf-8 -*-
"""
Warp Configuration - Tuning constants and resource limits for smart warps.

The segmentation thresholds (kilometres per segment, cut distance, pole
distance) come from operational tuning against polar-orbiting imagers and
are not derived values. They live here so a caller can override them per
operation without touching the algorithm.

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

# Standard library
from dataclasses import dataclass, replace
from typing import Any, Optional

# scanwarp internal
from scanwarp.exceptions import ValidationError


@dataclass(frozen=True)
class WarpConfig:
    """Tuning constants for segment planning, fitting and output sizing.

    Parameters
    ----------
    km_per_segment : float
        Track length, in kilometres, covered by one segment.
    cut_distance_km : float
        Gap between consecutive scanline GCPs above which a track is
        considered cut (loss of signal, pass boundary).
    pole_distance_km : float
        A segment with a GCP closer than this to a pole is fit in a
        pole-centred frame.
    memory_budget_bytes : int
        Upper bound on the mosaic footprint (16-bit samples).
    shrink_factor : float
        Scale applied to the output grid on each over-budget retry.
    min_output_dimension : int
        Smallest output width or height the memory guard may shrink to.
    max_overlap_passes : int
        Cap on the overlap expansion iteration. Each pass pulls one more
        neighbouring GCP scanline into the segment.
    max_workers : int, optional
        Thread count for the fit phase. ``None`` uses the executor default.
    lattice_step : int
        Output pixel spacing of the lattice the transform is evaluated
        on before bilinear densification. ``1`` evaluates every pixel.
    crop_margin_deg : float
        Margin added around the GCP bounding box when planning a crop.
    min_tps_points : int
        Fewest GCPs a thin-plate spline is fit from.
    tps_smoothing : float
        Thin-plate spline smoothing. ``0`` interpolates the GCPs exactly.
    """

    km_per_segment: float = 3000.0
    cut_distance_km: float = 2000.0
    pole_distance_km: float = 1000.0
    memory_budget_bytes: int = 4_000_000_000
    shrink_factor: float = 0.9
    min_output_dimension: int = 16
    max_overlap_passes: int = 2
    max_workers: Optional[int] = None
    lattice_step: int = 8
    crop_margin_deg: float = 0.0
    min_tps_points: int = 3
    tps_smoothing: float = 0.0

    def __post_init__(self) -> None:
        for name in ('km_per_segment', 'cut_distance_km', 'pole_distance_km'):
            if getattr(self, name) <= 0:
                raise ValidationError(
                    f"{name} must be positive, got {getattr(self, name)}"
                )
        if self.memory_budget_bytes <= 0:
            raise ValidationError(
                f"memory_budget_bytes must be positive, "
                f"got {self.memory_budget_bytes}"
            )
        if not 0.0 < self.shrink_factor < 1.0:
            raise ValidationError(
                f"shrink_factor must be in (0, 1), got {self.shrink_factor}"
            )
        if self.min_output_dimension < 1:
            raise ValidationError(
                f"min_output_dimension must be >= 1, "
                f"got {self.min_output_dimension}"
            )
        if self.max_overlap_passes < 1:
            raise ValidationError(
                f"max_overlap_passes must be >= 1, "
                f"got {self.max_overlap_passes}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValidationError(
                f"max_workers must be >= 1 or None, got {self.max_workers}"
            )
        if self.lattice_step < 1:
            raise ValidationError(
                f"lattice_step must be >= 1, got {self.lattice_step}"
            )
        if self.crop_margin_deg < 0:
            raise ValidationError(
                f"crop_margin_deg must be >= 0, got {self.crop_margin_deg}"
            )
        if self.min_tps_points < 3:
            raise ValidationError(
                f"min_tps_points must be >= 3, got {self.min_tps_points}"
            )
        if self.tps_smoothing < 0:
            raise ValidationError(
                f"tps_smoothing must be >= 0, got {self.tps_smoothing}"
            )

    def replace(self, **changes: Any) -> 'WarpConfig':
        """Return a copy with ``changes`` applied (validated again)."""
        return replace(self, **changes)


DEFAULT_CONFIG = WarpConfig()


def resolve_config(config: Optional[WarpConfig]) -> WarpConfig:
    """Return ``config``, or the module default when it is ``None``."""
    return DEFAULT_CONFIG if config is None else config
