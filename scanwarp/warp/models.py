# -*- coding: utf-8 -*-
"""
Warp Data Models - Operations, crop windows, segments and results.

``WarpOperation`` describes one georeferencing job: the source raster, its
ground control points and the full-globe equirectangular grid the output
is cut from. ``CropSettings`` is a window of that grid, ``SegmentConfig``
one planned piece of the scan track, and ``WarpResult`` a warped raster
with its corner geo-coordinates.

Rasters are ``(channels, rows, cols)`` arrays of 16-bit samples. Warped
rasters always carry an alpha channel as their last channel.

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
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, NamedTuple, Optional

# Third-party
import numpy as np

# scanwarp internal
from scanwarp.exceptions import ValidationError
from scanwarp.geolocation.gcp import GroundControlPoint

#: Bytes per output sample (16-bit)
BYTES_PER_SAMPLE = 2

#: Fully opaque alpha value
ALPHA_OPAQUE = 65535


@dataclass
class WarpOperation:
    """One georeferencing job.

    Parameters
    ----------
    input_image : np.ndarray
        Source raster, ``(rows, cols)`` or ``(channels, rows, cols)``.
        Stored channels-first.
    ground_control_points : List[GroundControlPoint]
        GCPs in source pixel coordinates.
    output_width : float
        Width of the full-globe equirectangular grid, in pixels.
    output_height : float
        Height of the full-globe equirectangular grid, in pixels.
    output_rgba : bool
        Produce RGB plus alpha instead of native channels plus alpha.
    shift_lon : float
        Longitude shift of the working frame, in degrees.
    shift_lat : float
        Pole rotation of the working frame, in degrees.
    """

    input_image: np.ndarray
    ground_control_points: List[GroundControlPoint]
    output_width: float
    output_height: float
    output_rgba: bool = False
    shift_lon: float = 0.0
    shift_lat: float = 0.0

    def __post_init__(self) -> None:
        image = np.asarray(self.input_image)
        if image.ndim == 2:
            image = image[np.newaxis]
        if image.ndim != 3:
            raise ValidationError(
                f"input_image must be 2D or 3D, got {image.ndim}D"
            )
        self.input_image = image
        self.ground_control_points = list(self.ground_control_points)

        if self.output_width <= 0 or self.output_height <= 0:
            raise ValidationError(
                f"Output size must be positive, got "
                f"{self.output_width}x{self.output_height}"
            )

    @property
    def width(self) -> int:
        """Source raster width in pixels."""
        return self.input_image.shape[2]

    @property
    def height(self) -> int:
        """Source raster height in scanlines."""
        return self.input_image.shape[1]

    @property
    def source_channels(self) -> int:
        """Number of source channels."""
        return self.input_image.shape[0]

    @property
    def output_channels(self) -> int:
        """Channels of the warped raster, alpha included."""
        return 4 if self.output_rgba else self.source_channels + 1

    def copy(self) -> 'WarpOperation':
        """Clone the operation. The source raster is shared, not copied."""
        return replace(self)

    def for_segment(self, segment: 'SegmentConfig') -> 'WarpOperation':
        """
        Clone the operation scoped to one segment.

        Parameters
        ----------
        segment : SegmentConfig
            Planned segment.

        Returns
        -------
        WarpOperation
            Operation whose raster is cropped to the segment's scanlines,
            carrying the segment's rebased GCPs and shift.
        """
        return replace(
            self,
            input_image=self.input_image[:, segment.y_start:segment.y_end],
            ground_control_points=list(segment.gcps),
            shift_lon=segment.shift_lon,
            shift_lat=segment.shift_lat,
        )


@dataclass
class CropSettings:
    """Window of the full-globe grid.

    Parameters
    ----------
    x_min, x_max, y_min, y_max : int
        Pixel bounds in the full-globe grid (max exclusive).
    lon_min, lon_max, lat_min, lat_max : float
        Geographic extent of the window in degrees.
    """

    x_min: int
    x_max: int
    y_min: int
    y_max: int
    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    @property
    def width(self) -> int:
        return abs(self.x_max - self.x_min)

    @property
    def height(self) -> int:
        return abs(self.y_max - self.y_min)

    def memory_footprint(self, channels: int) -> int:
        """Bytes needed for a 16-bit raster of this window."""
        return self.width * self.height * channels * BYTES_PER_SAMPLE


@dataclass
class SegmentConfig:
    """One planned piece of the scan track.

    Parameters
    ----------
    y_start, y_end : int
        Source scanline range ``[y_start, y_end)``.
    shift_lon, shift_lat : float
        Working-frame shift for this segment's transform.
    gcps : List[GroundControlPoint]
        GCPs inside the range, ``y`` rebased to the segment.
    transform : Any, optional
        Fitted transform handle. ``None`` until the fit phase runs.
    """

    y_start: int
    y_end: int
    shift_lon: float = 0.0
    shift_lat: float = 0.0
    gcps: List[GroundControlPoint] = field(default_factory=list)
    transform: Optional[Any] = None

    @property
    def height(self) -> int:
        return self.y_end - self.y_start


class GeoCorner(NamedTuple):
    """A raster corner: pixel position and geographic coordinate."""

    x: float
    y: float
    lon: float
    lat: float


@dataclass
class WarpResult:
    """A warped raster and its corner coordinates.

    Parameters
    ----------
    raster : np.ndarray
        ``uint16`` array, ``(channels, rows, cols)``; the last channel is
        alpha.
    top_left, top_right, bottom_left, bottom_right : GeoCorner
        Corner pixel positions and their geographic coordinates.
    """

    raster: np.ndarray
    top_left: GeoCorner
    top_right: GeoCorner
    bottom_left: GeoCorner
    bottom_right: GeoCorner

    @classmethod
    def from_crop(cls, crop: CropSettings, channels: int) -> 'WarpResult':
        """
        Allocate a transparent result covering a crop window.

        Parameters
        ----------
        crop : CropSettings
            Window the raster covers.
        channels : int
            Channel count, alpha included.

        Returns
        -------
        WarpResult
        """
        width, height = crop.width, crop.height
        raster = np.zeros((channels, height, width), dtype=np.uint16)
        return cls(
            raster=raster,
            top_left=GeoCorner(0, 0, crop.lon_min, crop.lat_max),
            top_right=GeoCorner(width - 1, 0, crop.lon_max, crop.lat_max),
            bottom_left=GeoCorner(0, height - 1, crop.lon_min, crop.lat_min),
            bottom_right=GeoCorner(
                width - 1, height - 1, crop.lon_max, crop.lat_min
            ),
        )

    @property
    def width(self) -> int:
        return self.raster.shape[2]

    @property
    def height(self) -> int:
        return self.raster.shape[1]

    @property
    def channels(self) -> int:
        return self.raster.shape[0]

    @property
    def alpha(self) -> np.ndarray:
        """The alpha plane (view), shape ``(rows, cols)``."""
        return self.raster[-1]

    def geolocation_metadata(self) -> Dict[str, Any]:
        """
        Return metadata describing the raster's geolocation.

        Returns
        -------
        Dict[str, Any]
            - 'crs': str, coordinate reference system (WGS84)
            - 'bounds': Tuple, (min_lon, min_lat, max_lon, max_lat)
            - 'pixel_size_lat': float, latitude spacing (degrees)
            - 'pixel_size_lon': float, longitude spacing (degrees)
            - 'rows': int, number of rows
            - 'cols': int, number of columns
            - 'transform': Tuple, affine coefficients
              (origin_lon, pixel_size_lon, 0, origin_lat, 0, -pixel_size_lat)
        """
        lon_min, lat_max = self.top_left.lon, self.top_left.lat
        lon_max, lat_min = self.bottom_right.lon, self.bottom_right.lat
        pixel_size_lon = (lon_max - lon_min) / max(self.width, 1)
        pixel_size_lat = (lat_max - lat_min) / max(self.height, 1)
        return {
            'crs': 'WGS84',
            'bounds': (lon_min, lat_min, lon_max, lat_max),
            'pixel_size_lat': pixel_size_lat,
            'pixel_size_lon': pixel_size_lon,
            'rows': self.height,
            'cols': self.width,
            'transform': (
                lon_min,            # origin longitude (top-left corner)
                pixel_size_lon,     # pixel width (degrees)
                0.0,                # rotation (0 for north-up)
                lat_max,            # origin latitude (top-left corner)
                0.0,                # rotation (0 for north-up)
                -pixel_size_lat,    # pixel height (negative = south)
            ),
        }

    def __repr__(self) -> str:
        return (
            f"WarpResult(size={self.width}x{self.height}, "
            f"channels={self.channels}, "
            f"lon=[{self.top_left.lon:.4f}, {self.bottom_right.lon:.4f}], "
            f"lat=[{self.bottom_right.lat:.4f}, {self.top_left.lat:.4f}])"
        )
