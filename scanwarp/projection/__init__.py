# -*- coding: utf-8 -*-
"""
Projection Module - Map projections for warped output grids.

Only the equirectangular (plate carree) projection is provided; every
segment and the final mosaic share one.

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

from scanwarp.projection.equirectangular import EquirectangularProjection

__all__ = ['EquirectangularProjection']
