# -*- coding: utf-8 -*-
"""
Memory Guard - Keep the output mosaic inside a byte budget.

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
import logging
from typing import Optional

# scanwarp internal
from scanwarp.exceptions import MemoryBudgetError, ValidationError
from scanwarp.warp.config import WarpConfig, resolve_config
from scanwarp.warp.crop import choose_crop_area
from scanwarp.warp.models import CropSettings, WarpOperation

logger = logging.getLogger(__name__)


def ensure_memory_limit(
    crop: CropSettings,
    operation: WarpOperation,
    channel_count: int,
    byte_budget: Optional[int] = None,
    config: Optional[WarpConfig] = None
) -> CropSettings:
    """
    Shrink the output grid until the crop's raster fits ``byte_budget``.

    While ``crop.memory_footprint(channel_count)`` exceeds the budget, the
    operation's output width and height are scaled by
    ``config.shrink_factor`` and the crop is planned again. The operation
    is modified in place so later stages warp onto the shrunk grid.

    Parameters
    ----------
    crop : CropSettings
        Crop planned at the operation's current output size.
    operation : WarpOperation
        Operation to shrink. Mutated.
    channel_count : int
        Channels of the output raster, alpha included.
    byte_budget : int, optional
        Budget in bytes. Defaults to ``config.memory_budget_bytes``.
    config : WarpConfig, optional
        Supplies the shrink factor and the minimum output dimension.

    Returns
    -------
    CropSettings
        A crop whose footprint is within the budget.

    Raises
    ------
    ValidationError
        If the budget or channel count is not positive.
    MemoryBudgetError
        If the budget cannot be met without shrinking an output dimension
        below ``config.min_output_dimension``.
    """
    config = resolve_config(config)
    budget = config.memory_budget_bytes if byte_budget is None else byte_budget

    if budget <= 0:
        raise ValidationError(f"byte_budget must be positive, got {budget}")
    if channel_count <= 0:
        raise ValidationError(
            f"channel_count must be positive, got {channel_count}"
        )

    footprint = crop.memory_footprint(channel_count)
    retries = 0
    while footprint > budget:
        width = operation.output_width * config.shrink_factor
        height = operation.output_height * config.shrink_factor
        if (width < config.min_output_dimension
                or height < config.min_output_dimension):
            raise MemoryBudgetError(
                f"Memory budget of {budget} bytes is unsatisfiable: "
                f"{footprint} bytes needed at output size "
                f"{operation.output_width:.1f}x{operation.output_height:.1f} "
                f"and the minimum dimension is {config.min_output_dimension}"
            )

        operation.output_width = width
        operation.output_height = height
        crop = choose_crop_area(operation, config)
        footprint = crop.memory_footprint(channel_count)
        retries += 1
        logger.debug(
            "Memory retry %d: output %.1fx%.1f, crop %dx%d, %d bytes",
            retries, width, height, crop.width, crop.height, footprint,
        )

    if retries:
        logger.info(
            "Shrunk output grid %d times to fit %d bytes", retries, budget
        )
    return crop
