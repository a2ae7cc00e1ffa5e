"""Blur filters backed by the fixed-point exponential kernel."""

from typing import ClassVar

import numpy as np
from pydantic import Field

from expblur.kernel import APREC_RANGE, ZPREC_RANGE, apply_blur

from .base import BaseFilter
from .registry import register_filter


@register_filter("exponential_blur")
class ExponentialBlurFilter(BaseFilter):
    """Exponential (IIR) blur filter.

    A cheap Gaussian look-alike: each row, then each column, is smoothed by
    a forward and a backward first-order recursive pass. Radii below 1
    leave the image untouched.
    """

    filter_type: ClassVar[str] = "exponential_blur"
    name: ClassVar[str] = "Exponential Blur"
    description: ClassVar[str] = "Soften the image with a recursive exponential blur"
    category: ClassVar[str] = "blur"
    VERSION: ClassVar[int] = 1

    radius: float = Field(default=5.0, ge=0.0, le=100.0,
                          json_schema_extra={"step": 1, "suffix": "px",
                                             "display_name": "Blur Radius"})
    aprec: int = Field(default=16, ge=APREC_RANGE[0], le=APREC_RANGE[1],
                       description="Fractional bits of the decay coefficient",
                       json_schema_extra={"step": 1, "display_name": "Alpha Precision"})
    zprec: int = Field(default=7, ge=ZPREC_RANGE[0], le=ZPREC_RANGE[1],
                       description="Extra fractional bits of the accumulator",
                       json_schema_extra={"step": 1, "display_name": "State Precision"})

    def apply(self, image: np.ndarray) -> np.ndarray:
        if image.ndim != 3 or image.shape[2] != 4:
            raise ValueError(f"Expected image (H, W, 4), got shape {image.shape}")
        result = np.ascontiguousarray(image).copy()
        height, width = result.shape[:2]
        return apply_blur(result, width, height, self.radius, self.aprec, self.zprec)
