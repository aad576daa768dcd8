"""Linear scales mapping data values to chart pixels and back."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional, Union

import numpy as np

from mouseviz.utils.logging import get_logger

logger = get_logger(__name__)

Number = Union[float, int]

FALLBACK_DOMAIN: tuple[float, float] = (0.0, 1.0)


@dataclass(frozen=True)
class LinearScale:
    """Affine map from domain (data units) to range (pixels).

    Either interval may be reversed, e.g. a y range of (550, 40) puts larger
    values higher on screen. A zero-width domain maps everything to the
    middle of the range.
    """

    domain: tuple[float, float]
    range: tuple[float, float]

    def __call__(self, value: Union[Number, np.ndarray]) -> Union[float, np.ndarray]:
        d0, d1 = self.domain
        r0, r1 = self.range
        if d1 == d0:
            mid = (r0 + r1) / 2.0
            return np.full_like(value, mid, dtype=float) if isinstance(value, np.ndarray) else mid
        t = (np.asarray(value, dtype=float) - d0) / (d1 - d0)
        out = r0 + t * (r1 - r0)
        return out if isinstance(value, np.ndarray) else float(out)

    def invert(self, pixel: Union[Number, np.ndarray]) -> Union[float, np.ndarray]:
        """Map a pixel position back to a domain value."""
        return LinearScale(domain=self.range, range=self.domain)(pixel)

    def with_domain(self, domain: tuple[float, float]) -> "LinearScale":
        return replace(self, domain=(float(domain[0]), float(domain[1])))

    def contains_pixel(self, pixel: Number) -> bool:
        """True if pixel lies within the range (inclusive, either orientation)."""
        lo, hi = sorted(self.range)
        return lo <= pixel <= hi


def extent(values: Iterable[Number]) -> Optional[tuple[float, float]]:
    """(min, max) of values ignoring NaN, or None when there is no finite value."""
    arr = np.asarray(list(values) if not isinstance(values, np.ndarray) else values, dtype=float)
    arr = arr[np.isfinite(arr)]
    if arr.size == 0:
        return None
    return float(arr.min()), float(arr.max())


def domain_or_fallback(
    domain: Optional[tuple[float, float]],
    *,
    what: str,
) -> tuple[float, float]:
    """Return domain, or FALLBACK_DOMAIN with a warning when it is missing."""
    if domain is None:
        logger.warning(f"No finite values for {what} domain, using {FALLBACK_DOMAIN}")
        return FALLBACK_DOMAIN
    return domain
