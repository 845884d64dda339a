"""
Histogram bucket configuration parsing.

Bucket boundaries are read once at startup from a comma-separated
string; any error here is fatal for the process.
"""

import math
from typing import List

from .errors import BucketConfigError

DEFAULT_BUCKETS = ".005,.01,.025,.05,.1,.25,.5,1,2.5,5,10"


def parse_buckets(text: str) -> List[float]:
    """
    쉼표로 구분된 버킷 경계를 파싱합니다.

    Args:
        text: 예) ".005,.01,.025"

    Returns:
        엄격하게 증가하는 유한 실수 목록

    Raises:
        BucketConfigError: 빈 항목, 숫자가 아닌 항목, 무한대/NaN, 비증가 순서
    """
    buckets: List[float] = []
    for entry in text.split(","):
        entry = entry.strip()
        if not entry:
            raise BucketConfigError(f"empty bucket boundary in {text!r}")
        try:
            bound = float(entry)
        except ValueError:
            raise BucketConfigError(f"bucket boundary {entry!r} is not a number") from None
        if not math.isfinite(bound):
            raise BucketConfigError(f"bucket boundary {entry!r} must be finite")
        if buckets and bound <= buckets[-1]:
            raise BucketConfigError(
                f"bucket boundaries must be strictly increasing: {bound} after {buckets[-1]}"
            )
        buckets.append(bound)
    return buckets
