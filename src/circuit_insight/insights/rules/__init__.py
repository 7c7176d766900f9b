"""Rule implementations — read the report and source, produce Suggestions."""

from .arithmetic import ArithmeticRule
from .arrays import ArrayRule
from .best_practices import BestPracticeRule
from .hash_operations import HashInLoopRule
from .hotspots import HotspotRule
from .loops import LoopRule


def get_default_rules() -> list:
    """Return every rule in run order.

    Order only matters for ties after ranking, which is stable.
    """
    return [
        HotspotRule(),
        LoopRule(),
        ArithmeticRule(),
        ArrayRule(),
        HashInLoopRule(),
        BestPracticeRule(),
    ]


__all__ = [
    "ArithmeticRule",
    "ArrayRule",
    "BestPracticeRule",
    "HashInLoopRule",
    "HotspotRule",
    "LoopRule",
    "get_default_rules",
]
