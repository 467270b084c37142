"""Categorization services for specs."""

from .category_detector import CategoryDetector
from .category_patterns import DEFAULT_CATEGORY, DEFAULT_PATTERNS
from .smart_categorizer import CATEGORY_KEYWORDS, SmartCategorizer


__all__ = [
    "CATEGORY_KEYWORDS",
    "DEFAULT_CATEGORY",
    "DEFAULT_PATTERNS",
    "CategoryDetector",
    "SmartCategorizer",
]
