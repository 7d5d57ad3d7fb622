"""
Constants Package

Fixed lookup tables shared by the services and the models.
"""

from .units import (
    VOLUME_UNITS,
    WEIGHT_UNITS,
    COUNT_UNITS,
    SPECIAL_UNITS,
    UNIT_CATEGORIES,
    ALL_UNITS,
    UNIT_TYPES,
    UNIT_STANDARDIZATIONS,
    UNIT_ABBREVIATIONS,
    UNIT_WORD_PATTERNS,
    SPECIAL_PHRASES,
    COMMON_UNITS,
    STANDARD_UNITS,
    COMMON_FRACTIONS,
)

from .ingredients import CATEGORY_KEYWORDS, DEFAULT_CATEGORY, SAMPLE_RECIPES

from .validation import MAX_LENGTHS, MIN_SERVINGS, MAX_SERVINGS
