"""
Parsing Service

Turns free-text ingredient lines ('1 1/2 cups flour') into structured
quantity / unit / name records ready to become grocery items.
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

from constants import SPECIAL_PHRASES, UNIT_WORD_PATTERNS

from .units import is_known, resolve_unit

# Integer, integer range ('2-3', '2–3'), mixed number ('1 1/2') or fraction ('1/2')
QUANTITY = r'\d+(?:\s*[-–]\s*\d+)?(?:\s+\d+/\d+)?|\d+/\d+'

QTY_UNIT_NAME_RE = re.compile(rf'^({QUANTITY})\s+([a-zA-Z\s]+?)\s+(.+)$', re.IGNORECASE)
QTY_NAME_RE = re.compile(rf'^({QUANTITY})\s+(.+)$', re.IGNORECASE)
SPECIAL_PHRASE_RE = re.compile(
    r'^(.+?)\s+(' + '|'.join(re.escape(p) for p in SPECIAL_PHRASES) + r')$',
    re.IGNORECASE,
)

RANGE_RE = re.compile(r'^(\d+)\s*[-–]\s*(\d+)$')
FRACTION_RE = re.compile(r'^(\d+)/(\d+)$')
MIXED_RE = re.compile(r'^(\d+)\s+(\d+)/(\d+)$')
NUMBER_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$')


@dataclass
class ParsedIngredient:
    """Result of parsing one ingredient line. Not persisted."""
    quantity: Optional[Union[float, str]]
    unit: Optional[object]
    name: str
    original: str

    @property
    def unit_id(self):
        return self.unit.id if self.unit is not None else None

    def to_dict(self):
        return {
            'quantity': self.quantity,
            'unit': self.unit.name if self.unit is not None else None,
            'unit_id': self.unit_id,
            'name': self.name,
            'original': self.original,
        }


def parse_quantity(text):
    """
    Parse a quantity string.

    Ranges ('2-3') come back unchanged as strings; fractions, mixed
    numbers and plain numbers come back as floats; anything else is None.
    """
    text = (text or '').strip()

    if RANGE_RE.match(text):
        return text

    match = FRACTION_RE.match(text)
    if match:
        denominator = float(match.group(2))
        if denominator == 0:
            return None
        return float(match.group(1)) / denominator

    match = MIXED_RE.match(text)
    if match:
        denominator = float(match.group(3))
        if denominator == 0:
            return None
        return float(match.group(1)) + float(match.group(2)) / denominator

    if NUMBER_RE.match(text):
        return float(text)

    return None


def is_likely_unit(word):
    """Vocabulary check plus the size/container word patterns."""
    word = (word or '').strip().lower()
    if is_known(word):
        return True
    return any(pattern.match(word) for pattern in UNIT_WORD_PATTERNS)


def parse_ingredient_line(text):
    """
    Parse one ingredient line. Never raises on odd input.

    Patterns, first match wins:
      1. quantity + unit + name   '1 1/2 cups flour'
      2. quantity + name          '3 eggs'
      3. name + special phrase    'Salt to taste'
      4. the whole line as name
    """
    text = (text or '').strip()

    match = QTY_UNIT_NAME_RE.match(text)
    if match and is_likely_unit(match.group(2)):
        return ParsedIngredient(
            quantity=parse_quantity(match.group(1)),
            unit=resolve_unit(match.group(2)),
            name=match.group(3).strip(),
            original=text,
        )

    match = QTY_NAME_RE.match(text)
    if match:
        return ParsedIngredient(
            quantity=parse_quantity(match.group(1)),
            unit=None,
            name=match.group(2).strip(),
            original=text,
        )

    match = SPECIAL_PHRASE_RE.match(text)
    if match:
        return ParsedIngredient(
            quantity=None,
            unit=resolve_unit(match.group(2)),
            name=match.group(1).strip(),
            original=text,
        )

    return ParsedIngredient(quantity=None, unit=None, name=text, original=text)


def parse_ingredient_lines(lines):
    """Parse each line independently, preserving order."""
    return [parse_ingredient_line(line) for line in lines]


def build_grocery_item_insertion(parsed, grocery_list_id, recipe_id=None):
    """
    Build the fields for a new GroceryItem from a parsed line.

    Range quantities ('2-3') are dropped to None here because the
    quantity column is numeric; the range survives in metadata.parsed_from.
    """
    quantity = parsed.quantity
    if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
        quantity = None

    return {
        'grocery_list_id': grocery_list_id,
        'name': parsed.name,
        'quantity': quantity,
        'unit_id': parsed.unit_id,
        'recipe_id': recipe_id,
        'is_checked': False,
        'metadata': {
            'parsed_from': parsed.original,
        },
    }
