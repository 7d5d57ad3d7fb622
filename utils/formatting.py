"""
Display Formatting

Helpers for rendering quantities in API responses.
"""

from constants import COMMON_FRACTIONS


def float_to_fraction(value):
    """Convert float to fraction string for display."""
    if value is None or value == 0:
        return '0'
    # Check if it's a whole number
    if value == int(value):
        return str(int(value))
    # Split into whole and decimal parts
    whole = int(value)
    decimal = value - whole
    # Check common fractions (with tolerance)
    for dec, frac in COMMON_FRACTIONS.items():
        if abs(decimal - dec) < 0.02:
            if whole > 0:
                return f"{whole} {frac}"
            return frac
    # Fall back to decimal
    return f"{value:.2f}".rstrip('0').rstrip('.')


def format_quantity(quantity, unit_display=''):
    """Render '1 1/2 Cup', 'Medium', '3' or '' for an item quantity."""
    if not quantity:
        return unit_display or ''
    text = float_to_fraction(quantity)
    return f"{text} {unit_display}" if unit_display else text
