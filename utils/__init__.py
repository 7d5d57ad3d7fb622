# Utility modules for the grocery backend
from .formatting import float_to_fraction, format_quantity
from .sanitizer import sanitize_text, sanitize_name, sanitize_ingredient_text
