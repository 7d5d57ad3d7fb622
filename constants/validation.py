"""
Validation Constants

Contains limits for validating user input before it reaches the parser
and the database.
"""

# Maximum field lengths for security
MAX_LENGTHS = {
    'grocery_list_name': 200,
    'grocery_list_description': 2000,
    'item_name': 255,
    'ingredient_text': 500,
    'notes': 1000,
}

# Servings multiplier bounds when attaching a recipe
MIN_SERVINGS = 1
MAX_SERVINGS = 100
