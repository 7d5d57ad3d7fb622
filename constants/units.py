"""
Unit Constants

Fixed cooking-unit vocabularies, synonym and abbreviation tables, and the
standard unit catalogue used for seeding.
"""

import re

# Vocabularies by category. Order inside UNIT_CATEGORIES is the lookup order.
VOLUME_UNITS = (
    # US standard
    'cup', 'cups',
    'tablespoon', 'tablespoons', 'tbsp',
    'teaspoon', 'teaspoons', 'tsp',
    'fluid ounce', 'fluid ounces', 'fl oz',
    'pint', 'pints', 'pt',
    'quart', 'quarts', 'qt',
    'gallon', 'gallons', 'gal',
    # Metric
    'milliliter', 'milliliters', 'ml',
    'liter', 'liters', 'l',
)

WEIGHT_UNITS = (
    # US standard
    'pound', 'pounds', 'lb', 'lbs',
    'ounce', 'ounces', 'oz',
    # Metric
    'gram', 'grams', 'g',
    'kilogram', 'kilograms', 'kg',
)

COUNT_UNITS = (
    'piece', 'pieces', 'pc',
    'slice', 'slices',
    'clove', 'cloves',
    'head', 'heads',
    'bunch', 'bunches',
    'bundle', 'bundles',
    'can', 'cans',
    'package', 'packages', 'pkg',
    'jar', 'jars',
    'bottle', 'bottles',
    'bag', 'bags',
    'box', 'boxes',
    # Sizes
    'small', 'medium', 'large', 'extra large',
    'sm', 'med', 'lg', 'xl',
)

SPECIAL_UNITS = (
    'to taste',
    'as needed',
    'pinch',
    'dash',
    'handful',
    'splash',
    'drizzle',
)

UNIT_CATEGORIES = (
    ('volume', frozenset(u.lower() for u in VOLUME_UNITS)),
    ('weight', frozenset(u.lower() for u in WEIGHT_UNITS)),
    ('count', frozenset(u.lower() for u in COUNT_UNITS)),
    ('special', frozenset(u.lower() for u in SPECIAL_UNITS)),
)

ALL_UNITS = frozenset().union(*(units for _, units in UNIT_CATEGORIES))

# Values stored in Unit.unit_type
UNIT_TYPES = ('volume', 'weight', 'count', 'size', 'special', 'other')

# Surface form -> canonical unit name
UNIT_STANDARDIZATIONS = {
    # Tablespoon
    'tbsp': 'tablespoon',
    'tablespoons': 'tablespoon',
    # Teaspoon
    'tsp': 'teaspoon',
    'teaspoons': 'teaspoon',
    # Cup
    'cups': 'cup',
    # Weight
    'lb': 'pound',
    'lbs': 'pound',
    'pounds': 'pound',
    'oz': 'ounce',
    'ounces': 'ounce',
    # Metric
    'grams': 'gram',
    'kilograms': 'kilogram',
    'kg': 'kilogram',
    'milliliters': 'milliliter',
    'liters': 'liter',
    # Count
    'pieces': 'piece',
    'slices': 'slice',
    'cloves': 'clove',
    'bunches': 'bunch',
}

# Canonical (or plural) unit name -> short form
UNIT_ABBREVIATIONS = {
    'tablespoon': 'tbsp', 'tablespoons': 'tbsp',
    'teaspoon': 'tsp', 'teaspoons': 'tsp',
    'fluid ounce': 'fl oz', 'fluid ounces': 'fl oz',
    'pound': 'lb', 'pounds': 'lb',
    'ounce': 'oz', 'ounces': 'oz',
    'gram': 'g', 'grams': 'g',
    'kilogram': 'kg', 'kilograms': 'kg',
    'milliliter': 'ml', 'milliliters': 'ml',
    'liter': 'l', 'liters': 'l',
    'package': 'pkg', 'packages': 'pkg',
    'small': 'sm',
    'medium': 'med',
    'large': 'lg',
    'extra large': 'xl',
}

# Words accepted as a unit even when not in the vocabularies
UNIT_WORD_PATTERNS = (
    re.compile(r'^(small|medium|large|extra\s+large)$', re.IGNORECASE),
    re.compile(r'^(can|jar|bottle|package|bag|box)s?$', re.IGNORECASE),
    re.compile(r'^(bunch|bundle|head|clove)s?$', re.IGNORECASE),
)

# Trailing phrases that stand in for a quantity ("Salt to taste")
SPECIAL_PHRASES = ('to taste', 'as needed', 'for seasoning')

# Offered for autocomplete
COMMON_UNITS = (
    'cup', 'tablespoon', 'teaspoon', 'pound', 'ounce', 'gram',
    'piece', 'clove', 'bunch', 'can', 'package', 'medium', 'large',
    'to taste', 'pinch', 'dash',
)

# Standard unit catalogue: (name, display_name, unit_type, abbreviation)
STANDARD_UNITS = (
    # Volume
    ('cup', 'Cup', 'volume', 'c'),
    ('cups', 'Cups', 'volume', 'c'),
    ('tablespoon', 'Tablespoon', 'volume', 'tbsp'),
    ('tablespoons', 'Tablespoons', 'volume', 'tbsp'),
    ('tbsp', 'Tbsp', 'volume', 'tbsp'),
    ('teaspoon', 'Teaspoon', 'volume', 'tsp'),
    ('teaspoons', 'Teaspoons', 'volume', 'tsp'),
    ('tsp', 'Tsp', 'volume', 'tsp'),
    ('fluid ounce', 'Fluid Ounce', 'volume', 'fl oz'),
    ('fluid ounces', 'Fluid Ounces', 'volume', 'fl oz'),
    ('fl oz', 'Fl Oz', 'volume', 'fl oz'),
    ('pint', 'Pint', 'volume', 'pt'),
    ('pints', 'Pints', 'volume', 'pt'),
    ('pt', 'Pt', 'volume', 'pt'),
    ('quart', 'Quart', 'volume', 'qt'),
    ('quarts', 'Quarts', 'volume', 'qt'),
    ('qt', 'Qt', 'volume', 'qt'),
    ('gallon', 'Gallon', 'volume', 'gal'),
    ('gallons', 'Gallons', 'volume', 'gal'),
    ('gal', 'Gal', 'volume', 'gal'),
    ('milliliter', 'Milliliter', 'volume', 'ml'),
    ('milliliters', 'Milliliters', 'volume', 'ml'),
    ('ml', 'mL', 'volume', 'ml'),
    ('liter', 'Liter', 'volume', 'l'),
    ('liters', 'Liters', 'volume', 'l'),
    ('l', 'L', 'volume', 'l'),
    # Weight
    ('pound', 'Pound', 'weight', 'lb'),
    ('pounds', 'Pounds', 'weight', 'lb'),
    ('lb', 'Lb', 'weight', 'lb'),
    ('lbs', 'Lbs', 'weight', 'lb'),
    ('ounce', 'Ounce', 'weight', 'oz'),
    ('ounces', 'Ounces', 'weight', 'oz'),
    ('oz', 'Oz', 'weight', 'oz'),
    ('gram', 'Gram', 'weight', 'g'),
    ('grams', 'Grams', 'weight', 'g'),
    ('g', 'g', 'weight', 'g'),
    ('kilogram', 'Kilogram', 'weight', 'kg'),
    ('kilograms', 'Kilograms', 'weight', 'kg'),
    ('kg', 'kg', 'weight', 'kg'),
    # Count
    ('piece', 'Piece', 'count', 'pc'),
    ('pieces', 'Pieces', 'count', 'pc'),
    ('pc', 'Pc', 'count', 'pc'),
    ('slice', 'Slice', 'count', None),
    ('slices', 'Slices', 'count', None),
    ('clove', 'Clove', 'count', None),
    ('cloves', 'Cloves', 'count', None),
    ('head', 'Head', 'count', None),
    ('heads', 'Heads', 'count', None),
    ('bunch', 'Bunch', 'count', None),
    ('bunches', 'Bunches', 'count', None),
    ('bundle', 'Bundle', 'count', None),
    ('bundles', 'Bundles', 'count', None),
    ('can', 'Can', 'count', None),
    ('cans', 'Cans', 'count', None),
    ('package', 'Package', 'count', 'pkg'),
    ('packages', 'Packages', 'count', 'pkg'),
    ('pkg', 'Pkg', 'count', 'pkg'),
    ('jar', 'Jar', 'count', None),
    ('jars', 'Jars', 'count', None),
    ('bottle', 'Bottle', 'count', None),
    ('bottles', 'Bottles', 'count', None),
    ('bag', 'Bag', 'count', None),
    ('bags', 'Bags', 'count', None),
    ('box', 'Box', 'count', None),
    ('boxes', 'Boxes', 'count', None),
    # Size
    ('small', 'Small', 'size', 'sm'),
    ('medium', 'Medium', 'size', 'med'),
    ('large', 'Large', 'size', 'lg'),
    ('extra large', 'Extra Large', 'size', 'xl'),
    ('sm', 'Sm', 'size', 'sm'),
    ('med', 'Med', 'size', 'med'),
    ('lg', 'Lg', 'size', 'lg'),
    ('xl', 'XL', 'size', 'xl'),
    # Special
    ('to taste', 'To Taste', 'special', None),
    ('as needed', 'As Needed', 'special', None),
    ('pinch', 'Pinch', 'special', None),
    ('dash', 'Dash', 'special', None),
    ('handful', 'Handful', 'special', None),
    ('splash', 'Splash', 'special', None),
    ('drizzle', 'Drizzle', 'special', None),
)

# Common fractions for display (using precise values)
COMMON_FRACTIONS = {
    0.125: '1/8', 0.25: '1/4', 1/3: '1/3', 0.375: '3/8',
    0.5: '1/2', 0.625: '5/8', 2/3: '2/3', 0.75: '3/4', 0.875: '7/8'
}
