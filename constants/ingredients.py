"""
Ingredient Constants

Contains grocery category keywords and the sample recipes used for seeding.
"""

# Grocery category -> keywords. Checked in order; first hit wins.
CATEGORY_KEYWORDS = (
    ('Produce', (
        'apple', 'banana', 'orange', 'tomato', 'onion', 'garlic', 'carrot',
        'potato', 'lettuce', 'spinach', 'broccoli', 'pepper', 'cucumber',
        'celery', 'avocado', 'lemon', 'lime', 'herb', 'parsley', 'cilantro',
        'basil', 'vegetable', 'fruit',
    )),
    ('Meat & Seafood', (
        'chicken', 'beef', 'pork', 'lamb', 'turkey', 'fish', 'salmon', 'tuna',
        'shrimp', 'bacon', 'sausage', 'ham', 'ground', 'steak', 'breast',
        'thigh', 'meat', 'seafood',
    )),
    ('Dairy', ('milk', 'cheese', 'butter', 'cream', 'yogurt', 'egg', 'dairy')),
    ('Pantry', (
        'flour', 'sugar', 'salt', 'pepper', 'oil', 'vinegar', 'sauce', 'pasta',
        'rice', 'bread', 'cereal', 'can', 'jar', 'spice', 'seasoning', 'baking',
        'condiment',
    )),
    ('Frozen', ('frozen', 'ice')),
    ('Beverages', (
        'juice', 'soda', 'water', 'coffee', 'tea', 'beer', 'wine', 'drink',
        'beverage',
    )),
    ('Bakery', ('bread', 'bagel', 'muffin', 'cake', 'cookie', 'pie', 'bakery')),
)

DEFAULT_CATEGORY = 'Other'

# Sample recipes for `flask seed`
SAMPLE_RECIPES = (
    {
        'name': 'Classic Pancakes',
        'servings': 4,
        'ingredients': [
            '1 1/2 cups flour',
            '3 1/2 tsp baking powder',
            '1 tbsp sugar',
            '1 1/4 cups milk',
            '1 egg',
            '3 tbsp butter',
            'Salt to taste',
        ],
    },
    {
        'name': 'Weeknight Chili',
        'servings': 6,
        'ingredients': [
            '2 lbs ground beef',
            '2 medium onions',
            '3 cloves garlic',
            '2 cans kidney beans',
            '1 jar tomato sauce',
            '2-3 tbsp chili powder',
            'Pepper as needed',
        ],
    },
    {
        'name': 'Lemon Herb Salmon',
        'servings': 2,
        'ingredients': [
            '1 pound salmon fillet',
            '1 lemon',
            '2 tbsp olive oil',
            '1 bunch parsley',
            'Salt for seasoning',
        ],
    },
)
