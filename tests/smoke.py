"""
Smoke tests for the grocery app.
Run with: python tests/smoke.py
"""

import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

def test_app_imports():
    """Verify the app factory can be imported without errors."""
    from app import create_app, db
    assert callable(create_app)
    assert db is not None
    print("OK: App imports successfully")

def test_models_import():
    """Verify models can be imported."""
    from models import Unit, Recipe, GroceryList, GroceryItem, GroceryListRecipe
    assert GroceryListRecipe.__tablename__ == 'grocery_list_recipes'
    assert Unit is not None
    print("OK: Models import successfully")

def test_security_utils_import():
    """Verify sanitizers can be imported."""
    from utils import sanitize_text, sanitize_name, sanitize_ingredient_text
    assert callable(sanitize_text)
    assert callable(sanitize_name)
    assert callable(sanitize_ingredient_text)
    print("OK: Security utils import successfully")

def test_constants_import():
    """Verify constants can be imported."""
    from constants import UNIT_CATEGORIES, UNIT_STANDARDIZATIONS, SPECIAL_PHRASES
    assert [name for name, _ in UNIT_CATEGORIES] == ['volume', 'weight', 'count', 'special']
    assert UNIT_STANDARDIZATIONS['tbsp'] == 'tablespoon'
    assert 'to taste' in SPECIAL_PHRASES
    print("OK: Constants import successfully")

def test_app_runs():
    """Verify app can create test client."""
    from app import create_app, init_db
    app = create_app('testing')
    init_db(app)
    with app.test_client() as client:
        response = client.get('/api/health')
        assert response.status_code == 200
        print("OK: App serves health check")

if __name__ == '__main__':
    print("Running smoke tests...\n")

    tests = [
        test_app_imports,
        test_models_import,
        test_security_utils_import,
        test_constants_import,
        test_app_runs,
    ]

    failed = 0
    for test in tests:
        try:
            test()
        except Exception as e:
            print(f"FAIL: {test.__name__} - {e}")
            failed += 1

    print(f"\n{'='*40}")
    if failed:
        print(f"FAILED: {failed}/{len(tests)} tests")
        sys.exit(1)
    else:
        print(f"PASSED: {len(tests)}/{len(tests)} tests")
        sys.exit(0)
