"""
Pytest configuration and shared fixtures.

Every test gets a fresh in-memory database inside an app context.
"""

import pytest

from app import create_app
from models import db as _db, GroceryList, GroceryListRecipe, Recipe


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def session(app):
    return _db.session


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_recipe(session):
    """
    Factory for recipes.

    Usage in tests:
        def test_something(make_recipe):
            recipe = make_recipe('Soup', ['1 cup broth'])
    """
    def _make(name='Pancakes', ingredients=None, servings=4):
        recipe = Recipe(
            name=name,
            servings=servings,
            ingredients=ingredients if ingredients is not None else [
                '1 1/2 cups flour',
                '3 eggs',
                'Salt to taste',
            ],
        )
        session.add(recipe)
        session.flush()
        return recipe
    return _make


@pytest.fixture
def recipe(make_recipe):
    return make_recipe()


@pytest.fixture
def grocery_list(session):
    grocery_list = GroceryList(name='Weekly Shop', meta={})
    session.add(grocery_list)
    session.flush()
    return grocery_list


@pytest.fixture
def attach_pivot(session):
    """Attach a recipe to a list without generating any items."""
    def _attach(grocery_list, recipe, servings=1):
        pivot = GroceryListRecipe(
            grocery_list_id=grocery_list.id,
            recipe_id=recipe.id,
            servings=servings,
            selected_item_ids=[],
        )
        session.add(pivot)
        session.flush()
        return pivot
    return _attach
