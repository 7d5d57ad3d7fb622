"""
Shopping List Service

Functions for building grocery lists from recipes and managing their items.
Callers own the transaction: these functions flush but never commit.
"""

import logging
import re

from sqlalchemy import delete

from constants import CATEGORY_KEYWORDS, DEFAULT_CATEGORY, SAMPLE_RECIPES
from models import db, GroceryList, GroceryListRecipe, Recipe

from . import repository
from .parsing import build_grocery_item_insertion, parse_ingredient_line, parse_ingredient_lines
from .selection import (
    get_selected_items_for_recipe,
    handle_grocery_list_deletion,
    handle_recipe_detachment,
)

logger = logging.getLogger(__name__)

CATEGORY_PATTERNS = tuple(
    (category, re.compile(r'\b(' + '|'.join(keywords) + r')\b'))
    for category, keywords in CATEGORY_KEYWORDS
)


def guess_category(name):
    """Guess the store section of an item from its name."""
    name = (name or '').lower()
    for category, pattern in CATEGORY_PATTERNS:
        if pattern.search(name):
            return category
    return DEFAULT_CATEGORY


def create_grocery_list(name, description=None):
    grocery_list = GroceryList(name=name, description=description, meta={})
    db.session.add(grocery_list)
    db.session.flush()
    return grocery_list


def delete_grocery_list(grocery_list):
    """
    Delete a list with one statement per table.

    Pivot rows are removed in bulk and items go through ON DELETE CASCADE,
    so no per-item selection updates run.
    """
    list_id = grocery_list.id
    handle_grocery_list_deletion(list_id)
    db.session.execute(delete(GroceryList.__table__).where(GroceryList.__table__.c.id == list_id))
    db.session.expunge(grocery_list)
    logger.info("Deleted grocery list %s", list_id)


def attach_recipe(grocery_list, recipe, servings=1, auto_generated=True):
    """
    Attach a recipe to a list and add one item per ingredient line.

    Numeric quantities are multiplied by `servings`. The item listeners
    fill the pivot's selection as the items are flushed.
    """
    if repository.find_pivot(grocery_list.id, recipe.id) is not None:
        raise ValueError(f"Recipe {recipe.id} is already attached to list {grocery_list.id}")

    db.session.add(GroceryListRecipe(
        grocery_list_id=grocery_list.id,
        recipe_id=recipe.id,
        servings=servings,
        selected_item_ids=[],
        auto_generated=auto_generated,
    ))
    # The pivot row has to exist before the items' after_insert hooks run
    db.session.flush()

    items = []
    for index, parsed in enumerate(parse_ingredient_lines(recipe.ingredients or [])):
        fields = build_grocery_item_insertion(parsed, grocery_list.id, recipe.id)
        if fields['quantity'] is not None and servings > 1:
            fields['quantity'] *= servings
        fields['sort_order'] = index
        fields['category'] = guess_category(parsed.name)
        fields['metadata'].update({
            'generated_from_recipe': True,
            'recipe_name': recipe.name,
            'servings_multiplier': servings,
        })
        items.append(repository.create_grocery_item(fields))

    logger.info("Attached recipe %s to list %s with %d items", recipe.id, grocery_list.id, len(items))
    return items


def detach_recipe(grocery_list, recipe):
    """Remove the recipe's pivot row; its items stay on the list."""
    return handle_recipe_detachment(grocery_list.id, recipe.id) > 0


def add_manual_item(grocery_list, text, notes=None, estimated_price=None):
    """Parse a line typed by the user and add it as a manual item."""
    parsed = parse_ingredient_line(text)
    fields = build_grocery_item_insertion(parsed, grocery_list.id)
    fields['category'] = guess_category(parsed.name)
    fields['notes'] = notes
    fields['estimated_price'] = estimated_price
    fields['sort_order'] = 1000 + grocery_list.total_items
    fields['metadata']['manually_added'] = True
    return repository.create_grocery_item(fields)


def remove_item(item):
    """Soft-delete an item; the update listener drops it from its selection."""
    item.soft_delete()
    db.session.flush()


def get_recipe_summary(grocery_list):
    """Per attached recipe: servings and the items currently selected."""
    summary = []
    links = GroceryListRecipe.query.filter_by(grocery_list_id=grocery_list.id).order_by(GroceryListRecipe.id).all()
    for link in links:
        selected = get_selected_items_for_recipe(grocery_list.id, link.recipe_id)
        summary.append({
            'recipe_id': link.recipe_id,
            'recipe_name': link.recipe.name,
            'servings': link.servings,
            'auto_generated': link.auto_generated,
            'selected_items_count': len(selected),
            'selected_items': [item.to_dict() for item in selected],
            'total_estimated_cost': round(sum(item.estimated_price or 0.0 for item in selected), 2),
        })
    return summary


def seed_sample_recipes():
    """Insert the sample recipes that are not there yet. Returns how many were added."""
    added = 0
    for data in SAMPLE_RECIPES:
        if Recipe.query.filter_by(name=data['name']).first():
            continue
        db.session.add(Recipe(name=data['name'], servings=data['servings'],
                              ingredients=list(data['ingredients'])))
        added += 1
    db.session.flush()
    return added
