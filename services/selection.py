"""
Selection Service

Keeps each grocery list / recipe pivot's selected_item_ids in step with the
grocery items that exist for that pair.

The hooks are wired to SQLAlchemy mapper events by register_listeners(), so
code that creates or deletes grocery items does not have to touch the pivot:

    after_insert on GroceryItem              -> on_grocery_item_created
    before_delete on GroceryItem             -> on_grocery_item_deleted
    after_update setting GroceryItem.deleted_at -> on_grocery_item_deleted
    before_delete on GroceryList             -> handle_grocery_list_deletion

Selection writes are read-compare-write against GroceryListRecipe.version,
retried up to SELECTION_UPDATE_RETRIES times.
"""

import logging

from flask import current_app, has_app_context
from sqlalchemy import event
from sqlalchemy.orm.attributes import get_history

from models import GroceryItem, GroceryList

from . import repository

logger = logging.getLogger(__name__)

DEFAULT_RETRIES = 5


class SelectionConflictError(Exception):
    """Raised when a pivot kept changing under every retry."""
    pass


def _max_attempts():
    if has_app_context():
        return max(1, int(current_app.config.get('SELECTION_UPDATE_RETRIES', DEFAULT_RETRIES)))
    return DEFAULT_RETRIES


def _mutate_selection(grocery_list_id, recipe_id, mutate, connection=None):
    """
    Apply `mutate` (set -> set) to a pivot's selection and write it back.

    Returns True if the stored set changed. A missing pivot is a no-op.
    """
    attempts = _max_attempts()
    for attempt in range(1, attempts + 1):
        pivot = repository.find_pivot(grocery_list_id, recipe_id, connection=connection)
        if pivot is None:
            logger.debug("No pivot for list %s / recipe %s, skipping selection update",
                         grocery_list_id, recipe_id)
            return False

        current = repository.load_selection(pivot.selected_item_ids)
        updated = mutate(set(current))
        if updated == current:
            return False

        if repository.update_pivot_selected_item_ids(
                grocery_list_id, recipe_id, updated,
                expected_version=pivot.version, connection=connection):
            logger.debug("Selection for list %s / recipe %s is now %s",
                         grocery_list_id, recipe_id, sorted(updated))
            return True

        logger.warning("Selection for list %s / recipe %s changed concurrently (attempt %d/%d)",
                       grocery_list_id, recipe_id, attempt, attempts)

    raise SelectionConflictError(
        f"Could not update selection for list {grocery_list_id} / recipe {recipe_id} "
        f"after {attempts} attempts"
    )


def on_grocery_item_created(item, connection=None):
    """Add a recipe item's id to its pivot selection."""
    if not item.recipe_id:
        return False

    def add(selection):
        selection.add(item.id)
        return selection

    return _mutate_selection(item.grocery_list_id, item.recipe_id, add, connection=connection)


def on_grocery_item_deleted(item, connection=None):
    """Remove a recipe item's id from its pivot selection."""
    if not item.recipe_id:
        return False

    def remove(selection):
        selection.discard(item.id)
        return selection

    return _mutate_selection(item.grocery_list_id, item.recipe_id, remove, connection=connection)


def handle_grocery_list_deletion(grocery_list_id, connection=None):
    """Drop every pivot row of a list in one statement."""
    deleted = repository.delete_pivot_rows_for_list(grocery_list_id, connection=connection)
    logger.debug("Deleted %d pivot rows for list %s", deleted, grocery_list_id)
    return deleted


def handle_recipe_detachment(grocery_list_id, recipe_id, connection=None):
    """Drop one pivot row. The list's items are left alone."""
    return repository.delete_pivot_row(grocery_list_id, recipe_id, connection=connection)


def get_selected_items_for_recipe(grocery_list_id, recipe_id):
    pivot = repository.find_pivot(grocery_list_id, recipe_id)
    if pivot is None or not pivot.selected_item_ids:
        return []

    selected = repository.load_selection(pivot.selected_item_ids)
    return (
        GroceryItem.active()
        .filter(GroceryItem.grocery_list_id == grocery_list_id, GroceryItem.id.in_(selected))
        .order_by(GroceryItem.sort_order, GroceryItem.id)
        .all()
    )


def update_selected_items_for_recipe(grocery_list_id, recipe_id, item_ids):
    """Overwrite a pivot's selection. Duplicates collapse."""
    return repository.update_pivot_selected_item_ids(grocery_list_id, recipe_id, set(item_ids))


def is_item_selected_for_recipe(item):
    """Manual items are never in a selection."""
    if not item.recipe_id:
        return False
    pivot = repository.find_pivot(item.grocery_list_id, item.recipe_id)
    if pivot is None:
        return False
    return item.id in repository.load_selection(pivot.selected_item_ids)


# ============================================
# MAPPER EVENT LISTENERS
# ============================================

def _after_item_insert(mapper, connection, target):
    on_grocery_item_created(target, connection=connection)


def _before_item_delete(mapper, connection, target):
    # Already removed when the item was soft-deleted
    if target.deleted_at is None:
        on_grocery_item_deleted(target, connection=connection)


def _after_item_update(mapper, connection, target):
    history = get_history(target, 'deleted_at')
    if not history.added or history.added[0] is None:
        return
    if any(value is not None for value in history.deleted):
        return
    on_grocery_item_deleted(target, connection=connection)


def _before_list_delete(mapper, connection, target):
    handle_grocery_list_deletion(target.id, connection=connection)


LISTENERS = (
    (GroceryItem, 'after_insert', _after_item_insert),
    (GroceryItem, 'before_delete', _before_item_delete),
    (GroceryItem, 'after_update', _after_item_update),
    (GroceryList, 'before_delete', _before_list_delete),
)


def register_listeners():
    """Attach the selection hooks to the ORM. Idempotent."""
    for model, name, listener in LISTENERS:
        if not event.contains(model, name, listener):
            event.listen(model, name, listener)
