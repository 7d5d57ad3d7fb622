"""
Storage Service

Data-access operations used by the unit resolver and the selection
synchronizer.

Pivot functions take an optional `connection`. Listeners running inside a
flush pass the flushing connection; everyone else goes through db.session.
"""

from sqlalchemy import delete, select, update

from models import db, Unit, GroceryItem, GroceryListRecipe

pivot_table = GroceryListRecipe.__table__


def _executor(connection):
    return connection if connection is not None else db.session


def load_selection(value):
    """Stored JSON array (or None) -> set of item ids."""
    if not value:
        return set()
    return {int(item_id) for item_id in value}


def dump_selection(item_ids):
    """Set of item ids -> sorted list for the JSON column."""
    return sorted({int(item_id) for item_id in item_ids})


def find_unit_by_name(name):
    return Unit.find_by_name(name)


def create_unit(fields):
    unit = Unit(**fields)
    db.session.add(unit)
    db.session.flush()
    return unit


def find_pivot(grocery_list_id, recipe_id, connection=None):
    """Return the pivot row (id, selected_item_ids, version, ...) or None."""
    stmt = select(pivot_table).where(
        pivot_table.c.grocery_list_id == grocery_list_id,
        pivot_table.c.recipe_id == recipe_id,
    )
    return _executor(connection).execute(stmt).first()


def update_pivot_selected_item_ids(grocery_list_id, recipe_id, item_ids,
                                   expected_version=None, connection=None):
    """
    Overwrite a pivot's selection set and bump its version.

    With expected_version the write only lands if nobody else wrote since
    that version was read. Returns True when a row was updated.
    """
    stmt = (
        update(pivot_table)
        .where(
            pivot_table.c.grocery_list_id == grocery_list_id,
            pivot_table.c.recipe_id == recipe_id,
        )
        .values(
            selected_item_ids=dump_selection(item_ids),
            version=pivot_table.c.version + 1,
            updated_at=db.func.now(),
        )
    )
    if expected_version is not None:
        stmt = stmt.where(pivot_table.c.version == expected_version)
    result = _executor(connection).execute(stmt)
    return result.rowcount > 0


def delete_pivot_rows_for_list(grocery_list_id, connection=None):
    stmt = delete(pivot_table).where(pivot_table.c.grocery_list_id == grocery_list_id)
    return _executor(connection).execute(stmt).rowcount


def delete_pivot_row(grocery_list_id, recipe_id, connection=None):
    stmt = delete(pivot_table).where(
        pivot_table.c.grocery_list_id == grocery_list_id,
        pivot_table.c.recipe_id == recipe_id,
    )
    return _executor(connection).execute(stmt).rowcount


def create_grocery_item(fields):
    """
    Insert a grocery item from an insertion record.

    The flush fires the item's after_insert listener, which updates the
    pivot selection.
    """
    fields = dict(fields)
    if 'metadata' in fields:
        fields['meta'] = fields.pop('metadata')
    item = GroceryItem(**fields)
    db.session.add(item)
    db.session.flush()
    return item
