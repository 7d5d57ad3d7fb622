"""
Services Package

Business logic modules for the grocery backend.
"""

from .units import (
    standardize,
    classify,
    is_known,
    get_unit_abbreviation,
    common_units,
    resolve_unit,
    seed_units,
)

from .parsing import (
    ParsedIngredient,
    parse_quantity,
    is_likely_unit,
    parse_ingredient_line,
    parse_ingredient_lines,
    build_grocery_item_insertion,
)

from .selection import (
    SelectionConflictError,
    on_grocery_item_created,
    on_grocery_item_deleted,
    handle_grocery_list_deletion,
    handle_recipe_detachment,
    get_selected_items_for_recipe,
    update_selected_items_for_recipe,
    is_item_selected_for_recipe,
    register_listeners,
)

from .shopping import (
    guess_category,
    create_grocery_list,
    delete_grocery_list,
    attach_recipe,
    detach_recipe,
    add_manual_item,
    remove_item,
    get_recipe_summary,
    seed_sample_recipes,
)

__all__ = [
    # Units
    'standardize',
    'classify',
    'is_known',
    'get_unit_abbreviation',
    'common_units',
    'resolve_unit',
    'seed_units',
    # Parsing
    'ParsedIngredient',
    'parse_quantity',
    'is_likely_unit',
    'parse_ingredient_line',
    'parse_ingredient_lines',
    'build_grocery_item_insertion',
    # Selection
    'SelectionConflictError',
    'on_grocery_item_created',
    'on_grocery_item_deleted',
    'handle_grocery_list_deletion',
    'handle_recipe_detachment',
    'get_selected_items_for_recipe',
    'update_selected_items_for_recipe',
    'is_item_selected_for_recipe',
    'register_listeners',
    # Shopping
    'guess_category',
    'create_grocery_list',
    'delete_grocery_list',
    'attach_recipe',
    'detach_recipe',
    'add_manual_item',
    'remove_item',
    'get_recipe_summary',
    'seed_sample_recipes',
]
