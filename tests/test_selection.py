"""
Tests for keeping pivot selections in step with grocery items.
"""

import random
from types import SimpleNamespace

import pytest

from models import GroceryItem, GroceryList, GroceryListRecipe
from services import (
    SelectionConflictError,
    delete_grocery_list,
    get_selected_items_for_recipe,
    handle_recipe_detachment,
    is_item_selected_for_recipe,
    on_grocery_item_created,
    on_grocery_item_deleted,
    remove_item,
    update_selected_items_for_recipe,
)
from services import repository, selection as selection_service


def add_item(session, grocery_list, recipe=None, name='flour', sort_order=0):
    item = GroceryItem(
        grocery_list_id=grocery_list.id,
        recipe_id=recipe.id if recipe is not None else None,
        name=name,
        sort_order=sort_order,
        meta={},
    )
    session.add(item)
    session.flush()
    return item


def selected_ids(grocery_list, recipe):
    pivot = repository.find_pivot(grocery_list.id, recipe.id)
    return repository.load_selection(pivot.selected_item_ids)


@pytest.fixture
def count_deletes(monkeypatch):
    """Record every call of the item-deleted hook made by the listeners."""
    calls = []
    real = selection_service.on_grocery_item_deleted

    def counting(item, connection=None):
        calls.append(item.id)
        return real(item, connection=connection)

    monkeypatch.setattr(selection_service, 'on_grocery_item_deleted', counting)
    return calls


class TestItemCreated:

    def test_recipe_item_is_selected(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, recipe)

        assert selected_ids(grocery_list, recipe) == {item.id}

    def test_hook_is_idempotent(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, recipe)
        version = repository.find_pivot(grocery_list.id, recipe.id).version

        assert on_grocery_item_created(item) is False
        assert selected_ids(grocery_list, recipe) == {item.id}
        # Unchanged sets are not written back
        assert repository.find_pivot(grocery_list.id, recipe.id).version == version

    def test_manual_item_leaves_selection_alone(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, name='paper towels')

        assert on_grocery_item_created(item) is False
        assert selected_ids(grocery_list, recipe) == set()

    def test_missing_pivot_is_a_noop(self, session, grocery_list, recipe):
        item = add_item(session, grocery_list, recipe)

        assert on_grocery_item_created(item) is False
        assert repository.find_pivot(grocery_list.id, recipe.id) is None

    def test_items_on_other_lists_are_not_selected(self, session, grocery_list, recipe, attach_pivot):
        other = GroceryList(name='Party', meta={})
        session.add(other)
        session.flush()
        attach_pivot(grocery_list, recipe)
        attach_pivot(other, recipe)

        mine = add_item(session, grocery_list, recipe)
        theirs = add_item(session, other, recipe)

        assert selected_ids(grocery_list, recipe) == {mine.id}
        assert selected_ids(other, recipe) == {theirs.id}


class TestItemDeleted:

    def test_hard_delete(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        keep = add_item(session, grocery_list, recipe, name='eggs')
        gone = add_item(session, grocery_list, recipe)

        session.delete(gone)
        session.flush()

        assert selected_ids(grocery_list, recipe) == {keep.id}

    def test_hard_delete_after_commit(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, recipe)
        session.commit()

        session.delete(item)
        session.commit()

        assert selected_ids(grocery_list, recipe) == set()

    def test_soft_delete(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, recipe)

        remove_item(item)

        assert selected_ids(grocery_list, recipe) == set()
        assert session.get(GroceryItem, item.id).is_deleted

    def test_soft_delete_fires_once(self, session, grocery_list, recipe, attach_pivot, count_deletes):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, recipe)

        remove_item(item)
        item.check()
        session.flush()

        assert count_deletes == [item.id]

    def test_purging_soft_deleted_item_does_not_fire_again(self, session, grocery_list, recipe,
                                                           attach_pivot, count_deletes):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, recipe)
        item_id = item.id

        remove_item(item)
        session.delete(item)
        session.flush()

        assert count_deletes == [item_id]

    def test_other_updates_do_not_fire(self, session, grocery_list, recipe, attach_pivot, count_deletes):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, recipe)

        item.toggle()
        item.notes = 'organic'
        session.flush()

        assert count_deletes == []
        assert selected_ids(grocery_list, recipe) == {item.id}

    def test_deleting_unselected_item_is_harmless(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, recipe)
        update_selected_items_for_recipe(grocery_list.id, recipe.id, [])

        assert on_grocery_item_deleted(item) is False


class TestListDeletion:

    def test_session_delete_removes_pivots_and_items(self, session, grocery_list, make_recipe, attach_pivot):
        first, second = make_recipe('Soup'), make_recipe('Bread')
        attach_pivot(grocery_list, first)
        attach_pivot(grocery_list, second)
        add_item(session, grocery_list, first)
        add_item(session, grocery_list, second)
        add_item(session, grocery_list, name='napkins')
        list_id = grocery_list.id
        session.commit()

        session.delete(grocery_list)
        session.commit()

        assert GroceryListRecipe.query.filter_by(grocery_list_id=list_id).count() == 0
        assert GroceryItem.query.filter_by(grocery_list_id=list_id).count() == 0

    def test_bulk_delete_skips_item_hooks(self, session, grocery_list, make_recipe, attach_pivot, count_deletes):
        recipes = [make_recipe(f'Recipe {n}') for n in range(3)]
        for recipe in recipes:
            attach_pivot(grocery_list, recipe)
            for n in range(4):
                add_item(session, grocery_list, recipe, name=f'item {n}')
        list_id = grocery_list.id
        session.commit()

        delete_grocery_list(grocery_list)
        session.commit()

        assert count_deletes == []
        assert GroceryListRecipe.query.count() == 0
        assert GroceryItem.query.filter_by(grocery_list_id=list_id).count() == 0
        assert session.get(GroceryList, list_id) is None

    def test_other_lists_are_untouched(self, session, grocery_list, recipe, attach_pivot):
        other = GroceryList(name='Party', meta={})
        session.add(other)
        session.flush()
        attach_pivot(grocery_list, recipe)
        attach_pivot(other, recipe)
        theirs = add_item(session, other, recipe)
        session.commit()

        delete_grocery_list(grocery_list)
        session.commit()

        assert selected_ids(other, recipe) == {theirs.id}


def test_recipe_detachment_keeps_items(session, grocery_list, recipe, attach_pivot):
    attach_pivot(grocery_list, recipe)
    item = add_item(session, grocery_list, recipe)

    assert handle_recipe_detachment(grocery_list.id, recipe.id) == 1
    assert repository.find_pivot(grocery_list.id, recipe.id) is None
    assert session.get(GroceryItem, item.id) is not None
    # Deleting the orphaned item is now a no-op for the selection
    remove_item(item)
    assert handle_recipe_detachment(grocery_list.id, recipe.id) == 0


class TestSelectedItems:

    def test_get_is_ordered_by_sort_order(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        late = add_item(session, grocery_list, recipe, name='salt', sort_order=2)
        early = add_item(session, grocery_list, recipe, name='flour', sort_order=0)

        assert get_selected_items_for_recipe(grocery_list.id, recipe.id) == [early, late]

    def test_get_without_pivot(self, session, grocery_list, recipe):
        assert get_selected_items_for_recipe(grocery_list.id, recipe.id) == []

    def test_get_ignores_ids_of_other_lists(self, session, grocery_list, recipe, attach_pivot):
        other = GroceryList(name='Party', meta={})
        session.add(other)
        session.flush()
        attach_pivot(grocery_list, recipe)
        stray = add_item(session, other, name='balloons')

        update_selected_items_for_recipe(grocery_list.id, recipe.id, [stray.id])

        assert get_selected_items_for_recipe(grocery_list.id, recipe.id) == []

    def test_update_overwrites_and_deduplicates(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        first = add_item(session, grocery_list, recipe, name='flour')
        second = add_item(session, grocery_list, recipe, name='eggs')

        assert update_selected_items_for_recipe(grocery_list.id, recipe.id, [second.id, second.id])

        pivot = repository.find_pivot(grocery_list.id, recipe.id)
        assert pivot.selected_item_ids == [second.id]
        assert not is_item_selected_for_recipe(first)
        assert is_item_selected_for_recipe(second)

    def test_update_without_pivot(self, session, grocery_list, recipe):
        assert update_selected_items_for_recipe(grocery_list.id, recipe.id, [1, 2]) is False

    def test_manual_item_is_never_selected(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        item = add_item(session, grocery_list, name='foil')

        assert not is_item_selected_for_recipe(item)

    def test_every_write_bumps_the_version(self, session, grocery_list, recipe, attach_pivot):
        attach_pivot(grocery_list, recipe)
        add_item(session, grocery_list, recipe)
        add_item(session, grocery_list, recipe)

        assert repository.find_pivot(grocery_list.id, recipe.id).version == 2


class TestConcurrentWrites:

    def test_lost_race_is_retried_without_losing_the_other_write(self, session, grocery_list, recipe,
                                                                attach_pivot, monkeypatch):
        attach_pivot(grocery_list, recipe)
        real_update = repository.update_pivot_selected_item_ids
        calls = []

        def racing_update(list_id, recipe_id, item_ids, expected_version=None, connection=None):
            calls.append(expected_version)
            if len(calls) == 1:
                # Another writer lands between our read and our write
                real_update(list_id, recipe_id, {500}, connection=connection)
            return real_update(list_id, recipe_id, item_ids,
                               expected_version=expected_version, connection=connection)

        monkeypatch.setattr(repository, 'update_pivot_selected_item_ids', racing_update)

        item = SimpleNamespace(id=42, grocery_list_id=grocery_list.id, recipe_id=recipe.id)
        assert on_grocery_item_created(item) is True

        assert calls == [0, 1]
        assert selected_ids(grocery_list, recipe) == {42, 500}

    def test_gives_up_after_configured_attempts(self, app, session, grocery_list, recipe,
                                                attach_pivot, monkeypatch):
        attach_pivot(grocery_list, recipe)
        app.config['SELECTION_UPDATE_RETRIES'] = 3
        calls = []

        def always_stale(*args, **kwargs):
            calls.append(kwargs.get('expected_version'))
            return False

        monkeypatch.setattr(repository, 'update_pivot_selected_item_ids', always_stale)

        item = SimpleNamespace(id=7, grocery_list_id=grocery_list.id, recipe_id=recipe.id)
        with pytest.raises(SelectionConflictError):
            on_grocery_item_created(item)

        assert len(calls) == 3
        assert selected_ids(grocery_list, recipe) == set()


@pytest.mark.parametrize('seed', range(8))
def test_selection_tracks_live_recipe_items(session, grocery_list, make_recipe, attach_pivot, seed):
    rng = random.Random(seed)
    recipes = [make_recipe(f'Recipe {n}', ingredients=[]) for n in range(3)]
    for recipe in recipes:
        attach_pivot(grocery_list, recipe)

    live = []
    soft_deleted = []
    for step in range(40):
        action = rng.choice(['create', 'create', 'create', 'hard_delete', 'soft_delete', 'purge'])

        if action == 'create':
            recipe = rng.choice(recipes + [None])
            live.append(add_item(session, grocery_list, recipe, name=f'item {step}'))
        elif action == 'hard_delete' and live:
            item = live.pop(rng.randrange(len(live)))
            session.delete(item)
            session.flush()
        elif action == 'soft_delete' and live:
            item = live.pop(rng.randrange(len(live)))
            remove_item(item)
            soft_deleted.append(item)
        elif action == 'purge' and soft_deleted:
            session.delete(soft_deleted.pop(rng.randrange(len(soft_deleted))))
            session.flush()

        if rng.random() < 0.2:
            session.commit()

        for recipe in recipes:
            expected = {item.id for item in live if item.recipe_id == recipe.id}
            assert selected_ids(grocery_list, recipe) == expected
