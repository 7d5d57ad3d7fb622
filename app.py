import logging

import click
from flask import Blueprint, Flask, abort, current_app, jsonify, request
from flask_migrate import Migrate
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import get_config
from constants import MAX_LENGTHS, MIN_SERVINGS, MAX_SERVINGS
from models import db, Unit, Recipe, GroceryList, GroceryItem
from services import (
    SelectionConflictError,
    add_manual_item,
    attach_recipe,
    common_units,
    create_grocery_list,
    delete_grocery_list,
    detach_recipe,
    get_recipe_summary,
    parse_ingredient_lines,
    register_listeners,
    remove_item,
    seed_sample_recipes,
    seed_units,
    update_selected_items_for_recipe,
)
from services.repository import find_pivot
from utils.sanitizer import sanitize_ingredient_text, sanitize_name, sanitize_text

logger = logging.getLogger(__name__)

migrate = Migrate()
api = Blueprint('api', __name__, url_prefix='/api')


def safe_int(value, default=1, min_val=None, max_val=None):
    """Safely convert value to int with bounds checking."""
    try:
        result = int(value)
    except (ValueError, TypeError):
        return default
    if min_val is not None and result < min_val:
        result = min_val
    if max_val is not None and result > max_val:
        result = max_val
    return result


def safe_float(value, default=None, min_val=None, max_val=None):
    """Safely convert value to float with bounds checking."""
    if value is None or value == '':
        return default
    try:
        result = float(value)
    except (ValueError, TypeError):
        return default
    if min_val is not None and result < min_val:
        result = min_val
    if max_val is not None and result > max_val:
        result = max_val
    return result


def get_json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        abort(400, description='Request body must be a JSON object')
    return data


def get_list_or_404(list_id):
    return db.get_or_404(GroceryList, list_id)


# ============================================
# ROUTES - INGREDIENTS & UNITS
# ============================================

@api.route('/health')
def health():
    return jsonify({'status': 'ok'})


@api.route('/ingredients/parse', methods=['POST'])
def ingredients_parse():
    data = get_json_body()
    lines = data.get('lines')
    if not isinstance(lines, list) or not all(isinstance(line, str) for line in lines):
        abort(400, description='"lines" must be a list of strings')
    max_lines = current_app.config['MAX_INGREDIENT_LINES']
    if len(lines) > max_lines:
        abort(400, description=f'At most {max_lines} lines per request')

    lines = [sanitize_ingredient_text(line, max_length=MAX_LENGTHS['ingredient_text']) for line in lines]
    parsed = parse_ingredient_lines(lines)
    # Units may have been created while parsing
    db.session.commit()
    return jsonify({'parsed': [p.to_dict() for p in parsed]})


@api.route('/units')
def units_list():
    grouped = Unit.grouped_by_type()
    return jsonify({unit_type: [u.to_dict() for u in units] for unit_type, units in grouped.items()})


@api.route('/units/common')
def units_common():
    return jsonify({'units': common_units()})


# ============================================
# ROUTES - GROCERY LISTS
# ============================================

@api.route('/grocery-lists', methods=['POST'])
def grocery_list_create():
    data = get_json_body()
    name = sanitize_name(data.get('name'), max_length=MAX_LENGTHS['grocery_list_name'])
    description = data.get('description')
    if description is not None:
        description = sanitize_text(description, max_length=MAX_LENGTHS['grocery_list_description'])
    grocery_list = create_grocery_list(name, description)
    db.session.commit()
    return jsonify(grocery_list.to_dict(include_items=True)), 201


@api.route('/grocery-lists/<int:list_id>')
def grocery_list_view(list_id):
    grocery_list = get_list_or_404(list_id)
    return jsonify(grocery_list.to_dict(include_items=True))


@api.route('/grocery-lists/<int:list_id>', methods=['DELETE'])
def grocery_list_delete(list_id):
    grocery_list = get_list_or_404(list_id)
    delete_grocery_list(grocery_list)
    db.session.commit()
    return '', 204


@api.route('/grocery-lists/<int:list_id>/recipes')
def grocery_list_recipes(list_id):
    grocery_list = get_list_or_404(list_id)
    return jsonify({'recipes': get_recipe_summary(grocery_list)})


@api.route('/grocery-lists/<int:list_id>/recipes', methods=['POST'])
def grocery_list_attach_recipe(list_id):
    grocery_list = get_list_or_404(list_id)
    data = get_json_body()
    recipe = db.session.get(Recipe, safe_int(data.get('recipe_id'), default=0))
    if recipe is None:
        abort(404, description='Recipe not found')
    servings = safe_int(data.get('servings'), default=1, min_val=MIN_SERVINGS, max_val=MAX_SERVINGS)

    try:
        items = attach_recipe(grocery_list, recipe, servings=servings,
                              auto_generated=bool(data.get('auto_generated', True)))
    except ValueError as e:
        db.session.rollback()
        abort(400, description=str(e))
    db.session.commit()
    return jsonify({'items': [item.to_dict() for item in items]}), 201


@api.route('/grocery-lists/<int:list_id>/recipes/<int:recipe_id>', methods=['DELETE'])
def grocery_list_detach_recipe(list_id, recipe_id):
    grocery_list = get_list_or_404(list_id)
    recipe = db.get_or_404(Recipe, recipe_id)
    if not detach_recipe(grocery_list, recipe):
        abort(404, description='Recipe is not attached to this list')
    db.session.commit()
    return '', 204


@api.route('/grocery-lists/<int:list_id>/recipes/<int:recipe_id>/selection', methods=['PUT'])
def grocery_list_update_selection(list_id, recipe_id):
    get_list_or_404(list_id)
    data = get_json_body()
    item_ids = data.get('item_ids')
    if not isinstance(item_ids, list) or not all(isinstance(i, int) and not isinstance(i, bool) for i in item_ids):
        abort(400, description='"item_ids" must be a list of integers')
    if find_pivot(list_id, recipe_id) is None:
        abort(404, description='Recipe is not attached to this list')

    # A selection may only name live items of this list that came from this recipe
    valid_ids = {
        item_id for (item_id,) in GroceryItem.active()
        .filter_by(grocery_list_id=list_id, recipe_id=recipe_id)
        .with_entities(GroceryItem.id)
    }
    unknown = sorted(set(item_ids) - valid_ids)
    if unknown:
        abort(400, description=f'Items {unknown} do not belong to this recipe on this list')

    update_selected_items_for_recipe(list_id, recipe_id, item_ids)
    db.session.commit()
    return jsonify({'selected_item_ids': sorted(set(item_ids))})


# ============================================
# ROUTES - GROCERY ITEMS
# ============================================

@api.route('/grocery-lists/<int:list_id>/items', methods=['POST'])
def grocery_item_add(list_id):
    grocery_list = get_list_or_404(list_id)
    data = get_json_body()
    text = sanitize_ingredient_text(data.get('text'), max_length=MAX_LENGTHS['ingredient_text'])
    if not text:
        abort(400, description='"text" is required')
    notes = data.get('notes')
    if notes is not None:
        notes = sanitize_text(notes, max_length=MAX_LENGTHS['notes'])
    item = add_manual_item(
        grocery_list, text, notes=notes,
        estimated_price=safe_float(data.get('estimated_price'), min_val=0.0, max_val=99999.99),
    )
    db.session.commit()
    return jsonify(item.to_dict()), 201


def get_item_or_404(list_id, item_id):
    item = GroceryItem.active().filter_by(id=item_id, grocery_list_id=list_id).first()
    if item is None:
        abort(404, description='Item not found')
    return item


@api.route('/grocery-lists/<int:list_id>/items/<int:item_id>/toggle', methods=['POST'])
def grocery_item_toggle(list_id, item_id):
    item = get_item_or_404(list_id, item_id)
    item.toggle()
    db.session.commit()
    return jsonify(item.to_dict())


@api.route('/grocery-lists/<int:list_id>/items/<int:item_id>', methods=['DELETE'])
def grocery_item_delete(list_id, item_id):
    item = get_item_or_404(list_id, item_id)
    remove_item(item)
    db.session.commit()
    return '', 204


# ============================================
# ERROR HANDLERS
# ============================================

def handle_http_error(e):
    return jsonify({'error': e.description}), e.code


def handle_selection_conflict(e):
    db.session.rollback()
    logger.warning("Selection conflict: %s", e)
    return jsonify({'error': str(e)}), 409


def handle_database_error(e):
    db.session.rollback()
    logger.exception("Database error while handling %s %s", request.method, request.path)
    return jsonify({'error': 'Database error'}), 500


# ============================================
# APPLICATION FACTORY
# ============================================

def create_app(env=None):
    app = Flask(__name__)
    app.config.from_object(get_config(env))

    logging.basicConfig(
        level=app.config['LOG_LEVEL'],
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    db.init_app(app)
    migrate.init_app(app, db)
    register_listeners()

    app.register_blueprint(api)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(SelectionConflictError, handle_selection_conflict)
    app.register_error_handler(SQLAlchemyError, handle_database_error)

    @app.cli.command('init-db')
    def init_db_command():
        """Create all tables."""
        init_db(app)
        click.echo('Database initialized')

    @app.cli.command('seed')
    def seed_command():
        """Seed the standard units and the sample recipes."""
        with app.app_context():
            db.create_all()
            unit_count = seed_units()
            recipe_count = seed_sample_recipes()
            db.session.commit()
        click.echo(f'Units: {unit_count}, recipes added: {recipe_count}')

    return app


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(app):
    with app.app_context():
        db.create_all()


if __name__ == '__main__':
    application = create_app()
    init_db(application)
    # host='0.0.0.0' allows access from other devices on the network
    application.run(debug=True, host='0.0.0.0', port=5000, use_reloader=False)
