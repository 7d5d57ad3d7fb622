"""
Grocery Models

Contains the GroceryList, GroceryItem and GroceryListRecipe (pivot) models.

GroceryListRecipe.selected_item_ids is a denormalized cache of the ids of the
list's live items that came from that recipe. It is maintained by the
listeners in services.selection, not by callers.
"""

from datetime import datetime, timezone

from utils.formatting import format_quantity

from .base import db


def _utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


class GroceryList(db.Model):
    """Shopping list with items and attached recipes."""
    __tablename__ = 'grocery_lists'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)
    completed_at = db.Column(db.DateTime, nullable=True, index=True)
    # 'metadata' is reserved on declarative classes
    meta = db.Column('metadata', db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now(), index=True)
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    # Items go with the list through ON DELETE CASCADE
    items = db.relationship(
        'GroceryItem', backref='grocery_list', lazy=True,
        order_by='GroceryItem.sort_order',
        cascade='all', passive_deletes=True,
    )
    # Pivot rows are written with Core statements; the ORM only reads them
    recipe_links = db.relationship('GroceryListRecipe', lazy=True, viewonly=True)
    recipes = db.relationship('Recipe', secondary='grocery_list_recipes', lazy=True, viewonly=True)

    def active_items(self):
        return GroceryItem.active().filter_by(grocery_list_id=self.id).order_by(GroceryItem.sort_order).all()

    @property
    def is_completed(self):
        return self.completed_at is not None

    def mark_as_completed(self):
        self.completed_at = _utcnow()

    def mark_as_incomplete(self):
        self.completed_at = None

    @property
    def total_items(self):
        return GroceryItem.active().filter_by(grocery_list_id=self.id).count()

    @property
    def checked_items_count(self):
        return GroceryItem.active().filter_by(grocery_list_id=self.id, is_checked=True).count()

    @property
    def completion_percentage(self):
        total = self.total_items
        if total == 0:
            return 0.0
        return round(self.checked_items_count / total * 100, 2)

    @property
    def estimated_total_price(self):
        total = (
            db.session.query(db.func.sum(GroceryItem.estimated_price))
            .filter(GroceryItem.grocery_list_id == self.id, GroceryItem.deleted_at.is_(None))
            .scalar()
        )
        return round(float(total or 0.0), 2)

    def to_dict(self, include_items=False):
        data = {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'is_completed': self.is_completed,
            'total_items': self.total_items,
            'checked_items_count': self.checked_items_count,
            'completion_percentage': self.completion_percentage,
            'estimated_total_price': self.estimated_total_price,
        }
        if include_items:
            data['items'] = [item.to_dict() for item in self.active_items()]
        return data


class GroceryItem(db.Model):
    """One shopping-list line, optionally generated from a recipe."""
    __tablename__ = 'grocery_items'

    id = db.Column(db.Integer, primary_key=True)
    grocery_list_id = db.Column(
        db.Integer, db.ForeignKey('grocery_lists.id', ondelete='CASCADE'), nullable=False, index=True
    )
    name = db.Column(db.String(255), nullable=False, index=True)
    category = db.Column(db.String(50), nullable=True)
    quantity = db.Column(db.Numeric(8, 2, asdecimal=False), nullable=True)
    unit_id = db.Column(db.Integer, db.ForeignKey('units.id', ondelete='SET NULL'), nullable=True, index=True)
    notes = db.Column(db.Text, nullable=True)
    is_checked = db.Column(db.Boolean, nullable=False, default=False)
    checked_at = db.Column(db.DateTime, nullable=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    estimated_price = db.Column(db.Numeric(8, 2, asdecimal=False), nullable=True)
    # NULL means the item was added by hand
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='SET NULL'), nullable=True, index=True)
    meta = db.Column('metadata', db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())
    deleted_at = db.Column(db.DateTime, nullable=True, index=True)

    unit = db.relationship('Unit')
    recipe = db.relationship('Recipe')

    @classmethod
    def active(cls):
        """Query excluding soft-deleted items."""
        return cls.query.filter(cls.deleted_at.is_(None))

    def check(self):
        self.is_checked = True
        self.checked_at = _utcnow()

    def uncheck(self):
        self.is_checked = False
        self.checked_at = None

    def toggle(self):
        if self.is_checked:
            self.uncheck()
        else:
            self.check()

    def soft_delete(self):
        self.deleted_at = _utcnow()

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @property
    def is_from_recipe(self):
        return self.recipe_id is not None

    @property
    def has_standard_unit(self):
        return bool(self.unit and self.unit.is_standardized)

    @property
    def unit_category(self):
        return self.unit.unit_type if self.unit else None

    @property
    def display_quantity(self):
        return format_quantity(self.quantity, self.unit.display if self.unit else '')

    def to_dict(self):
        return {
            'id': self.id,
            'grocery_list_id': self.grocery_list_id,
            'name': self.name,
            'category': self.category,
            'quantity': self.quantity,
            'unit': self.unit.name if self.unit else None,
            'display_quantity': self.display_quantity,
            'notes': self.notes,
            'is_checked': self.is_checked,
            'sort_order': self.sort_order,
            'estimated_price': self.estimated_price,
            'recipe_id': self.recipe_id,
            'metadata': self.meta or {},
        }


class GroceryListRecipe(db.Model):
    """Pivot between a grocery list and an attached recipe."""
    __tablename__ = 'grocery_list_recipes'
    __table_args__ = (
        db.UniqueConstraint('grocery_list_id', 'recipe_id', name='uq_grocery_list_recipe'),
    )

    id = db.Column(db.Integer, primary_key=True)
    grocery_list_id = db.Column(
        db.Integer, db.ForeignKey('grocery_lists.id', ondelete='CASCADE'), nullable=False, index=True
    )
    recipe_id = db.Column(db.Integer, db.ForeignKey('recipes.id', ondelete='CASCADE'), nullable=False, index=True)
    servings = db.Column(db.Integer, nullable=False, default=1)
    # Stored as a sorted JSON array, used as a set
    selected_item_ids = db.Column(db.JSON, nullable=True)
    auto_generated = db.Column(db.Boolean, nullable=False, default=True)
    # Bumped on every selection write; guards the read-compare-write loop
    version = db.Column(db.Integer, nullable=False, default=0, server_default='0')
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    recipe = db.relationship('Recipe', viewonly=True)
