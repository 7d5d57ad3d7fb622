"""
Unit Model

Canonical measurement units. Rows are created lazily by the unit resolver
the first time a unit string is seen, and by `flask seed`.
"""

from sqlalchemy.orm import validates

from constants import UNIT_TYPES

from .base import db


class Unit(db.Model):
    """
    Canonical measurement unit.

    unit_type is one of volume, weight, count, size, special, other.
    name is unique and always stored lowercase and trimmed.
    """
    __tablename__ = 'units'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False, index=True)
    display_name = db.Column(db.String(100), nullable=False)
    unit_type = db.Column(db.String(20), nullable=False, default='other', index=True)
    is_standardized = db.Column(db.Boolean, nullable=False, default=True, index=True)

    # Reserved for unit conversions
    conversion_factor = db.Column(db.Numeric(10, 6, asdecimal=False), nullable=True)

    abbreviation = db.Column(db.String(20), nullable=True)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
    updated_at = db.Column(db.DateTime, server_default=db.func.now(), onupdate=db.func.now())

    @validates('unit_type')
    def validate_unit_type(self, key, value):
        if value not in UNIT_TYPES:
            raise ValueError(f"Unknown unit type: {value!r}")
        return value

    @classmethod
    def find_by_name(cls, name):
        """Find a unit by name (case-insensitive, trimmed)."""
        return cls.query.filter_by(name=name.strip().lower()).first()

    @classmethod
    def grouped_by_type(cls):
        """Return {unit_type: [Unit, ...]} ordered by type, then name."""
        grouped = {}
        for unit in cls.query.order_by(cls.unit_type, cls.name).all():
            grouped.setdefault(unit.unit_type, []).append(unit)
        return grouped

    @property
    def display(self):
        return self.display_name or self.name

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'display_name': self.display_name,
            'unit_type': self.unit_type,
            'is_standardized': self.is_standardized,
            'abbreviation': self.abbreviation,
        }

    def __repr__(self):
        return f'<Unit {self.name!r}>'
