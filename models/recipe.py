"""
Recipe Model

Recipes are a collaborator here: the grocery list only needs a name,
a base servings count and the free-text ingredient lines.
"""

from .base import db


class Recipe(db.Model):
    """Recipe with its ingredient lines stored as a JSON list of strings."""
    __tablename__ = 'recipes'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), unique=True, nullable=False, index=True)
    servings = db.Column(db.Integer, default=4)
    ingredients = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime, server_default=db.func.now())
