"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .unit import Unit
from .recipe import Recipe
from .grocery import GroceryList, GroceryItem, GroceryListRecipe

__all__ = [
    'db',
    'Unit',
    'Recipe',
    'GroceryList',
    'GroceryItem',
    'GroceryListRecipe',
]
