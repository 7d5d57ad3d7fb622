"""
Unit Service

Maps free-text unit strings onto canonical, persisted Unit rows.
"""

import logging

from sqlalchemy.exc import IntegrityError

from constants import (
    ALL_UNITS,
    COMMON_UNITS,
    STANDARD_UNITS,
    UNIT_ABBREVIATIONS,
    UNIT_CATEGORIES,
    UNIT_STANDARDIZATIONS,
)
from models import db, Unit

from . import repository

logger = logging.getLogger(__name__)


def standardize(text):
    """Lowercase, trim and map common variations ('tbsp' -> 'tablespoon')."""
    unit = (text or '').strip().lower()
    return UNIT_STANDARDIZATIONS.get(unit, unit)


def classify(name):
    """
    Return 'volume', 'weight', 'count' or 'special', or None.

    Categories are checked in that order, so a name listed twice
    resolves to the earlier category.
    """
    unit = (name or '').strip().lower()
    for category, units in UNIT_CATEGORIES:
        if unit in units:
            return category
    return None


def is_known(text):
    """True if the raw surface form is in any unit vocabulary."""
    return (text or '').strip().lower() in ALL_UNITS


def get_unit_abbreviation(name):
    return UNIT_ABBREVIATIONS.get((name or '').strip().lower())


def common_units():
    return list(COMMON_UNITS)


def _create_or_fetch(canonical, fields):
    """
    Create a unit inside a SAVEPOINT; if another writer got there first,
    the unique constraint on name fails and the existing row is returned.
    """
    try:
        with db.session.begin_nested():
            unit = repository.create_unit(fields)
    except IntegrityError:
        logger.warning("Unit %r was created concurrently, fetching existing row", canonical)
        unit = repository.find_unit_by_name(canonical)
        if unit is None:
            raise
        return unit
    logger.info("Created unit %r (%s)", canonical, fields['unit_type'])
    return unit


def resolve_unit(text):
    """
    Find or create the Unit for a free-text unit string.

    Returns None for blank input.
    """
    if text is None:
        return None
    raw = text.strip()
    if not raw:
        return None

    canonical = standardize(raw)
    unit = repository.find_unit_by_name(canonical)
    if unit is not None:
        return unit

    fields = {
        'name': canonical,
        'display_name': canonical[:1].upper() + canonical[1:],
        'unit_type': classify(canonical) or 'other',
        'is_standardized': is_known(raw),
        'abbreviation': get_unit_abbreviation(canonical),
        'description': f'Standard {canonical} unit',
    }
    return _create_or_fetch(canonical, fields)


def seed_units():
    """Insert the standard unit catalogue. Safe to run repeatedly."""
    for name, display_name, unit_type, abbreviation in STANDARD_UNITS:
        if repository.find_unit_by_name(name) is not None:
            continue
        _create_or_fetch(name, {
            'name': name,
            'display_name': display_name,
            'unit_type': unit_type,
            'is_standardized': True,
            'abbreviation': abbreviation,
        })
    return Unit.query.count()
