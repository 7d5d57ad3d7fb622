"""
Database Base Module

Creates the SQLAlchemy database instance that all models inherit from.
This is separate to avoid circular imports.
"""

import sqlite3

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Create the SQLAlchemy instance
# This will be initialized with the Flask app in app.py
db = SQLAlchemy()


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """
    Enable SQLite foreign key enforcement so ON DELETE cascades apply.

    Also turns off the sqlite3 module's own transaction handling, which
    would let a SAVEPOINT open (and its RELEASE commit) a transaction.
    BEGIN is emitted by set_sqlite_begin instead.
    """
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


@event.listens_for(Engine, "begin")
def set_sqlite_begin(conn):
    if conn.dialect.name == 'sqlite' and conn.dialect.driver == 'pysqlite':
        conn.exec_driver_sql("BEGIN")
