"""
Database package para Usuarios API
"""

from .connection import engine, SessionLocal, get_db, create_tables, drop_tables
from .manager import DatabaseManager

__all__ = ['engine', 'SessionLocal', 'get_db', 'create_tables', 'drop_tables', 'DatabaseManager']
