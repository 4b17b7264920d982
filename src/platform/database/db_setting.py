"""
Database configuration

Re-exports the SQLAlchemy engine/session helpers from orm_db_setting.py
"""

from src.platform.database.orm_db_setting import (
    Base,
    Database,
    create_db_and_tables,
    dispose_engine,
    drop_db_and_tables,
    get_async_session,
    get_engine,
    get_session_maker,
)


__all__ = [
    'Base',
    'Database',
    'get_engine',
    'get_session_maker',
    'dispose_engine',
    'create_db_and_tables',
    'drop_db_and_tables',
    'get_async_session',
]
