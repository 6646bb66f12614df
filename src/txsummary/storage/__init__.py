"""
Storage Package

SQLAlchemy-backed persistence for processed transactions.
"""

from .datastore import SqlDataStore

__all__ = [
    "SqlDataStore",
]
