from sqlbind.db.sqlserver import get_engine

__all__ = ("get_engine",)
