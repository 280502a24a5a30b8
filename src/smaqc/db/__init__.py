from .port import DataAccessPort, SQLAlchemyPort

__all__ = ["DataAccessPort", "SQLAlchemyPort"]
