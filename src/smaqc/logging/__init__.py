from .logging import get_logger, reset_logger, set_level

__all__ = ["get_logger", "reset_logger", "set_level"]
