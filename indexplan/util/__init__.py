from .logging import make_logger

__all__ = ["make_logger"]
