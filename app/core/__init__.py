"""Core application modules."""

from .middleware import get_request_id, register_middlewares

__all__ = ["register_middlewares", "get_request_id"]
