"""
Code counter models package.
"""

from app.models.counter.code_counter import CodeCounter

__all__ = ["CodeCounter"]
