# app/api/__init__.py
"""
HTTP layer: dependencies, exception handlers and versioned routers.
"""
