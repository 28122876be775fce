"""
Configuration package for the hostel allocation service.

Contains environment settings and logging configuration.
"""

from app.config.settings import Settings, get_settings, settings

__all__ = ['settings', 'Settings', 'get_settings']
