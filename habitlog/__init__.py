# habitlog/__init__.py
"""
Habitlog - a terminal habit tracker with weekly targets and reminders.
"""

__version__ = "1.0.0"
