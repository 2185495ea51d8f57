"""
Procrastinot dashboard engine.

Derived statistics, streaks and activity feeds for the Procrastinot
productivity app.
"""

__version__ = "1.0.0"
