"""Momentum - reminders with points, levels, achievements and streaks"""

__version__ = "1.0.0"
