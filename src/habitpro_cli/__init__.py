"""HabitPro CLI - recurring habit tracker with streaks and monthly statistics."""

__version__ = "0.3.0"
