"""Flow. - a small to-do list with local reminders."""

__version__ = "0.1.0"
