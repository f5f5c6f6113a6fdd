"""
Local reminders.

Components:
- center.py: in-process notification center (pending requests, calendar triggers, delivery)
- reminders.py: per-task reminder scheduling on top of the center
"""
