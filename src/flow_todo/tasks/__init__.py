"""
Task subsystem.

Components:
- task_models.py: the Task record and its JSON form
- task_store.py: in-memory ordered task list (add/complete/delete, deferred removal)
- task_persistence.py: whole-list JSON save/load through the key-value port
"""
