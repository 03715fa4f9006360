"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority, TaskFilter) and id/date helpers
- slot_store.py: SQLite key/value slot holding the serialized list
- persistence.py: save/load of the whole list under one key
- migration.py: upgrade of legacy records on load
- task_store.py: in-memory list + add/toggle/remove
- projector.py: filter/sort view and overdue annotation
- suggestions.py: fixed suggested tasks and ideas
"""
