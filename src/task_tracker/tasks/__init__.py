"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Epic, Subtask, TaskStatus)
- id_allocator.py: shared id space for all three kinds
- history.py: bounded view-history of accessed items
- task_manager.py: in-memory CRUD + epic/subtask consistency rules
- managers.py: default-instance factories
"""
