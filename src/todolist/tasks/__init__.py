"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Priority) + JSON mapping
- task_factory.py: builds new tasks (id generation, text validation)
- task_store.py: ordered in-memory list persisted to a blob store
- blob_store.py: file-backed key-value blob store
- task_filters.py: named filter/search strategies
- task_api.py: small high-level helpers used by the console
"""
