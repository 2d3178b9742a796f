"""Application composition layer.

``orchestrator`` wires use cases and the corpus state into async operations
that views call without placing business logic in views.
"""
