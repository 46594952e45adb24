"""Infrastructure layer — concrete RecordStore adapters.

Adapters depend on the domain's record and outcome types and on
third-party libs (SQLAlchemy). They must never import from services,
commands, or output.
"""
