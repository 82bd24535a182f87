"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every row is scoped by owner_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before
      create_all or Alembic autogenerate runs
"""

from app.models.folder import Folder  # noqa: F401
from app.models.task import Task  # noqa: F401
