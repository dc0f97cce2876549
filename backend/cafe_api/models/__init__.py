"""ORM Models - SQLAlchemy declarative models.

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before
      create_all() or Alembic autogenerate runs
"""

from cafe_api.models.cafe import Cafe  # noqa: F401
