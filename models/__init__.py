"""
Central import point for all ORM models, so that Alembic autogenerate sees
every table registered on ``Base.metadata``.
"""

from src.user.models import User as User
