# Registers every model on Base.metadata (used by alembic and create_all)
from app.db.base_class import Base  # noqa
from app.models.student import Student  # noqa
