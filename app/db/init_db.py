"""
Database initialization.

Creates all tables and optionally seeds the exercise catalog.
"""

import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel

from app.catalog.exercise_catalog import catalog_exercises
from app.db.repositories.training_data import TrainingDataRepository
from app.models.training import ExerciseRecord

logger = logging.getLogger(__name__)


def init_db(engine: Optional[Engine] = None, seed_catalog: bool = False) -> None:
    """
    Initialize database schema.

    - Creates all SQLModel tables
    - Inserts the built-in exercise catalog when ``seed_catalog`` is set and
      the exercises table is empty
    """
    if engine is None:
        from app.db.session import engine

    # Import all models so SQLModel.metadata has them
    import app.models  # noqa: F401

    logger.info("Creating database tables...")
    SQLModel.metadata.create_all(engine)

    if not seed_catalog:
        return

    with Session(engine) as session:
        repo = TrainingDataRepository(session)
        if repo.list_exercises():
            logger.info("Exercises already present, skipping catalog seed")
            return
        rows = [
            ExerciseRecord(id=ex.id, name=ex.name, muscle_group=ex.muscle_group,
                           secondary_muscles=list(ex.secondary_muscles),
                           movement_type=ex.movement_type.value if ex.movement_type else None,
                           high_fatigue=ex.high_fatigue, )
            for ex in catalog_exercises()
        ]
        repo.add_all(rows)
        logger.info("Seeded %d catalog exercises", len(rows))
