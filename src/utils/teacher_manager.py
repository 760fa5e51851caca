"""Teacher management module.

Saving a teacher also rewrites its section assignments (teacher_sections)
in the same transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import InvalidOperationError, PersistenceError, QueryError
from models.teacher import TeacherModel
from schemas.teacher import Teacher
from utils.association_sync import TEACHER_SECTIONS
from utils.converters import teacher_to_model
from utils.graph_loader import TEACHER_LOAD_DEPTH, GraphLoader

logger = logging.getLogger(__name__)


class TeacherManager:
    """Manages teacher persistence operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize TeacherManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db
        self.loader = GraphLoader(db)

    def save(self, teacher: Teacher) -> int:
        """Insert or update a teacher, then replace its section assignments.

        Args:
            teacher: The record to persist. Its id is filled in on first insert.

        Returns:
            The teacher's id.

        Raises:
            PersistenceError: If any write fails; nothing is committed then.
        """
        try:
            if teacher.is_persisted():
                updated = (
                    self.db.query(TeacherModel)
                    .filter(TeacherModel.id == teacher.id)
                    .update({"name": teacher.name})
                )
                if updated == 0:
                    raise PersistenceError(f"Teacher {teacher.id} does not exist")
                teacher_id = teacher.id
            else:
                model = teacher_to_model(teacher)
                self.db.add(model)
                self.db.flush()
                teacher_id = model.id
            TEACHER_SECTIONS.replace_all(
                self.db, teacher_id, teacher.class_section_ids()
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Saving teacher '%s' failed: %s", teacher.name, e)
            raise PersistenceError(f"Failed to save teacher '{teacher.name}'") from e
        except PersistenceError:
            self.db.rollback()
            raise

        if not teacher.is_persisted():
            teacher.assign_id(teacher_id)
            logger.info("Created teacher: %s", teacher_id)
        else:
            logger.info("Updated teacher: %s", teacher_id)
        return teacher_id

    def find_by_id(
        self, teacher_id: int, depth: int = TEACHER_LOAD_DEPTH
    ) -> Optional[Teacher]:
        """Get a teacher, its sections and their students by id.

        Args:
            teacher_id: Id to look up.
            depth: Association hops to resolve beneath the teacher.

        Returns:
            Teacher if found, None otherwise.

        Raises:
            QueryError: If the lookup fails.
        """
        try:
            model = (
                self.db.query(TeacherModel)
                .filter(TeacherModel.id == teacher_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to load teacher {teacher_id}") from e
        if model is None:
            return None
        return self.loader.load_teacher(model, depth=depth)

    def find_all(self, depth: int = TEACHER_LOAD_DEPTH) -> List[Teacher]:
        try:
            models = self.db.query(TeacherModel).order_by(TeacherModel.id).all()
        except SQLAlchemyError as e:
            raise QueryError("Failed to list teachers") from e
        return [self.loader.load_teacher(m, depth=depth) for m in models]

    def delete(self, teacher: Teacher) -> None:
        """Delete a teacher row. Its teacher_sections rows are left in place.

        Raises:
            InvalidOperationError: If the teacher was never saved.
            PersistenceError: If the delete fails.
        """
        if not teacher.is_persisted():
            raise InvalidOperationError(
                "Cannot delete a teacher that was never saved"
            )
        try:
            self.db.query(TeacherModel).filter(TeacherModel.id == teacher.id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Deleting teacher %s failed: %s", teacher.id, e)
            raise PersistenceError(f"Failed to delete teacher {teacher.id}") from e
        logger.info("Deleted teacher: %s", teacher.id)
