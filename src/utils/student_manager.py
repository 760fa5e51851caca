"""Student management module.

This module handles saving, loading, listing and deleting students using
SQLAlchemy.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import InvalidOperationError, PersistenceError, QueryError
from models.student import StudentModel
from schemas.student import Student
from utils.converters import student_to_model
from utils.graph_loader import GraphLoader

logger = logging.getLogger(__name__)


class StudentManager:
    """Manages student persistence operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize StudentManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db
        self.loader = GraphLoader(db)

    def save(self, student: Student) -> int:
        """Insert a new student or update an existing one.

        Args:
            student: The record to persist. Its id is filled in on first insert.

        Returns:
            The student's id.

        Raises:
            PersistenceError: If the write fails or the row no longer exists.
        """
        try:
            if student.is_persisted():
                updated = (
                    self.db.query(StudentModel)
                    .filter(StudentModel.id == student.id)
                    .update({"name": student.name, "gpa": student.gpa})
                )
                if updated == 0:
                    raise PersistenceError(f"Student {student.id} does not exist")
                new_id = student.id
            else:
                model = student_to_model(student)
                self.db.add(model)
                self.db.flush()
                new_id = model.id
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Saving student '%s' failed: %s", student.name, e)
            raise PersistenceError(f"Failed to save student '{student.name}'") from e
        except PersistenceError:
            self.db.rollback()
            raise

        if not student.is_persisted():
            student.assign_id(new_id)
            logger.info("Created student: %s", new_id)
        else:
            logger.info("Updated student: %s", new_id)
        return new_id

    def find_by_id(self, student_id: int) -> Optional[Student]:
        """Get a student by id.

        Returns:
            Student if found, None otherwise.

        Raises:
            QueryError: If the lookup fails.
        """
        try:
            model = (
                self.db.query(StudentModel)
                .filter(StudentModel.id == student_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to load student {student_id}") from e
        if model is None:
            return None
        return self.loader.load_student(model)

    def find_all(self) -> List[Student]:
        try:
            models = self.db.query(StudentModel).order_by(StudentModel.id).all()
        except SQLAlchemyError as e:
            raise QueryError("Failed to list students") from e
        return [self.loader.load_student(m) for m in models]

    def delete(self, student: Student) -> None:
        """Delete a student row. Section enrollments are left in place.

        Raises:
            InvalidOperationError: If the student was never saved.
            PersistenceError: If the delete fails.
        """
        if not student.is_persisted():
            raise InvalidOperationError(
                "Cannot delete a student that was never saved"
            )
        try:
            self.db.query(StudentModel).filter(StudentModel.id == student.id).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Deleting student %s failed: %s", student.id, e)
            raise PersistenceError(f"Failed to delete student {student.id}") from e
        logger.info("Deleted student: %s", student.id)
