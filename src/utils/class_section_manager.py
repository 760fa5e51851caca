"""Class section management module.

Saving a section also rewrites its student enrollments (section_students)
in the same transaction.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import InvalidOperationError, PersistenceError, QueryError
from models.class_section import ClassSectionModel
from schemas.class_section import ClassSection
from utils.association_sync import SECTION_STUDENTS
from utils.converters import class_section_to_model
from utils.graph_loader import SECTION_LOAD_DEPTH, GraphLoader

logger = logging.getLogger(__name__)


class ClassSectionManager:
    """Manages class section persistence operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize ClassSectionManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db
        self.loader = GraphLoader(db)

    def save(self, section: ClassSection) -> int:
        """Insert or update a section, then replace its enrollments.

        Args:
            section: The record to persist. Its id is filled in on first insert.

        Returns:
            The section's id.

        Raises:
            PersistenceError: If any write fails; nothing is committed then.
        """
        try:
            if section.is_persisted():
                updated = (
                    self.db.query(ClassSectionModel)
                    .filter(ClassSectionModel.id == section.id)
                    .update({"length": section.length})
                )
                if updated == 0:
                    raise PersistenceError(f"Class section {section.id} does not exist")
                section_id = section.id
            else:
                model = class_section_to_model(section)
                self.db.add(model)
                self.db.flush()
                section_id = model.id
            SECTION_STUDENTS.replace_all(self.db, section_id, section.student_ids())
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Saving class section %s failed: %s", section.id, e)
            raise PersistenceError("Failed to save class section") from e
        except PersistenceError:
            self.db.rollback()
            raise

        if not section.is_persisted():
            section.assign_id(section_id)
            logger.info("Created class section: %s", section_id)
        else:
            logger.info("Updated class section: %s", section_id)
        return section_id

    def find_by_id(
        self, section_id: int, depth: int = SECTION_LOAD_DEPTH
    ) -> Optional[ClassSection]:
        """Get a section and its students by id.

        Returns:
            ClassSection if found, None otherwise.

        Raises:
            QueryError: If the lookup fails.
        """
        try:
            model = (
                self.db.query(ClassSectionModel)
                .filter(ClassSectionModel.id == section_id)
                .first()
            )
        except SQLAlchemyError as e:
            raise QueryError(f"Failed to load class section {section_id}") from e
        if model is None:
            return None
        return self.loader.load_class_section(model, depth=depth)

    def find_all(self, depth: int = SECTION_LOAD_DEPTH) -> List[ClassSection]:
        try:
            models = (
                self.db.query(ClassSectionModel).order_by(ClassSectionModel.id).all()
            )
        except SQLAlchemyError as e:
            raise QueryError("Failed to list class sections") from e
        return [self.loader.load_class_section(m, depth=depth) for m in models]

    def delete(self, section: ClassSection) -> None:
        """Delete a section row.

        Rows in teacher_sections and section_students that point at the
        section are kept; loaders skip them because the join finds no row.

        Raises:
            InvalidOperationError: If the section was never saved.
            PersistenceError: If the delete fails.
        """
        if not section.is_persisted():
            raise InvalidOperationError(
                "Cannot delete a class section that was never saved"
            )
        try:
            self.db.query(ClassSectionModel).filter(
                ClassSectionModel.id == section.id
            ).delete()
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Deleting class section %s failed: %s", section.id, e)
            raise PersistenceError(f"Failed to delete class section {section.id}") from e
        logger.info("Deleted class section: %s", section.id)
