"""Reconstruction of records together with their related collections.

How far relationships are followed is an explicit ``depth``: the number of
association hops resolved beneath the record being loaded. Depth 0 yields a
flat record with only its own columns. Every hop loads the related records
with ``depth - 1``, so loading always terminates, even if a back-reference
between entity types is introduced later.

The defaults give the usual shape: a section with its students, and a
teacher with its sections (each with its students) without ever coming
back to the teacher.
"""

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import QueryError
from models.associations import section_students, teacher_sections
from models.class_section import ClassSectionModel
from models.student import StudentModel
from models.teacher import TeacherModel
from schemas.class_section import ClassSection
from schemas.student import Student
from schemas.teacher import Teacher
from utils.converters import model_to_class_section, model_to_student, model_to_teacher

logger = logging.getLogger(__name__)

SECTION_LOAD_DEPTH = 1
TEACHER_LOAD_DEPTH = 2


def _check_depth(depth: int) -> None:
    if depth < 0:
        raise ValueError(f"Load depth must be >= 0, got {depth}")


class GraphLoader:
    """Builds records from rows, following relationships up to a depth."""

    def __init__(self, db: Session):
        self.db = db

    def load_student(self, model: StudentModel) -> Student:
        return model_to_student(model)

    def load_class_section(
        self, model: ClassSectionModel, depth: int = SECTION_LOAD_DEPTH
    ) -> ClassSection:
        """Build a ClassSection and, if depth allows, its students.

        Args:
            model: The class_sections row.
            depth: Association hops to resolve beneath the section.

        Raises:
            QueryError: If the students join fails.
            ValueError: If depth is negative.
        """
        _check_depth(depth)
        section = model_to_class_section(model)
        if depth == 0:
            return section
        for student_model in self._students_of(section.id):
            section.add_student(self.load_student(student_model))
        return section

    def load_teacher(
        self, model: TeacherModel, depth: int = TEACHER_LOAD_DEPTH
    ) -> Teacher:
        """Build a Teacher and, if depth allows, its class sections.

        Args:
            model: The teachers row.
            depth: Association hops to resolve beneath the teacher.

        Raises:
            QueryError: If a join fails.
            ValueError: If depth is negative.
        """
        _check_depth(depth)
        teacher = model_to_teacher(model)
        if depth == 0:
            return teacher
        for section_model in self._sections_of(teacher.id):
            teacher.add_class_section(
                self.load_class_section(section_model, depth=depth - 1)
            )
        return teacher

    def _students_of(self, section_id: int) -> List[StudentModel]:
        # Inner join: links to deleted students are silently skipped.
        try:
            return (
                self.db.query(StudentModel)
                .join(section_students, StudentModel.id == section_students.c.student_id)
                .filter(section_students.c.section_id == section_id)
                .order_by(StudentModel.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Loading students of section %s failed: %s", section_id, e)
            raise QueryError(f"Failed to load students of section {section_id}") from e

    def _sections_of(self, teacher_id: int) -> List[ClassSectionModel]:
        try:
            return (
                self.db.query(ClassSectionModel)
                .join(
                    teacher_sections,
                    ClassSectionModel.id == teacher_sections.c.section_id,
                )
                .filter(teacher_sections.c.teacher_id == teacher_id)
                .order_by(ClassSectionModel.id)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("Loading sections of teacher %s failed: %s", teacher_id, e)
            raise QueryError(f"Failed to load sections of teacher {teacher_id}") from e
