"""Summary figures for the reports screen."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import QueryError
from models.class_section import ClassSectionModel
from models.student import StudentModel
from models.teacher import TeacherModel
from schemas.report import SchoolReport

logger = logging.getLogger(__name__)


class ReportManager:
    """Computes totals across all stored records."""

    def __init__(self, db: Session):
        self.db = db

    def summary(self) -> SchoolReport:
        """Count each entity type and average the students' GPA.

        Raises:
            QueryError: If any of the aggregate queries fails.
        """
        try:
            total_students = self.db.query(func.count(StudentModel.id)).scalar()
            total_teachers = self.db.query(func.count(TeacherModel.id)).scalar()
            total_sections = self.db.query(func.count(ClassSectionModel.id)).scalar()
            average_gpa = self.db.query(func.avg(StudentModel.gpa)).scalar()
        except SQLAlchemyError as e:
            logger.error("Building report failed: %s", e)
            raise QueryError("Failed to build report") from e
        return SchoolReport(
            total_students=total_students or 0,
            total_teachers=total_teachers or 0,
            total_sections=total_sections or 0,
            average_gpa=average_gpa or 0.0,
        )
