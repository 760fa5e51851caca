"""SQLAlchemy table mappings.

Importing this package registers every table with ``Base.metadata``.
"""

from .base import Base
from .student import StudentModel
from .teacher import TeacherModel
from .class_section import ClassSectionModel
from .associations import teacher_sections, section_students

__all__ = [
    "Base",
    "StudentModel",
    "TeacherModel",
    "ClassSectionModel",
    "teacher_sections",
    "section_students",
]
