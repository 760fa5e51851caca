"""Conversions between SQLAlchemy rows and pydantic records.

Row-to-record converters build flat records: related collections are left
empty and filled in by the graph loader.
"""

from models.class_section import ClassSectionModel
from models.student import StudentModel
from models.teacher import TeacherModel
from schemas.class_section import ClassSection
from schemas.student import Student
from schemas.teacher import Teacher


def model_to_student(model: StudentModel) -> Student:
    return Student(id=model.id, name=model.name, gpa=model.gpa)


def student_to_model(student: Student) -> StudentModel:
    """Build a new row for insertion; the database assigns the id."""
    return StudentModel(name=student.name, gpa=student.gpa)


def model_to_teacher(model: TeacherModel) -> Teacher:
    return Teacher(id=model.id, name=model.name)


def teacher_to_model(teacher: Teacher) -> TeacherModel:
    return TeacherModel(name=teacher.name)


def model_to_class_section(model: ClassSectionModel) -> ClassSection:
    return ClassSection(id=model.id, length=model.length)


def class_section_to_model(section: ClassSection) -> ClassSectionModel:
    return ClassSectionModel(length=section.length)
