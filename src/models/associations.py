"""Junction tables for the many-to-many relationships.

Both tables are plain ``Table`` objects rather than mapped classes: rows carry
no attributes of their own and are only ever written in bulk by the
association synchronizer.
"""

from sqlalchemy import Column, ForeignKey, Integer, Table

from .base import Base

teacher_sections = Table(
    "teacher_sections",
    Base.metadata,
    Column("teacher_id", Integer, ForeignKey("teachers.id"), primary_key=True),
    Column("section_id", Integer, ForeignKey("class_sections.id"), primary_key=True),
)

section_students = Table(
    "section_students",
    Base.metadata,
    Column("section_id", Integer, ForeignKey("class_sections.id"), primary_key=True),
    Column("student_id", Integer, ForeignKey("students.id"), primary_key=True),
)
