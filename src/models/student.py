"""Student database model.

This module defines the Student database model using SQLAlchemy.
"""

from sqlalchemy import Column, Integer, REAL, Text
from .base import Base


class StudentModel(Base):
    """Student database model."""

    __tablename__ = "students"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
    gpa = Column(REAL, nullable=False)
