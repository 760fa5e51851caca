from sqlalchemy import Column, Integer, ForeignKey
from .base import Base


class ClassSectionModel(Base):
    __tablename__ = "class_sections"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    length = Column(Integer, nullable=False)  # minutes
    # Kept for schema compatibility; teacher links live in teacher_sections.
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=True)
