from sqlalchemy import Column, Integer, Text
from .base import Base


class TeacherModel(Base):
    __tablename__ = "teachers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(Text, nullable=False)
