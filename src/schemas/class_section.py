"""ClassSection schema definitions."""

from typing import Dict, List, Union

from pydantic import Field

from schemas.student import Record, Student, require_persisted


class ClassSection(Record):
    """A class section of a given length and its enrolled students."""

    length: int = Field(description="Length of the section in minutes.")

    # Keyed by student id; insertion order is kept but carries no meaning.
    students: Dict[int, Student] = Field(default_factory=dict)

    def add_student(self, student: Student) -> None:
        """Enroll a persisted student. Adding an enrolled student is a no-op.

        Raises:
            InvalidOperationError: If the student was never saved.
        """
        require_persisted(student, self)
        self.students.setdefault(student.id, student)

    def remove_student(self, student: Union[Student, int]) -> None:
        student_id = student.id if isinstance(student, Student) else student
        self.students.pop(student_id, None)

    def get_students(self) -> List[Student]:
        return list(self.students.values())

    def student_ids(self) -> List[int]:
        return list(self.students.keys())

    def __str__(self) -> str:
        return (
            f"ClassSection{{id={self.id}, length={self.length}, "
            f"students={len(self.students)}}}"
        )
