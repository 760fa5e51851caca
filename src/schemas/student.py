"""Student schema definitions.

This module defines the Student record and the identity sentinel shared by
all records.
"""

from pydantic import BaseModel, Field

from core.exceptions import InvalidOperationError

# Identity of a record that has never been persisted.
UNASSIGNED_ID = 0


class Record(BaseModel):
    """Common identity handling for persisted records."""

    id: int = Field(
        default=UNASSIGNED_ID,
        description="Database identity; 0 until the first successful insert.",
    )

    def __setattr__(self, name, value):
        # Identity is written only through assign_id().
        if name == "id":
            raise InvalidOperationError(
                f"{type(self).__name__}.id cannot be set directly"
            )
        super().__setattr__(name, value)

    def is_persisted(self) -> bool:
        return self.id != UNASSIGNED_ID

    def assign_id(self, new_id: int) -> None:
        """Record the identity handed out by the database on first insert.

        Args:
            new_id: The generated primary key.

        Raises:
            InvalidOperationError: If the record already has an identity.
        """
        if self.is_persisted():
            raise InvalidOperationError(
                f"{type(self).__name__} already has id {self.id}"
            )
        super().__setattr__("id", new_id)


class Student(Record):
    """A student with a name and a GPA. Owns no relationships."""

    name: str = Field(description="Full name of the student.")
    gpa: float = Field(description="Grade point average; no range is enforced.")

    def __str__(self) -> str:
        return f"Student{{id={self.id}, name='{self.name}', gpa={self.gpa:.2f}}}"


def require_persisted(record: Record, owner: Record) -> None:
    """Reject relating ``record`` to ``owner`` before it has an identity."""
    if not record.is_persisted():
        raise InvalidOperationError(
            f"Cannot relate an unsaved {type(record).__name__} to "
            f"{type(owner).__name__}; save it first"
        )
