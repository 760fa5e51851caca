"""Teacher schema definitions."""

from typing import Dict, List, Union

from pydantic import Field

from schemas.class_section import ClassSection
from schemas.student import Record, require_persisted


class Teacher(Record):
    """A teacher and the class sections assigned to them."""

    name: str = Field(description="Full name of the teacher.")

    # Keyed by section id, same convention as ClassSection.students.
    class_sections: Dict[int, ClassSection] = Field(default_factory=dict)

    def add_class_section(self, section: ClassSection) -> None:
        """Assign a persisted section. Assigning it twice is a no-op.

        Raises:
            InvalidOperationError: If the section was never saved.
        """
        require_persisted(section, self)
        self.class_sections.setdefault(section.id, section)

    def remove_class_section(self, section: Union[ClassSection, int]) -> None:
        section_id = section.id if isinstance(section, ClassSection) else section
        self.class_sections.pop(section_id, None)

    def get_class_sections(self) -> List[ClassSection]:
        return list(self.class_sections.values())

    def class_section_ids(self) -> List[int]:
        return list(self.class_sections.keys())

    def __str__(self) -> str:
        return (
            f"Teacher{{id={self.id}, name='{self.name}', "
            f"sections={len(self.class_sections)}}}"
        )
