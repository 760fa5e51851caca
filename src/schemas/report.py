from pydantic import BaseModel, Field


class SchoolReport(BaseModel):
    """Totals shown on the reports screen."""

    total_students: int = Field(default=0)
    total_teachers: int = Field(default=0)
    total_sections: int = Field(default=0)
    average_gpa: float = Field(
        default=0.0, description="Mean GPA over all students; 0.0 if none."
    )
