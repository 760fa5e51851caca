"""Main entry point for the School Manager console.

This module provides an interactive command-line interface for managing
students, teachers and class sections. Each menu action opens its own
database session from the Store and hands it to the relevant manager.
"""

import logging
import sys
from typing import Callable, Optional

from config import DATA_DIR, DATABASE_URL, LOG_LEVEL, SQL_ECHO
from core.database import Store
from core.exceptions import DatabaseConnectionError, SchemaError, SchoolManagerError
from core.logging_config import setup_logging
from schemas.class_section import ClassSection
from schemas.student import Student
from schemas.teacher import Teacher
from utils.class_section_manager import ClassSectionManager
from utils.report_manager import ReportManager
from utils.student_manager import StudentManager
from utils.teacher_manager import TeacherManager

logger = logging.getLogger(__name__)


class SchoolShell:
    """Menu-driven text console over the persistence layer."""

    def __init__(self, store: Store, input_func: Callable[[str], str] = input):
        """Initialize SchoolShell.

        Args:
            store: Open Store whose schema has been initialized.
            input_func: Reads one line of user input given a prompt.
        """
        self.store = store
        self.input = input_func

    # --- input helpers ---

    def _read_int(self, prompt: str) -> Optional[int]:
        raw = self.input(prompt).strip()
        try:
            return int(raw)
        except ValueError:
            print(f"Not a whole number: '{raw}'")
            return None

    def _read_float(self, prompt: str) -> Optional[float]:
        raw = self.input(prompt).strip()
        try:
            return float(raw)
        except ValueError:
            print(f"Not a number: '{raw}'")
            return None

    def _choose(self, title: str, options: list) -> Optional[int]:
        print(f"\n=== {title} ===")
        for i, option in enumerate(options, start=1):
            print(f"{i}. {option}")
        return self._read_int("Enter your choice: ")

    # --- main loop ---

    def run(self) -> None:
        print("School Manager Application Started")
        actions = {
            1: self.manage_students,
            2: self.manage_teachers,
            3: self.manage_sections,
            4: self.view_reports,
        }
        while True:
            choice = self._choose(
                "School Manager",
                [
                    "Manage Students",
                    "Manage Teachers",
                    "Manage Class Sections",
                    "View Reports",
                    "Exit",
                ],
            )
            if choice == 5:
                print("Goodbye!")
                return
            action = actions.get(choice)
            if action is None:
                print("Invalid choice. Please try again.")
                continue
            try:
                action()
            except SchoolManagerError as e:
                logger.error("Action failed: %s", e)
                print(f"Error: {e}")

    def _dispatch(self, title: str, menu: dict) -> None:
        choice = self._choose(title, [label for label, _ in menu.values()])
        entry = menu.get(choice)
        if entry is None:
            print("Invalid choice.")
            return
        entry[1]()

    # --- students ---

    def manage_students(self) -> None:
        self._dispatch(
            "Student Management",
            {
                1: ("Add Student", self.add_student),
                2: ("View All Students", self.view_all_students),
                3: ("Update Student", self.update_student),
                4: ("Delete Student", self.delete_student),
            },
        )

    def add_student(self) -> None:
        name = self.input("Enter student name: ").strip()
        gpa = self._read_float("Enter student GPA: ")
        if gpa is None:
            return
        with self.store.session_scope() as db:
            student = Student(name=name, gpa=gpa)
            StudentManager(db).save(student)
        print(f"Student added successfully with ID: {student.id}")

    def view_all_students(self) -> None:
        with self.store.session_scope() as db:
            students = StudentManager(db).find_all()
        print("\n=== All Students ===")
        for student in students:
            print(student)

    def update_student(self) -> None:
        student_id = self._read_int("Enter student ID to update: ")
        if student_id is None:
            return
        with self.store.session_scope() as db:
            manager = StudentManager(db)
            student = manager.find_by_id(student_id)
            if student is None:
                print("Student not found.")
                return
            name = self.input(f"Enter new name (current: {student.name}): ").strip()
            gpa = self._read_float(f"Enter new GPA (current: {student.gpa}): ")
            if gpa is None:
                return
            student.name = name or student.name
            student.gpa = gpa
            manager.save(student)
        print("Student updated successfully.")

    def delete_student(self) -> None:
        student_id = self._read_int("Enter student ID to delete: ")
        if student_id is None:
            return
        with self.store.session_scope() as db:
            manager = StudentManager(db)
            student = manager.find_by_id(student_id)
            if student is None:
                print("Student not found.")
                return
            manager.delete(student)
        print("Student deleted successfully.")

    # --- teachers ---

    def manage_teachers(self) -> None:
        self._dispatch(
            "Teacher Management",
            {
                1: ("Add Teacher", self.add_teacher),
                2: ("View All Teachers", self.view_all_teachers),
                3: ("Assign Section to Teacher", self.assign_section_to_teacher),
                4: ("Unassign Section from Teacher", self.unassign_section_from_teacher),
            },
        )

    def add_teacher(self) -> None:
        name = self.input("Enter teacher name: ").strip()
        with self.store.session_scope() as db:
            teacher = Teacher(name=name)
            TeacherManager(db).save(teacher)
        print(f"Teacher added successfully with ID: {teacher.id}")

    def view_all_teachers(self) -> None:
        with self.store.session_scope() as db:
            teachers = TeacherManager(db).find_all()
        print("\n=== All Teachers ===")
        for teacher in teachers:
            print(teacher)
            for section in teacher.get_class_sections():
                print(f"  {section}")

    def assign_section_to_teacher(self) -> None:
        teacher_id = self._read_int("Enter teacher ID: ")
        section_id = self._read_int("Enter section ID: ")
        if teacher_id is None or section_id is None:
            return
        with self.store.session_scope() as db:
            teachers = TeacherManager(db)
            teacher = teachers.find_by_id(teacher_id)
            section = ClassSectionManager(db).find_by_id(section_id)
            if teacher is None or section is None:
                print("Teacher or section not found.")
                return
            teacher.add_class_section(section)
            teachers.save(teacher)
        print("Section assigned to teacher successfully.")

    def unassign_section_from_teacher(self) -> None:
        teacher_id = self._read_int("Enter teacher ID: ")
        section_id = self._read_int("Enter section ID: ")
        if teacher_id is None or section_id is None:
            return
        with self.store.session_scope() as db:
            teachers = TeacherManager(db)
            teacher = teachers.find_by_id(teacher_id)
            if teacher is None:
                print("Teacher not found.")
                return
            teacher.remove_class_section(section_id)
            teachers.save(teacher)
        print("Section unassigned from teacher.")

    # --- sections ---

    def manage_sections(self) -> None:
        self._dispatch(
            "Section Management",
            {
                1: ("Add Section", self.add_section),
                2: ("View All Sections", self.view_all_sections),
                3: ("Add Student to Section", self.add_student_to_section),
                4: ("Remove Student from Section", self.remove_student_from_section),
            },
        )

    def add_section(self) -> None:
        length = self._read_int("Enter section length (in minutes): ")
        if length is None:
            return
        with self.store.session_scope() as db:
            section = ClassSection(length=length)
            ClassSectionManager(db).save(section)
        print(f"Section added successfully with ID: {section.id}")

    def view_all_sections(self) -> None:
        with self.store.session_scope() as db:
            sections = ClassSectionManager(db).find_all()
        print("\n=== All Sections ===")
        for section in sections:
            print(section)
            print("  Students:")
            for student in section.get_students():
                print(f"    {student}")

    def add_student_to_section(self) -> None:
        section_id = self._read_int("Enter section ID: ")
        student_id = self._read_int("Enter student ID: ")
        if section_id is None or student_id is None:
            return
        with self.store.session_scope() as db:
            sections = ClassSectionManager(db)
            section = sections.find_by_id(section_id)
            student = StudentManager(db).find_by_id(student_id)
            if section is None or student is None:
                print("Section or student not found.")
                return
            section.add_student(student)
            sections.save(section)
        print("Student added to section successfully.")

    def remove_student_from_section(self) -> None:
        section_id = self._read_int("Enter section ID: ")
        student_id = self._read_int("Enter student ID: ")
        if section_id is None or student_id is None:
            return
        with self.store.session_scope() as db:
            sections = ClassSectionManager(db)
            section = sections.find_by_id(section_id)
            if section is None:
                print("Section not found.")
                return
            section.remove_student(student_id)
            sections.save(section)
        print("Student removed from section.")

    # --- reports ---

    def view_reports(self) -> None:
        with self.store.session_scope() as db:
            report = ReportManager(db).summary()
        print("\n=== Reports ===")
        print(f"Total Students: {report.total_students}")
        print(f"Total Teachers: {report.total_teachers}")
        print(f"Total Sections: {report.total_sections}")
        print(f"Average GPA: {report.average_gpa:.2f}")


def main() -> int:
    """Run the console until the user exits.

    Returns:
        Process exit status.
    """
    setup_logging(LOG_LEVEL)
    # Ensure data directory exists
    DATA_DIR.mkdir(parents=True, exist_ok=True)

    store = Store(DATABASE_URL, echo=SQL_ECHO)
    try:
        store.initialize_schema()
    except (DatabaseConnectionError, SchemaError) as e:
        print(f"Database error: {e}", file=sys.stderr)
        store.close()
        return 1

    try:
        SchoolShell(store).run()
    except (EOFError, KeyboardInterrupt):
        print("\nGoodbye!")
    finally:
        store.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
