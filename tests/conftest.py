import pytest

from core.database import Store
from schemas.class_section import ClassSection
from schemas.student import Student
from schemas.teacher import Teacher
from utils.class_section_manager import ClassSectionManager
from utils.student_manager import StudentManager
from utils.teacher_manager import TeacherManager


@pytest.fixture
def store(tmp_path):
    store = Store(f"sqlite:///{tmp_path / 'school.db'}")
    store.initialize_schema()
    yield store
    store.close()


@pytest.fixture
def db(store):
    with store.session_scope() as session:
        yield session


@pytest.fixture
def students(db):
    return StudentManager(db)


@pytest.fixture
def teachers(db):
    return TeacherManager(db)


@pytest.fixture
def sections(db):
    return ClassSectionManager(db)


@pytest.fixture
def make_student(students):
    def _make(name="Ada", gpa=3.9):
        student = Student(name=name, gpa=gpa)
        students.save(student)
        return student

    return _make


@pytest.fixture
def make_section(sections):
    def _make(length=50, enrolled=()):
        section = ClassSection(length=length)
        for student in enrolled:
            section.add_student(student)
        sections.save(section)
        return section

    return _make


@pytest.fixture
def make_teacher(teachers):
    def _make(name="Grace", assigned=()):
        teacher = Teacher(name=name)
        for section in assigned:
            teacher.add_class_section(section)
        teachers.save(teacher)
        return teacher

    return _make
