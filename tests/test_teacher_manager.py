import pytest
from sqlalchemy import text

from core.exceptions import InvalidOperationError, PersistenceError, QueryError
from schemas.class_section import ClassSection
from schemas.student import Student
from schemas.teacher import Teacher
from utils.association_sync import TEACHER_SECTIONS


def _section_ids(teacher):
    return set(teacher.class_section_ids())


def test_example_scenario(students, teachers, sections):
    ada = Student(name="Ada", gpa=3.9)
    assert students.save(ada) == 1
    grace = Teacher(name="Grace")
    assert teachers.save(grace) == 1
    section = ClassSection(length=50)
    assert sections.save(section) == 1

    grace.add_class_section(section)
    teachers.save(grace)
    section.add_student(ada)
    sections.save(section)

    loaded = teachers.find_by_id(1)
    assert len(loaded.get_class_sections()) == 1
    only = loaded.get_class_sections()[0]
    assert only.length == 50
    assert [(s.name, s.gpa) for s in only.get_students()] == [("Ada", 3.9)]


def test_resave_replaces_sections(teachers, make_section, make_teacher):
    a, b, c = make_section(45), make_section(50), make_section(90)
    teacher = make_teacher(assigned=[a, b])
    assert _section_ids(teachers.find_by_id(teacher.id)) == {a.id, b.id}

    teacher.remove_class_section(b)
    teacher.add_class_section(c)
    teachers.save(teacher)

    assert _section_ids(teachers.find_by_id(teacher.id)) == {a.id, c.id}


def test_removing_all_sections_clears_junction_rows(db, teachers, make_section, make_teacher):
    a, b = make_section(), make_section()
    teacher = make_teacher(assigned=[a, b])

    for section in teacher.get_class_sections():
        teacher.remove_class_section(section)
    teachers.save(teacher)

    assert TEACHER_SECTIONS.related_ids(db, teacher.id) == []
    assert teachers.find_by_id(teacher.id).get_class_sections() == []


def test_renaming_keeps_row_and_sections(teachers, make_section, make_teacher):
    section = make_section()
    teacher = make_teacher(assigned=[section])

    teacher.name = "Grace Hopper"
    teachers.save(teacher)

    assert len(teachers.find_all()) == 1
    loaded = teachers.find_by_id(teacher.id)
    assert loaded.name == "Grace Hopper"
    assert _section_ids(loaded) == {section.id}


def test_deleted_section_stays_linked_but_is_not_loaded(
    db, teachers, sections, make_section, make_teacher
):
    kept, dropped = make_section(45), make_section(50)
    teacher = make_teacher(assigned=[kept, dropped])

    sections.delete(dropped)

    assert TEACHER_SECTIONS.related_ids(db, teacher.id) == [kept.id, dropped.id]
    assert _section_ids(teachers.find_by_id(teacher.id)) == {kept.id}


def test_delete_teacher_keeps_junction_rows(db, teachers, make_section, make_teacher):
    section = make_section()
    teacher = make_teacher(assigned=[section])

    teachers.delete(teacher)

    assert teachers.find_by_id(teacher.id) is None
    assert TEACHER_SECTIONS.related_ids(db, teacher.id) == [section.id]


def test_delete_unsaved_teacher_is_invalid(teachers):
    with pytest.raises(InvalidOperationError):
        teachers.delete(Teacher(name="Grace"))


def test_load_depth(teachers, make_student, make_section, make_teacher):
    section = make_section(enrolled=[make_student()])
    teacher = make_teacher(assigned=[section])

    flat = teachers.find_by_id(teacher.id, depth=0)
    assert flat.get_class_sections() == []

    shallow = teachers.find_by_id(teacher.id, depth=1)
    assert shallow.get_class_sections()[0].get_students() == []

    full = teachers.find_by_id(teacher.id)
    assert len(full.get_class_sections()[0].get_students()) == 1


def test_many_sections_and_students_load(teachers, make_student, make_section, make_teacher):
    roster = [make_student(f"Student {i}", 3.0) for i in range(20)]
    assigned = [make_section(30 + i, enrolled=roster) for i in range(15)]
    teacher = make_teacher(assigned=assigned)

    loaded = teachers.find_by_id(teacher.id)
    assert len(loaded.get_class_sections()) == 15
    assert all(len(s.get_students()) == 20 for s in loaded.get_class_sections())


def test_failed_sync_rolls_back_teacher_insert(db, teachers, make_section):
    section = make_section()
    db.execute(text("DROP TABLE teacher_sections"))
    db.commit()

    teacher = Teacher(name="Grace")
    teacher.add_class_section(section)
    with pytest.raises(PersistenceError):
        teachers.save(teacher)

    assert teacher.id == 0
    assert teachers.find_all(depth=0) == []


def test_failed_sections_join_raises_query_error(db, teachers, make_section, make_teacher):
    teacher = make_teacher(assigned=[make_section()])
    db.execute(text("DROP TABLE teacher_sections"))
    db.commit()

    with pytest.raises(QueryError):
        teachers.find_by_id(teacher.id)
    with pytest.raises(QueryError):
        teachers.find_all()
    # A flat load never touches the junction table.
    assert teachers.find_by_id(teacher.id, depth=0).name == "Grace"
