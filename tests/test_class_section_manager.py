import pytest
from sqlalchemy import text

from core.exceptions import InvalidOperationError, QueryError
from schemas.class_section import ClassSection
from utils.association_sync import SECTION_STUDENTS


def _student_ids(section):
    return set(section.student_ids())


def test_save_with_students_round_trip(sections, make_student):
    ada, alan = make_student("Ada", 3.9), make_student("Alan", 3.1)
    section = ClassSection(length=50)
    section.add_student(ada)
    section.add_student(alan)
    sections.save(section)

    loaded = sections.find_by_id(section.id)
    assert loaded.length == 50
    assert {(s.name, s.gpa) for s in loaded.get_students()} == {
        ("Ada", 3.9),
        ("Alan", 3.1),
    }


def test_resave_replaces_students(sections, make_student, make_section):
    a, b, c = make_student("A"), make_student("B"), make_student("C")
    section = make_section(enrolled=[a, b])

    section.remove_student(b)
    section.add_student(c)
    section.length = 75
    sections.save(section)

    loaded = sections.find_by_id(section.id)
    assert loaded.length == 75
    assert _student_ids(loaded) == {a.id, c.id}
    assert len(sections.find_all()) == 1


def test_adding_same_student_twice_writes_one_row(db, sections, make_student, make_section):
    ada = make_student()
    section = make_section(enrolled=[ada])
    section.add_student(ada)
    sections.save(section)

    assert SECTION_STUDENTS.related_ids(db, section.id) == [ada.id]


def test_deleted_student_is_skipped_on_load(
    db, students, sections, make_student, make_section
):
    ada, alan = make_student("Ada"), make_student("Alan")
    section = make_section(enrolled=[ada, alan])

    students.delete(alan)

    assert SECTION_STUDENTS.related_ids(db, section.id) == [ada.id, alan.id]
    assert _student_ids(sections.find_by_id(section.id)) == {ada.id}


def test_delete_section_keeps_enrollment_rows(db, sections, make_student, make_section):
    ada = make_student()
    section = make_section(enrolled=[ada])

    sections.delete(section)

    assert sections.find_by_id(section.id) is None
    assert SECTION_STUDENTS.related_ids(db, section.id) == [ada.id]


def test_delete_unsaved_section_is_invalid(sections):
    with pytest.raises(InvalidOperationError):
        sections.delete(ClassSection(length=50))


def test_find_all_loads_students_per_section(sections, make_student, make_section):
    ada = make_student()
    make_section(45, enrolled=[ada])
    make_section(90)

    loaded = sections.find_all()
    assert [s.length for s in loaded] == [45, 90]
    assert [len(s.get_students()) for s in loaded] == [1, 0]


def test_flat_load(sections, make_student, make_section):
    section = make_section(enrolled=[make_student()])
    assert sections.find_by_id(section.id, depth=0).get_students() == []


def test_failed_students_join_raises_query_error(db, sections, make_student, make_section):
    section = make_section(enrolled=[make_student()])
    db.execute(text("DROP TABLE section_students"))
    db.commit()

    with pytest.raises(QueryError):
        sections.find_by_id(section.id)
    with pytest.raises(QueryError):
        sections.find_all()
