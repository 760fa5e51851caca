import pytest

from models.class_section import ClassSectionModel
from models.teacher import TeacherModel
from utils.graph_loader import SECTION_LOAD_DEPTH, TEACHER_LOAD_DEPTH, GraphLoader


def test_default_depths():
    assert SECTION_LOAD_DEPTH == 1
    assert TEACHER_LOAD_DEPTH == 2


def test_negative_depth_rejected(db, make_teacher):
    teacher = make_teacher()
    model = db.get(TeacherModel, teacher.id)
    with pytest.raises(ValueError):
        GraphLoader(db).load_teacher(model, depth=-1)


def test_loaded_records_are_new_instances(db, make_student, make_section):
    ada = make_student()
    section = make_section(enrolled=[ada])
    loader = GraphLoader(db)
    model = db.get(ClassSectionModel, section.id)

    first = loader.load_class_section(model)
    second = loader.load_class_section(model)
    assert first is not second
    assert first.get_students()[0] is not ada
    assert first == second


def test_same_section_under_two_teachers(db, make_student, make_section, make_teacher):
    section = make_section(enrolled=[make_student()])
    grace = make_teacher("Grace", assigned=[section])
    barbara = make_teacher("Barbara", assigned=[section])
    loader = GraphLoader(db)

    for teacher in (grace, barbara):
        loaded = loader.load_teacher(db.get(TeacherModel, teacher.id))
        assert loaded.class_section_ids() == [section.id]
        assert len(loaded.get_class_sections()[0].get_students()) == 1
