import pytest

from utils.report_manager import ReportManager


def test_empty_report(db):
    report = ReportManager(db).summary()
    assert report.total_students == 0
    assert report.total_teachers == 0
    assert report.total_sections == 0
    assert report.average_gpa == 0.0


def test_report_totals(db, make_student, make_section, make_teacher):
    make_student("Ada", 4.0)
    make_student("Alan", 3.0)
    make_teacher(assigned=[make_section(), make_section()])

    report = ReportManager(db).summary()
    assert report.total_students == 2
    assert report.total_teachers == 1
    assert report.total_sections == 2
    assert report.average_gpa == pytest.approx(3.5)
