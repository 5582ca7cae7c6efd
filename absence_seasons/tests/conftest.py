import datetime

import pytest

from absence_seasons.data.schema import AttendanceRecord


CSV_HEADER = "School DBN,Date,Enrolled,Absent,Present,Released\n"


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a file under tmp_path and return its path"""
    def _write(text, name="attendance.csv"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def attendance_csv(write_csv):
    return write_csv(
        CSV_HEADER
        + "01M015,20231015,180,5,175,0\n"
        + "01M015,2023-01-10,180,3,177,0\n"
        + "01M019,2023-06-01,300,2,298,0\n"
        + "01M019,,300,40,260,0\n"
        + "01M020,not a date,250,11,239,0\n"
        + "01M020,2023-04-03,250,abc,250,0\n"
    )


@pytest.fixture
def make_record():
    def _make(date, absent=0, school_id="01M015"):
        if isinstance(date, str):
            date = datetime.date.fromisoformat(date)
        return AttendanceRecord(school_id=school_id, date=date, absent=absent)
    return _make
