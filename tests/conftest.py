"""
Pytest Configuration and Fixtures

Provides common fixtures for all tests including:
- Course record sets
- FGO candidate sets
- Stored transcript snapshots
"""

import pytest

from cgpa_engine import CourseRecord, Semester, Transcript


@pytest.fixture
def two_course_records():
    """A (4 AU) and B+ (3 AU), neither FGO-eligible"""
    return [
        CourseRecord(id="c1", label="MA1001 Calculus", weight=4, grade="A"),
        CourseRecord(id="c2", label="PH1011 Physics", weight=3, grade="B+"),
    ]


@pytest.fixture
def fgo_candidates():
    """Three FGO-eligible courses: C (3 AU), B- (4 AU), A (3 AU)"""
    return [
        CourseRecord(id="c1", label="CS1001", weight=3, grade="C", fgo_eligible=True),
        CourseRecord(id="c2", label="CS1002", weight=4, grade="B-", fgo_eligible=True),
        CourseRecord(id="c3", label="CS1003", weight=3, grade="A", fgo_eligible=True),
    ]


@pytest.fixture
def mixed_records():
    """Graded, S/U and S/U-option courses with some FGO-eligible entries"""
    return [
        CourseRecord(id="m1", label="MH1100", weight=4, grade="A-"),
        CourseRecord(id="m2", label="MH1200", weight=4, grade="D+", fgo_eligible=True),
        CourseRecord(id="m3", label="HW0188", weight=2, grade="S"),
        CourseRecord(id="m4", label="CC0001", weight=2, grade="B", su_exercised=True),
        CourseRecord(id="m5", label="SC1005", weight=3, grade="C+", fgo_eligible=True),
        CourseRecord(id="m6", label="SC1007", weight=3, grade="A+", fgo_eligible=True),
        CourseRecord(id="m7", label="ET0001", weight=1, grade="F", fgo_eligible=True),
    ]


@pytest.fixture
def sample_transcript():
    """Two semesters: 4.57 in the first, 2.00 (plus an S) in the second"""
    return Transcript(
        semesters=[
            Semester(
                id="y1s1",
                label="Y1S1",
                courses=[
                    CourseRecord(id="c1", weight=4, grade="A"),
                    CourseRecord(id="c2", weight=3, grade="B+"),
                ],
            ),
            Semester(
                id="y1s2",
                label="Y1S2",
                courses=[
                    CourseRecord(id="c3", weight=3, grade="C", fgo_eligible=True),
                    CourseRecord(id="c4", weight=2, grade="S"),
                ],
            ),
        ]
    )


@pytest.fixture
def stored_snapshot():
    """Snapshot in the shape the calculator page persists"""
    return {
        "semesters": [
            {
                "id": "sem-1",
                "collapsed": False,
                "courses": [
                    {"id": "a1", "code": "SC1003", "name": "Intro to Python", "credits": "3", "grade": "A-", "isSU": False},
                    {"id": "a2", "code": "MH1810", "name": "Mathematics 1", "credits": 4, "grade": "c+", "isSU": False, "fgoEligible": True},
                ],
            },
            {
                "id": "sem-2",
                "collapsed": True,
                "courses": [
                    {"id": "b1", "code": "CC0002", "name": "Navigating the Digital World", "credits": 2, "grade": "B", "isSU": True},
                    {"id": "b2", "code": "SC2001", "name": "Algorithms", "credits": 3, "grade": "B+", "fgoEligible": True},
                ],
            },
        ]
    }
