"""
CGPA Engine
===========

Grade point aggregation and Flexible Grading Option (FGO) optimization on a
fixed 5-point scale.

    records -> aggregate()          baseline CGPA
            -> optimize_exclusion() courses to hide under the FGO cap
            -> aggregate()          CGPA over the remaining courses
            -> classify()           degree classification

Pure and synchronous: every function reads immutable records and returns
new value objects.
"""

from .classification import ClassificationPolicy, classify
from .data_models import (
    AggregationResult,
    Classification,
    CourseRecord,
    CreditTotals,
    LetterGrade,
    OptimizationResult,
    Semester,
    Transcript,
    build_course_record,
    load_transcript,
)
from .exceptions import GPAEngineError, InvalidInputError, ValidationError
from .fgo_optimizer import FGOOptimizer, optimize_exclusion
from .gpa_calculator import (
    GPACalculator,
    aggregate,
    credit_totals,
    cumulative_gpa,
    is_achievable,
    semester_gpa,
    target_average,
)
from .grade_scale import DEFAULT_SCALE, GradeScale, points_for
from .semester_summary import TranscriptSummary, semester_breakdown, summarize_transcript

__version__ = "1.0.0"

__all__ = [
    "AggregationResult",
    "Classification",
    "ClassificationPolicy",
    "CourseRecord",
    "CreditTotals",
    "DEFAULT_SCALE",
    "FGOOptimizer",
    "GPACalculator",
    "GPAEngineError",
    "GradeScale",
    "InvalidInputError",
    "LetterGrade",
    "OptimizationResult",
    "Semester",
    "Transcript",
    "TranscriptSummary",
    "ValidationError",
    "aggregate",
    "build_course_record",
    "classify",
    "credit_totals",
    "cumulative_gpa",
    "is_achievable",
    "load_transcript",
    "optimize_exclusion",
    "points_for",
    "semester_breakdown",
    "semester_gpa",
    "summarize_transcript",
    "target_average",
]
