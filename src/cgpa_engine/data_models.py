#!/usr/bin/env python3
"""
DATA MODELS - Pydantic schemas for course records and calculation results
Type-safe, immutable value types consumed and returned by the calculators

COMPREHENSIVE DATA VALIDATION:
✅ Course Records: Identifier, credit weight, letter grade, FGO eligibility
✅ Semesters: Ordered course records with unique identifiers
✅ Transcripts: Ordered semesters, restored from plain snapshots
✅ Results: Aggregation, credit totals, FGO optimization, classification

VALIDATION RULES:
- Credit weights must be positive and finite
- Grades must be a letter grade (A+ ... F) or an S/U marker
- Course identifiers must be unique across a transcript
- Invalid records are rejected, never defaulted to zero

Priority: CRITICAL - Foundation for all calculations
Dependencies: Pydantic for validation
"""

from enum import Enum
import math
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ValidationError
from .grade_scale import DEFAULT_SCALE, normalize_grade

CourseId = Union[str, int]


def _describe_errors(exc: PydanticValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg", ""))
    return "; ".join(parts)


class EngineModel(BaseModel):
    """Immutable model whose construction errors raise the engine ValidationError"""

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any):
        try:
            super().__init__(**data)
        except PydanticValidationError as e:
            raise ValidationError(
                f"Invalid {type(self).__name__}: {_describe_errors(e)}", errors=e.errors()
            ) from e


class LetterGrade(str, Enum):
    """Valid grade symbols with plus/minus modifiers"""
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    D_PLUS = "D+"
    D = "D"
    F = "F"
    S = "S"  # Satisfactory
    U = "U"  # Unsatisfactory


class CourseRecord(EngineModel):
    """Individual graded or S/U course entry"""

    id: CourseId = Field(..., description="Opaque course entry identifier")
    label: str = Field("", description="Course code or name, informational only")
    weight: float = Field(..., gt=0.0, allow_inf_nan=False, description="Credit units (AUs)")
    grade: str = Field(..., description="Letter grade or S/U marker")
    fgo_eligible: bool = Field(False, description="Whether the course may be hidden under FGO")
    su_exercised: bool = Field(False, description="S/U option exercised on a letter grade")

    @field_validator("grade", mode="before")
    @classmethod
    def validate_grade(cls, v):
        """Normalize grade and reject symbols outside the scale"""
        if isinstance(v, Enum):
            v = v.value
        symbol = normalize_grade(v)
        if not DEFAULT_SCALE.is_recognized(symbol):
            raise ValueError(f"Unrecognized grade: {v!r}")
        return symbol

    @field_validator("id")
    @classmethod
    def validate_id(cls, v):
        if isinstance(v, str) and not v.strip():
            raise ValueError("Course id must not be blank")
        return v

    @property
    def is_su(self) -> bool:
        """Graded S/U, or S/U option exercised"""
        return self.su_exercised or DEFAULT_SCALE.is_su(self.grade)

    @property
    def grade_points(self) -> Optional[float]:
        """Grade points, or None when the course does not count in GPA"""
        if self.su_exercised:
            return None
        return DEFAULT_SCALE.points_for(self.grade)

    @property
    def is_gradeable(self) -> bool:
        return self.grade_points is not None


class Semester(EngineModel):
    """One semester of course records, in entry order"""

    id: CourseId = Field(..., description="Semester identifier")
    label: str = Field("", description="Display label")
    courses: Tuple[CourseRecord, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def check_unique_course_ids(self):
        ensure_unique_ids(self.courses)
        return self


class Transcript(EngineModel):
    """Complete record set: semesters in chronological order"""

    semesters: Tuple[Semester, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def check_unique_course_ids(self):
        ensure_unique_ids(self.records)
        return self

    @property
    def records(self) -> Tuple[CourseRecord, ...]:
        """All course records, flattened in semester order"""
        return tuple(course for semester in self.semesters for course in semester.courses)

    def get_record(self, course_id: CourseId) -> Optional[CourseRecord]:
        for course in self.records:
            if course.id == course_id:
                return course
        return None


class AggregationResult(EngineModel):
    """Weighted grade point aggregation over gradeable records"""

    weighted_point_sum: float = Field(..., description="Sum of weight * grade points")
    total_weight: float = Field(..., ge=0.0, description="Sum of gradeable weights")
    average: float = Field(..., description="Rounded weighted average (0.0 when no weight)")


class CreditTotals(EngineModel):
    """Credit summary across all records"""

    total_weight: float = Field(..., ge=0.0, description="All credit units, S/U included")
    graded_weight: float = Field(..., ge=0.0, description="Credit units counted in GPA")

    @property
    def ungraded_weight(self) -> float:
        return self.total_weight - self.graded_weight


class OptimizationResult(EngineModel):
    """FGO exclusion proposal"""

    excluded_ids: FrozenSet[CourseId] = Field(default_factory=frozenset)
    excluded_weight: float = Field(0.0, ge=0.0, description="Credit units hidden")
    gain: float = Field(0.0, ge=0.0, description="Lost potential reclaimed by the exclusion")
    cap: float = Field(..., ge=0.0, description="Credit units allowed")
    baseline_average: float = Field(..., description="Average before exclusion")
    resulting_average: float = Field(..., description="Average after exclusion")

    @model_validator(mode="after")
    def check_within_cap(self):
        if self.excluded_weight > self.cap:
            raise ValueError(
                f"Excluded weight {self.excluded_weight} exceeds cap {self.cap}"
            )
        return self

    @property
    def improvement(self) -> float:
        return round(self.resulting_average - self.baseline_average, 2)


class Classification(EngineModel):
    """Degree classification band"""

    label: str
    rank: int = Field(..., ge=1, description="1 = highest band")


def ensure_unique_ids(courses) -> None:
    """Reject record sets where two courses share an id"""
    seen = set()
    for course in courses:
        if course.id in seen:
            raise ValidationError(f"Duplicate course id: {course.id!r}")
        seen.add(course.id)


def build_course_record(data: Union[CourseRecord, Mapping[str, Any]]) -> CourseRecord:
    """
    Validate one course entry

    Args:
        data: An existing CourseRecord or a mapping of its fields

    Returns:
        A validated CourseRecord

    Raises:
        ValidationError: If the entry is malformed
    """
    if isinstance(data, CourseRecord):
        # model_construct() skips validation, so re-check the invariants
        if not isinstance(data.weight, (int, float)) or not math.isfinite(data.weight) or data.weight <= 0:
            raise ValidationError(f"Course {data.id!r}: weight must be positive, got {data.weight!r}")
        if not DEFAULT_SCALE.is_recognized(data.grade):
            raise ValidationError(f"Course {data.id!r}: unrecognized grade {data.grade!r}")
        return data

    if not isinstance(data, Mapping):
        raise ValidationError(f"Expected a course record or mapping, got {type(data).__name__}")

    try:
        return CourseRecord.model_validate(dict(data))
    except PydanticValidationError as e:
        course_id = data.get("id", "<missing id>")
        raise ValidationError(
            f"Course {course_id!r}: {_describe_errors(e)}", errors=e.errors()
        ) from e


def validate_records(records) -> Tuple[CourseRecord, ...]:
    """Validate a whole record set; any bad entry rejects the set"""
    if isinstance(records, (CourseRecord, Mapping)) or isinstance(records, (str, bytes)):
        raise ValidationError("Expected a sequence of course records")
    return tuple(build_course_record(record) for record in records)


def _snapshot_course(course: Mapping[str, Any]) -> Dict[str, Any]:
    """Translate a stored course entry into CourseRecord fields"""
    if not isinstance(course, Mapping):
        return course

    label = course.get("label")
    if label is None:
        label = " ".join(
            str(part) for part in (course.get("code"), course.get("name")) if part
        )

    weight = course.get("weight", course.get("credits"))
    if isinstance(weight, str) and not weight.strip():
        weight = None

    fields = {
        "id": course.get("id"),
        "label": label,
        "weight": weight,
        "grade": course.get("grade"),
        "fgo_eligible": course.get("fgo_eligible", course.get("fgoEligible", False)),
        "su_exercised": course.get("su_exercised", course.get("isSU", False)),
    }
    return fields


def load_transcript(snapshot: Mapping[str, Any]) -> Transcript:
    """
    Restore a transcript from a stored snapshot

    Snapshot shape:
        {"semesters": [{"id": ..., "label": ..., "courses": [{...}, ...]}]}

    Course entries accept either engine field names (weight, fgo_eligible,
    su_exercised) or stored form names (credits, code/name, isSU, fgoEligible).

    Raises:
        ValidationError: If the snapshot or any course entry is malformed
    """
    if not isinstance(snapshot, Mapping) or not isinstance(snapshot.get("semesters"), (list, tuple)):
        raise ValidationError("Snapshot must be a mapping with a 'semesters' list")

    semesters: List[Any] = []
    for semester in snapshot["semesters"]:
        if isinstance(semester, Mapping) and isinstance(semester.get("courses"), (list, tuple)):
            semester = dict(semester)
            semester["courses"] = [_snapshot_course(c) for c in semester["courses"]]
        semesters.append(semester)

    try:
        return Transcript.model_validate({"semesters": semesters})
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid transcript snapshot: {_describe_errors(e)}", errors=e.errors()) from e


def build_transcript(semesters) -> Transcript:
    """Validate semesters already held as Semester models or mappings"""
    try:
        return Transcript.model_validate({"semesters": list(semesters)})
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid transcript: {_describe_errors(e)}", errors=e.errors()) from e


# Export all models
__all__ = [
    'CourseId',
    'EngineModel',
    'LetterGrade',
    'CourseRecord',
    'Semester',
    'Transcript',
    'AggregationResult',
    'CreditTotals',
    'OptimizationResult',
    'Classification',
    'build_course_record',
    'ensure_unique_ids',
    'validate_records',
    'load_transcript',
    'build_transcript',
]
