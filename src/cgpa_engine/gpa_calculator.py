#!/usr/bin/env python3
"""
GPA CALCULATOR - Credit-weighted grade point averages on the 5-point scale
Semester, cumulative and target averages following transcript reporting rules

CALCULATION TYPES:
✅ Semester GPA: Courses of one semester
✅ Cumulative GPA: All semesters combined
✅ Credit Totals: All credit units vs. credit units counted in GPA
✅ Target GPA: Average needed on remaining credits to reach a desired CGPA

GRADE MAPPING:
A+ = 5.0, A = 5.0, A- = 4.5
B+ = 4.0, B = 3.5, B- = 3.0
C+ = 2.5, C = 2.0
D+ = 1.5, D = 1.0
F = 0.0
S/U = Not counted in GPA

EDGE CASES HANDLED:
- S/U courses (graded S/U or S/U option exercised): Count toward credits but not GPA
- No graded credits yet: Average is 0.00, not an error
- Unrecognized grades / non-positive credits: Rejected before any arithmetic
- Unreachable targets: Reported verbatim, never clamped

Priority: CRITICAL - Core academic calculations
Dependencies: data_models.py for type definitions
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple
import logging
import math

from .config import AVERAGE_DECIMAL_PLACES
from .data_models import (
    AggregationResult,
    CourseRecord,
    CreditTotals,
    Semester,
    Transcript,
    build_transcript,
    validate_records,
)
from .exceptions import InvalidInputError
from .grade_scale import DEFAULT_SCALE, GradeScale

logger = logging.getLogger(__name__)


def round_half_up(value: float, places: int = AVERAGE_DECIMAL_PLACES) -> float:
    """Round half away from zero, as transcripts report averages"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def flatten_semesters(semesters) -> Tuple[CourseRecord, ...]:
    """All course records of a transcript or a sequence of semesters"""
    if not isinstance(semesters, Transcript):
        semesters = build_transcript(semesters)
    return semesters.records


class GPACalculator:
    """Calculate semester, cumulative and target averages from course records"""

    def __init__(self, grade_scale: Optional[GradeScale] = None):
        """
        Initialize calculator

        Args:
            grade_scale: Grade point lookup, defaults to the fixed 5-point scale
        """
        self.grade_scale = grade_scale or DEFAULT_SCALE
        self.calculation_log: List[str] = []

    def aggregate(self, records: Iterable, exclude_ids: Iterable = ()) -> AggregationResult:
        """
        Aggregate weighted grade points over gradeable records

        Args:
            records: Course records (or mappings of their fields)
            exclude_ids: Record ids left out of the aggregation (FGO exclusions)

        Returns:
            AggregationResult with the rounded average

        Raises:
            ValidationError: If any record is malformed; nothing is computed
        """
        validated = validate_records(records)
        excluded = frozenset(exclude_ids)

        contributions = []
        for record in validated:
            if record.id in excluded:
                continue
            points = self._grade_to_points(record)
            if points is None:
                continue  # S/U never counts in GPA
            contributions.append((record.weight * points, record.weight))

        # fsum keeps the result independent of record order
        weighted_point_sum = math.fsum(points for points, _ in contributions)
        total_weight = math.fsum(weight for _, weight in contributions)

        average = 0.0
        if total_weight > 0:
            average = round_half_up(weighted_point_sum / total_weight)

        self.calculation_log.append(
            f"📊 Aggregated {len(contributions)} of {len(validated)} courses"
            f" ({len(excluded)} excluded): {weighted_point_sum:.2f} / {total_weight:g} = {average:.2f}"
        )
        logger.debug(
            "Aggregated %d graded courses: points=%s weight=%s average=%s",
            len(contributions), weighted_point_sum, total_weight, average,
        )

        return AggregationResult(
            weighted_point_sum=weighted_point_sum,
            total_weight=total_weight,
            average=average,
        )

    def semester_gpa(self, courses: Iterable) -> float:
        """GPA of a single semester's courses"""
        if isinstance(courses, Semester):
            courses = courses.courses
        return self.aggregate(courses).average

    def cumulative_gpa(self, semesters) -> float:
        """CGPA across every course of every semester"""
        return self.aggregate(flatten_semesters(semesters)).average

    def credit_totals(self, records: Iterable) -> CreditTotals:
        """
        Calculate total credits and credits counted in GPA

        S/U courses count toward the total but not the graded credits.
        """
        validated = validate_records(records)
        total = math.fsum(record.weight for record in validated)
        graded = math.fsum(
            record.weight for record in validated if self._grade_to_points(record) is not None
        )
        self.calculation_log.append(f"📚 Credits: {total:g} total, {graded:g} graded")
        return CreditTotals(total_weight=total, graded_weight=graded)

    def target_average(
        self,
        current_average: float,
        current_weight: float,
        desired_average: float,
        remaining_weight: float,
    ) -> float:
        """
        Average needed on the remaining credits to reach the desired CGPA

        Args:
            current_average: CGPA so far
            current_weight: Graded credits behind current_average
            desired_average: CGPA the student wants to finish with
            remaining_weight: Graded credits still to be taken

        Returns:
            Required average, unrounded and unclamped. Values above the scale
            maximum mean the target cannot be reached.

        Raises:
            InvalidInputError: If remaining_weight <= 0 or current_weight < 0,
                or either is not a finite number
        """
        if remaining_weight is None or not math.isfinite(remaining_weight) or remaining_weight <= 0:
            raise InvalidInputError(f"Remaining weight must be positive, got {remaining_weight!r}")
        if current_weight is None or not math.isfinite(current_weight) or current_weight < 0:
            raise InvalidInputError(f"Current weight must not be negative, got {current_weight!r}")

        total_weight = current_weight + remaining_weight
        required = (desired_average * total_weight - current_average * current_weight) / remaining_weight

        self.calculation_log.append(
            f"🎯 Target {desired_average:.2f} over {total_weight:g} credits needs {required:.4f}"
            f" on the remaining {remaining_weight:g}"
        )
        if not self.is_achievable(required):
            logger.info("Target average %.2f needs %.4f, above the scale maximum", desired_average, required)
        return required

    def is_achievable(self, required_average: float) -> bool:
        """Whether a required average is within the grade scale"""
        return required_average <= self.grade_scale.max_points

    def _grade_to_points(self, record: CourseRecord) -> Optional[float]:
        """Grade points of a record, None when it does not count in GPA"""
        if record.su_exercised:
            return None
        return self.grade_scale.points_for(record.grade)

    def get_calculation_log(self) -> List[str]:
        """Get detailed calculation log for debugging"""
        return self.calculation_log


def aggregate(records: Iterable, exclude_ids: Iterable = ()) -> AggregationResult:
    return GPACalculator().aggregate(records, exclude_ids)


def semester_gpa(courses: Iterable) -> float:
    return GPACalculator().semester_gpa(courses)


def cumulative_gpa(semesters) -> float:
    return GPACalculator().cumulative_gpa(semesters)


def credit_totals(records: Iterable) -> CreditTotals:
    return GPACalculator().credit_totals(records)


def target_average(
    current_average: float,
    current_weight: float,
    desired_average: float,
    remaining_weight: float,
) -> float:
    return GPACalculator().target_average(
        current_average, current_weight, desired_average, remaining_weight
    )


def is_achievable(required_average: float) -> bool:
    return GPACalculator().is_achievable(required_average)
