"""
Unit Tests for GPA Calculator

Tests for:
- Weighted aggregation and rounding
- S/U handling
- Semester and cumulative GPA
- Credit totals
- Target GPA
- Validation before aggregation
"""

from itertools import permutations

import pytest

from cgpa_engine import (
    AggregationResult,
    CourseRecord,
    GPACalculator,
    InvalidInputError,
    ValidationError,
    aggregate,
    credit_totals,
    cumulative_gpa,
    is_achievable,
    semester_gpa,
    target_average,
)
from cgpa_engine.gpa_calculator import round_half_up


class TestAggregate:
    """Tests for aggregate()"""

    def test_basic_aggregation(self, two_course_records):
        """A (4 AU) and B+ (3 AU): 32 points over 7 AU"""
        result = aggregate(two_course_records)

        assert isinstance(result, AggregationResult)
        assert result.weighted_point_sum == 32.0
        assert result.total_weight == 7.0
        assert result.average == 4.57

    def test_empty_records(self):
        """No courses yet means 0.00, not an error"""
        result = aggregate([])

        assert result.average == 0.0
        assert result.total_weight == 0.0
        assert result.weighted_point_sum == 0.0

    def test_all_su_records(self):
        """S/U-only record sets have no graded credits"""
        records = [
            CourseRecord(id="s1", weight=2, grade="S"),
            CourseRecord(id="s2", weight=3, grade="U"),
            CourseRecord(id="s3", weight=4, grade="A", su_exercised=True),
        ]
        result = aggregate(records)

        assert result.average == 0.0
        assert result.total_weight == 0.0

    def test_su_option_excluded(self):
        """An A taken under the S/U option does not count"""
        records = [
            CourseRecord(id="x1", weight=4, grade="A", su_exercised=True),
            CourseRecord(id="x2", weight=3, grade="C"),
        ]
        assert aggregate(records).average == 2.0

    def test_order_does_not_matter(self, mixed_records):
        """Average is invariant under reordering"""
        expected = aggregate(mixed_records)
        for order in permutations(mixed_records[:5]):
            assert aggregate(list(order) + mixed_records[5:]) == expected

    def test_rounds_half_away_from_zero(self):
        """33 points over 8 AU is exactly 4.125 and reports 4.13"""
        records = [
            CourseRecord(id="r1", weight=5, grade="A"),
            CourseRecord(id="r2", weight=2, grade="B-"),
            CourseRecord(id="r3", weight=1, grade="C"),
        ]
        result = aggregate(records)

        assert result.weighted_point_sum == 33.0
        assert result.average == 4.13

    def test_exclude_ids(self, two_course_records):
        """Excluded ids drop out of both sums"""
        result = aggregate(two_course_records, exclude_ids={"c2"})

        assert result.total_weight == 4.0
        assert result.average == 5.0

    def test_accepts_mappings(self):
        """Plain mappings are validated into records"""
        result = aggregate([{"id": "a", "weight": "4", "grade": " a- "}])
        assert result.average == 4.5

    def test_rejects_unrecognized_grade(self, two_course_records):
        """One bad record rejects the whole set"""
        records = two_course_records + [{"id": "bad", "weight": 3, "grade": "E"}]

        with pytest.raises(ValidationError, match="bad"):
            aggregate(records)

    @pytest.mark.parametrize("weight", [0, -3, "", None])
    def test_rejects_non_positive_weight(self, weight):
        """Missing or non-positive credits are invalid, not zero"""
        with pytest.raises(ValidationError):
            aggregate([{"id": "w", "weight": weight, "grade": "A"}])

    def test_rejects_unvalidated_record(self):
        """Records built without validation are re-checked"""
        record = CourseRecord.model_construct(
            id="raw", label="", weight=0.0, grade="A", fgo_eligible=False, su_exercised=False
        )
        with pytest.raises(ValidationError, match="weight"):
            aggregate([record])

    @pytest.mark.parametrize("weight", [float("nan"), float("inf")])
    def test_rejects_unvalidated_non_finite_weight(self, weight):
        record = CourseRecord.model_construct(
            id="raw", label="", weight=weight, grade="A", fgo_eligible=False, su_exercised=False
        )
        with pytest.raises(ValidationError, match="weight"):
            aggregate([record])

    def test_rejects_single_record(self, two_course_records):
        """A bare record is not a record set"""
        with pytest.raises(ValidationError):
            aggregate(two_course_records[0])

    def test_does_not_mutate_input(self, two_course_records):
        """Caller-owned list is left untouched"""
        before = list(two_course_records)
        aggregate(two_course_records, exclude_ids={"c1"})
        assert two_course_records == before

    def test_calculation_log(self, two_course_records):
        """Test that calculation log is populated"""
        calculator = GPACalculator()
        calculator.aggregate(two_course_records)

        log = calculator.get_calculation_log()
        assert len(log) > 0
        assert any("Aggregated 2 of 2 courses" in entry for entry in log)


class TestSemesterAndCumulative:
    """Semester and cumulative GPA"""

    def test_semester_gpa(self, sample_transcript):
        first, second = sample_transcript.semesters

        assert semester_gpa(first) == 4.57
        assert semester_gpa(second.courses) == 2.0

    def test_cumulative_gpa(self, sample_transcript):
        """38 points over 10 graded AU"""
        assert cumulative_gpa(sample_transcript) == 3.8

    def test_cumulative_gpa_from_semester_list(self, sample_transcript):
        assert cumulative_gpa(list(sample_transcript.semesters)) == 3.8

    def test_cumulative_gpa_rejects_duplicate_ids(self, sample_transcript):
        first = sample_transcript.semesters[0]
        with pytest.raises(ValidationError, match="Duplicate"):
            cumulative_gpa([first, first])


class TestCreditTotals:
    """Total vs. graded credits"""

    def test_credit_totals(self):
        records = [
            CourseRecord(id="t1", weight=4, grade="A"),
            CourseRecord(id="t2", weight=2, grade="S"),
            CourseRecord(id="t3", weight=3, grade="B", su_exercised=True),
        ]
        totals = credit_totals(records)

        assert totals.total_weight == 9.0
        assert totals.graded_weight == 4.0
        assert totals.ungraded_weight == 5.0

    def test_failing_grade_still_graded(self):
        """An F counts in GPA, so its credits are graded credits"""
        totals = credit_totals([CourseRecord(id="f", weight=3, grade="F")])
        assert totals.graded_weight == 3.0


class TestTargetAverage:
    """Required average on the remaining credits"""

    def test_unreachable_target_reported_verbatim(self):
        """(5.0 * 10 - 4.57 * 7) / 3, above the scale maximum"""
        required = target_average(4.57, 7, 5.0, 3)

        assert required == pytest.approx((50.0 - 31.99) / 3)
        assert required > 5.0
        assert not is_achievable(required)

    def test_reachable_target(self):
        required = target_average(3.5, 10, 4.0, 10)

        assert required == pytest.approx(4.5)
        assert is_achievable(required)

    def test_already_secured_target(self):
        """A negative requirement is still achievable"""
        required = target_average(4.8, 100, 3.0, 10)
        assert required < 0
        assert is_achievable(required)

    @pytest.mark.parametrize("remaining", [0, -1, -0.5])
    def test_rejects_non_positive_remaining(self, remaining):
        with pytest.raises(InvalidInputError):
            target_average(4.0, 10, 4.5, remaining)

    def test_rejects_negative_current_weight(self):
        with pytest.raises(InvalidInputError):
            target_average(4.0, -10, 4.5, 10)

    @pytest.mark.parametrize("remaining", [float("nan"), float("inf")])
    def test_rejects_non_finite_remaining(self, remaining):
        with pytest.raises(InvalidInputError):
            target_average(4.0, 10, 4.5, remaining)

    def test_rejects_non_finite_current_weight(self):
        with pytest.raises(InvalidInputError):
            target_average(4.0, float("nan"), 4.5, 10)

    def test_target_logged(self):
        calculator = GPACalculator()
        calculator.target_average(4.57, 7, 5.0, 3)
        assert any("Target 5.00" in entry for entry in calculator.get_calculation_log())


class TestRoundHalfUp:

    @pytest.mark.parametrize(
        "value,expected",
        [(4.125, 4.13), (4.124, 4.12), (2.005, 2.01), (0.0, 0.0), (-1.125, -1.13)],
    )
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected
