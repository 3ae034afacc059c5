#!/usr/bin/env python3
"""
FGO OPTIMIZER - Choose which courses to hide under the Flexible Grading Option
Bounded 0/1 knapsack over credit units, maximizing the resulting CGPA

METHODOLOGY:
✅ Candidates: FGO-eligible, graded (not S/U) courses below the scale maximum
✅ Gain: weight * (max points - grade points), the lost potential reclaimed
✅ Capacity: credit cap, scaled with the weights to whole credit units
   (credit amounts resolve to fractions with denominator <= 1000 first)
✅ Table: best gain for each exact excluded weight, with a parallel take table
✅ Answer: excluded weight whose exclusion gives the highest resulting CGPA
✅ Backtracking: last candidate to first, stable for a given input order

For a fixed excluded weight the highest gain always leaves the highest
average, so scanning the final row for the best average maximizes the
resulting CGPA. Capacity need not be used up, and a course with no gain is
never hidden.

Complexity: O(n * C) time and space, n = candidates, C = cap in credit units

Priority: HIGH - Only non-trivial algorithm in the engine
Dependencies: numpy for the DP tables, gpa_calculator for the averages
"""

from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Iterable, List, Optional, Tuple
import logging
import math

import numpy as np

from .config import CREDIT_UNIT_DENOMINATOR, DEFAULT_FGO_CAP, MAX_FGO_TABLE_CELLS
from .data_models import CourseId, CourseRecord, OptimizationResult, ensure_unique_ids, validate_records
from .exceptions import InvalidInputError
from .gpa_calculator import GPACalculator
from .grade_scale import DEFAULT_SCALE, GradeScale

logger = logging.getLogger(__name__)

# Table sizes past this are logged; the cap normally keeps them tiny
LARGE_TABLE_CELLS = 1_000_000


@dataclass
class FGOCandidate:
    """Course that may profitably be hidden"""
    record_id: CourseId
    weight: Fraction
    grade_points: float
    gain: Fraction


def to_fraction(value) -> Fraction:
    """Exact rational value of a credit amount"""
    if isinstance(value, bool):
        raise InvalidInputError(f"Expected a number, got {value!r}")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidInputError(f"Expected a finite number, got {value!r}")
        # repr is the shortest string that round-trips, so 0.1 stays 1/10
        return Fraction(repr(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InvalidInputError(f"Expected a finite number, got {value!r}")
        return Fraction(value)
    if isinstance(value, int):
        return Fraction(value)
    raise InvalidInputError(f"Expected a number, got {type(value).__name__}")


def to_credit_fraction(value) -> Fraction:
    """Credit amount resolved to the nearest fraction with a bounded denominator"""
    return to_fraction(value).limit_denominator(CREDIT_UNIT_DENOMINATOR)


class FGOOptimizer:
    """Select the FGO exclusion set that maximizes the resulting CGPA"""

    def __init__(self, grade_scale: Optional[GradeScale] = None, calculator: Optional[GPACalculator] = None):
        """
        Initialize optimizer

        Args:
            grade_scale: Grade point lookup, defaults to the fixed 5-point scale
            calculator: Calculator used for the before/after averages
        """
        self.grade_scale = grade_scale or DEFAULT_SCALE
        self.calculator = calculator or GPACalculator(self.grade_scale)
        self.optimization_log: List[str] = []

    def optimize(self, records: Iterable, cap=DEFAULT_FGO_CAP) -> OptimizationResult:
        """
        Choose courses to hide within the credit cap

        Args:
            records: All course records of the transcript
            cap: Credit units that may be hidden (int, float or Decimal, >= 0)

        Returns:
            OptimizationResult with excluded ids, their weight, the gain and
            the CGPA before and after

        Raises:
            InvalidInputError: If cap is negative or not a finite number, a
                candidate weight is below the smallest credit unit, or the
                knapsack table would exceed MAX_FGO_TABLE_CELLS
            ValidationError: If any record is malformed or ids repeat
        """
        cap_value = to_credit_fraction(cap)
        if cap_value < 0:
            raise InvalidInputError(f"FGO cap must not be negative, got {cap!r}")

        validated = validate_records(records)
        ensure_unique_ids(validated)

        self.optimization_log = [f"🔍 FGO optimization over {len(validated)} courses, cap {cap}"]

        baseline = self.calculator.aggregate(validated)
        candidates = self.select_candidates(validated)
        self.optimization_log.append(f"   {len(candidates)} candidate(s) with positive gain")

        chosen: List[FGOCandidate] = []
        if candidates and cap_value > 0:
            chosen = self._solve(validated, candidates, cap_value)

        excluded_ids = frozenset(c.record_id for c in chosen)
        excluded_weight = sum((c.weight for c in chosen), Fraction(0))
        gain = sum((c.gain for c in chosen), Fraction(0))

        resulting = self.calculator.aggregate(validated, exclude_ids=excluded_ids)

        self.optimization_log.append(
            f"✅ Hide {len(excluded_ids)} course(s), {float(excluded_weight):g} credits:"
            f" {baseline.average:.2f} -> {resulting.average:.2f}"
        )
        logger.info(
            "FGO cap %s: excluded %s (weight %s, gain %s), average %.2f -> %.2f",
            cap, sorted(map(str, excluded_ids)), float(excluded_weight), float(gain),
            baseline.average, resulting.average,
        )

        return OptimizationResult(
            excluded_ids=excluded_ids,
            excluded_weight=float(excluded_weight),
            gain=float(gain),
            cap=float(cap_value),
            baseline_average=baseline.average,
            resulting_average=resulting.average,
        )

    def select_candidates(self, records: Iterable[CourseRecord]) -> List[FGOCandidate]:
        """FGO-eligible graded courses whose exclusion has positive gain, in input order"""
        max_points = Fraction(repr(float(self.grade_scale.max_points)))
        candidates = []
        for record in records:
            if not record.fgo_eligible or record.su_exercised:
                continue
            points = self.grade_scale.points_for(record.grade)
            if points is None:
                continue  # S/U is already outside the average
            if record.weight <= 0:
                continue
            weight = to_credit_fraction(record.weight)
            if weight == 0:
                raise InvalidInputError(
                    f"Course {record.id!r}: weight {record.weight!r} is below the smallest"
                    f" credit unit 1/{CREDIT_UNIT_DENOMINATOR}"
                )
            gain = weight * (max_points - to_fraction(float(points)))
            if gain <= 0:
                continue
            candidates.append(FGOCandidate(record.id, weight, points, gain))
        return candidates

    def _solve(
        self,
        records: Tuple[CourseRecord, ...],
        candidates: List[FGOCandidate],
        cap: Fraction,
    ) -> List[FGOCandidate]:
        """Run the knapsack and return the chosen candidates in input order"""
        scale = self._common_denominator([c.weight for c in candidates] + [cap])
        units = [int(c.weight * scale) for c in candidates]
        gains = [float(c.gain) for c in candidates]
        # Capacity past the combined candidate weight is never used
        capacity = min(math.floor(cap * scale), sum(units))

        cells = (len(candidates) + 1) * (capacity + 1)
        if cells > MAX_FGO_TABLE_CELLS:
            raise InvalidInputError(
                f"FGO table of {cells} cells (scale {scale}, capacity {capacity})"
                f" exceeds the limit of {MAX_FGO_TABLE_CELLS}"
            )
        if cells > LARGE_TABLE_CELLS:
            logger.warning("FGO table has %d cells (scale %d, capacity %d)", cells, scale, capacity)

        dp, take = self.build_tables(units, gains, capacity)
        best_units = self._best_excluded_units(records, dp[-1], scale)
        picked = self.backtrack(take, units, best_units)

        self.optimization_log.append(
            f"   Scale x{scale}, capacity {capacity} units, best at {best_units} units"
        )
        return [candidates[i] for i in picked]

    @staticmethod
    def build_tables(units: List[int], gains: List[float], capacity: int) -> Tuple[np.ndarray, np.ndarray]:
        """
        Fill the knapsack tables

        dp[i, c] is the best gain from the first i candidates with excluded
        weight exactly c (-inf when unreachable); take[i, c] records whether
        candidate i was hidden to reach it.
        """
        n = len(units)
        dp = np.full((n + 1, capacity + 1), -np.inf)
        dp[0, 0] = 0.0
        take = np.zeros((n + 1, capacity + 1), dtype=bool)

        for i in range(1, n + 1):
            w, g = units[i - 1], gains[i - 1]
            dp[i] = dp[i - 1]
            if w > capacity:
                continue
            with_item = dp[i - 1, : capacity + 1 - w] + g
            # Strict comparison: on a tie the candidate stays graded
            better = with_item > dp[i - 1, w:]
            dp[i, w:] = np.where(better, with_item, dp[i - 1, w:])
            take[i, w:] = better

        return dp, take

    def _best_excluded_units(self, records: Tuple[CourseRecord, ...], final_row: np.ndarray, scale: int) -> int:
        """Excluded weight (in scaled units) that leaves the highest CGPA"""
        max_points = Fraction(repr(float(self.grade_scale.max_points)))
        point_sum = Fraction(0)
        total_weight = Fraction(0)
        for record in records:
            if record.su_exercised:
                continue
            points = self.grade_scale.points_for(record.grade)
            if points is None:
                continue
            weight = to_credit_fraction(record.weight)
            point_sum += weight * to_fraction(float(points))
            total_weight += weight

        best_key = None
        best_units = 0
        for units in range(len(final_row)):
            if not np.isfinite(final_row[units]):
                continue
            excluded_weight = Fraction(units, scale)
            gain = Fraction(float(final_row[units]))
            remaining_weight = total_weight - excluded_weight
            if remaining_weight > 0:
                removed_points = excluded_weight * max_points - gain
                average = (point_sum - removed_points) / remaining_weight
            else:
                average = Fraction(0)
            # Highest average, then highest gain, then least weight
            key = (average, gain, -units)
            if best_key is None or key > best_key:
                best_key = key
                best_units = units
        return best_units

    @staticmethod
    def backtrack(take: np.ndarray, units: List[int], capacity_units: int) -> List[int]:
        """Indices of hidden candidates, walking the take table from the last row"""
        picked = []
        c = capacity_units
        for i in range(len(units), 0, -1):
            if take[i, c]:
                picked.append(i - 1)
                c -= units[i - 1]
        picked.reverse()
        return picked

    @staticmethod
    def _common_denominator(values: List[Fraction]) -> int:
        scale = 1
        for value in values:
            scale = scale * value.denominator // math.gcd(scale, value.denominator)
        return scale

    def get_optimization_log(self) -> List[str]:
        """Get detailed optimization log for debugging"""
        return self.optimization_log


def optimize_exclusion(records: Iterable, cap=DEFAULT_FGO_CAP) -> OptimizationResult:
    return FGOOptimizer().optimize(records, cap)
