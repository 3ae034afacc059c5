"""
Configuration constants for the CGPA engine.

Grade-point table, rounding and classification thresholds used throughout
the calculators. Centralizing them here keeps every calculator on the same
scale.
"""

from typing import Dict, FrozenSet, Tuple

# =============================================================================
# GRADE POINTS
# =============================================================================

# 5-point scale. A+ and A both carry the maximum value.
GRADE_POINTS: Dict[str, float] = {
    "A+": 5.0,
    "A": 5.0,
    "A-": 4.5,
    "B+": 4.0,
    "B": 3.5,
    "B-": 3.0,
    "C+": 2.5,
    "C": 2.0,
    "D+": 1.5,
    "D": 1.0,
    "F": 0.0,
}

# Satisfactory / Unsatisfactory. Recognized grades that never count in GPA.
SU_GRADES: FrozenSet[str] = frozenset({"S", "U"})

MAX_GRADE_POINTS = 5.0


# =============================================================================
# ROUNDING
# =============================================================================

# Transcript averages are reported to 2 decimal places, half away from zero
AVERAGE_DECIMAL_PLACES = 2


# =============================================================================
# DEGREE CLASSIFICATION
# =============================================================================

# (lower bound, label), highest band first. Lower bound is inclusive.
CLASSIFICATION_BANDS: Tuple[Tuple[float, str], ...] = (
    (4.5, "First Class Honours"),
    (3.5, "Second Class Honours (Upper)"),
    (3.0, "Second Class Honours (Lower)"),
    (2.5, "Third Class Honours"),
    (2.0, "Pass with Merit"),
)

# Everything below the lowest band
BASE_CLASSIFICATION = "Pass"


# =============================================================================
# FLEXIBLE GRADING OPTION
# =============================================================================

# Credit units a student may hide from GPA when the caller does not say
DEFAULT_FGO_CAP = 12

# Credit amounts resolve to the nearest fraction with at most this
# denominator before the knapsack, so a float 1/3 AU is one third exactly
CREDIT_UNIT_DENOMINATOR = 1000

# Knapsack tables past this size are rejected rather than allocated
MAX_FGO_TABLE_CELLS = 10_000_000
