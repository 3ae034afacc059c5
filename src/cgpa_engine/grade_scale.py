"""
Grade scale lookup
Maps letter grades to grade points on the fixed 5-point scale
S/U grades are recognized but carry no points
"""

from types import MappingProxyType
from typing import Mapping, Optional

from .config import GRADE_POINTS, MAX_GRADE_POINTS, SU_GRADES


def normalize_grade(grade) -> str:
    """Strip and upper-case a grade symbol"""
    return str(grade).strip().upper()


class GradeScale:
    """Read-only letter grade to grade point mapping"""

    def __init__(self):
        self._points: Mapping[str, float] = MappingProxyType(dict(GRADE_POINTS))

    @property
    def points(self) -> Mapping[str, float]:
        return self._points

    @property
    def max_points(self) -> float:
        return MAX_GRADE_POINTS

    @property
    def letter_grades(self):
        return tuple(self._points.keys())

    def points_for(self, grade) -> Optional[float]:
        """
        Convert letter grade to grade points

        Returns:
            Grade points (0.0-5.0), or None for S/U and unrecognized symbols
        """
        return self._points.get(normalize_grade(grade))

    def is_su(self, grade) -> bool:
        return normalize_grade(grade) in SU_GRADES

    def is_recognized(self, grade) -> bool:
        """True for letter grades and S/U markers"""
        symbol = normalize_grade(grade)
        return symbol in self._points or symbol in SU_GRADES

    def __contains__(self, grade) -> bool:
        return self.is_recognized(grade)

    def __repr__(self) -> str:
        return f"GradeScale(max_points={self.max_points})"


# Shared default scale; immutable, safe to reuse
DEFAULT_SCALE = GradeScale()


def points_for(grade) -> Optional[float]:
    return DEFAULT_SCALE.points_for(grade)
