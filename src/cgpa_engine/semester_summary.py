#!/usr/bin/env python3
"""
Semester Summary
Per-semester GPA table with running CGPA, and the whole-transcript summary
(baseline CGPA -> FGO exclusion -> recomputed CGPA -> classification)
"""

import logging
from typing import Optional

import pandas as pd

from .classification import ClassificationPolicy, DEFAULT_POLICY
from .data_models import (
    AggregationResult,
    Classification,
    CreditTotals,
    EngineModel,
    OptimizationResult,
    Transcript,
    build_transcript,
)
from .fgo_optimizer import FGOOptimizer
from .gpa_calculator import GPACalculator

logger = logging.getLogger(__name__)

BREAKDOWN_COLUMNS = [
    "semester",
    "semester_id",
    "label",
    "gpa",
    "graded_weight",
    "total_weight",
    "cumulative_gpa",
]


class TranscriptSummary(EngineModel):
    """Everything the presentation layer shows for a transcript"""

    cumulative: AggregationResult
    credits: CreditTotals
    classification: Classification
    fgo: Optional[OptimizationResult] = None
    fgo_classification: Optional[Classification] = None


def _as_transcript(semesters) -> Transcript:
    if isinstance(semesters, Transcript):
        return semesters
    return build_transcript(semesters)


def semester_breakdown(semesters, calculator: Optional[GPACalculator] = None) -> pd.DataFrame:
    """
    Build the per-semester GPA table

    Args:
        semesters: Transcript, or a sequence of Semester models / mappings
        calculator: Calculator to use, a fresh one by default

    Returns:
        DataFrame with one row per semester in transcript order; the
        cumulative_gpa column is the CGPA up to and including that semester
    """
    transcript = _as_transcript(semesters)
    calculator = calculator or GPACalculator()

    rows = []
    courses_so_far = []
    for position, semester in enumerate(transcript.semesters, start=1):
        courses_so_far.extend(semester.courses)
        credits = calculator.credit_totals(semester.courses)
        rows.append({
            "semester": position,
            "semester_id": semester.id,
            "label": semester.label or f"Semester {position}",
            "gpa": calculator.semester_gpa(semester),
            "graded_weight": credits.graded_weight,
            "total_weight": credits.total_weight,
            "cumulative_gpa": calculator.aggregate(courses_so_far).average,
        })

    breakdown = pd.DataFrame(rows, columns=BREAKDOWN_COLUMNS)
    logger.info("Semester breakdown: %d semester(s)", len(breakdown))
    return breakdown


def summarize_transcript(
    semesters,
    fgo_cap=None,
    calculator: Optional[GPACalculator] = None,
    policy: Optional[ClassificationPolicy] = None,
) -> TranscriptSummary:
    """
    Summarize a transcript, optionally applying the FGO

    Args:
        semesters: Transcript, or a sequence of Semester models / mappings
        fgo_cap: Credit units to hide; None skips the optimization
        calculator: Calculator to use, a fresh one by default
        policy: Classification bands, the default policy by default
    """
    transcript = _as_transcript(semesters)
    calculator = calculator or GPACalculator()
    policy = policy or DEFAULT_POLICY

    records = transcript.records
    cumulative = calculator.aggregate(records)
    summary = {
        "cumulative": cumulative,
        "credits": calculator.credit_totals(records),
        "classification": policy.classify(cumulative.average),
    }

    if fgo_cap is not None:
        fgo = FGOOptimizer(calculator.grade_scale, calculator).optimize(records, fgo_cap)
        summary["fgo"] = fgo
        summary["fgo_classification"] = policy.classify(fgo.resulting_average)

    return TranscriptSummary(**summary)
