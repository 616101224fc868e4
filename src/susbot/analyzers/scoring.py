from typing import Iterable, Mapping

from ..models.analysis import Finding
from .rule_catalogue import SCORE_IMPACTS

BASE_SCORE = 100
MIN_SCORE = 0
MAX_SCORE = 100
# Contracts without verified source are not scanned; they get a neutral score
UNVERIFIED_CONTRACT_NEUTRAL_SCORE = 50


def prevent_out_of_range(score: int) -> int:
    return max(MIN_SCORE, min(MAX_SCORE, score))


def calculate_score(findings: Iterable[Finding], score_impacts: Mapping[str, int] = SCORE_IMPACTS) -> int:
    """Fold findings into a trust score.

    Each finding deducts its check's impact from 100; the total is clamped
    to ``[0, 100]``. Order does not matter.

    Args:
        findings: Findings produced by the risk scanner
        score_impacts: Check name -> impact, defaults to the built-in catalogue

    Returns:
        Trust score between 0 and 100 inclusive
    """
    score = BASE_SCORE
    for finding in findings:
        score -= score_impacts.get(finding.check_name, 0)
    return prevent_out_of_range(score)
