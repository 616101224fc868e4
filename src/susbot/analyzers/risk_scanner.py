"""Apply the rule catalogue to normalized contract source."""

import logging
from typing import List, Optional, Sequence

from ..models.analysis import AnalysisResult, Check, ContractTraits, Finding
from ..reporting.assembler import assemble_analysis_result
from .contract_classifier import UNKNOWN_CONTRACT_TYPE, classify_contract_type
from .rule_catalogue import CHECKS
from .scoring import UNVERIFIED_CONTRACT_NEUTRAL_SCORE, calculate_score

logger = logging.getLogger(__name__)


class RiskScanner:
    """Stateless scanner over a fixed, read-only sequence of checks.

    One instance can be shared by concurrent scans.
    """

    def __init__(self, checks: Sequence[Check] = CHECKS):
        self.checks = tuple(checks)
        self._impacts = {check.name: check.score_impact for check in self.checks}

    def scan(self, source_code: str) -> List[Finding]:
        """Return one finding per matching check, in catalogue order.

        A check matches when its pattern occurs at least once; repeated
        occurrences do not produce extra findings.
        """
        findings = []
        for check in self.checks:
            if check.matches(source_code):
                findings.append(Finding(
                    check_name=check.name,
                    description=check.description,
                    severity=check.severity,
                ))
        logger.debug(f"{len(findings)} of {len(self.checks)} checks matched")
        return findings

    def analyze(self, source_code: str, verified: Optional[bool] = None) -> AnalysisResult:
        """Scan, score and classify normalized source text.

        Args:
            source_code: Normalized text (see ``extract_true_source_code``)
            verified: Override for the verified trait; defaults to whether
                any text was supplied

        Returns:
            The assembled analysis result
        """
        findings = self.scan(source_code)
        traits = ContractTraits(
            verified=bool(source_code) if verified is None else verified,
            contract_type=classify_contract_type(source_code),
        )
        score = calculate_score(findings, self._impacts)
        return assemble_analysis_result(findings, score, traits)


_default_scanner = RiskScanner()


def analyze_source_code(source_code: str) -> AnalysisResult:
    return _default_scanner.analyze(source_code)


def analyze_unverified() -> AnalysisResult:
    """Result for a contract whose source could not be obtained; never scanned."""
    traits = ContractTraits(verified=False, contract_type=UNKNOWN_CONTRACT_TYPE)
    return assemble_analysis_result([], UNVERIFIED_CONTRACT_NEUTRAL_SCORE, traits)
