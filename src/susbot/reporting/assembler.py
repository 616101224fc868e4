"""Result assembly and fallback summaries.

The summaries here depend only on an :class:`AnalysisResult` (and an
optional contract name), so a scan still reads well when the narrative
generator is not configured or fails.
"""

from typing import Dict, Iterable, Optional

from ..models.analysis import AnalysisResult, ContractTraits, Finding, Severity
from ..models.scan import ScanResult

UNVERIFIED_RISK = "The contract source code is not verified on Etherscan."


def assemble_analysis_result(findings: Iterable[Finding], score: int, traits: ContractTraits) -> AnalysisResult:
    return AnalysisResult(score=score, findings=tuple(findings), traits=traits)


def count_severities(analysis_result: AnalysisResult) -> Dict[Severity, int]:
    """Count findings by severity; every tier is present, even when zero."""
    counts = {severity: 0 for severity in Severity}
    for finding in analysis_result.findings:
        counts[finding.severity] += 1
    return counts


def create_summary_for_verified(analysis_result: AnalysisResult, contract_name: Optional[str] = None) -> str:
    counts = count_severities(analysis_result)
    prefix = f"Analysis of '{contract_name}' complete." if contract_name else "Analysis complete."
    return (
        f"{prefix} Found {counts[Severity.CRITICAL]} critical, {counts[Severity.HIGH]} high, "
        f"{counts[Severity.MEDIUM]} medium, {counts[Severity.LOW]} low, and "
        f"{counts[Severity.INFO]} informational risks. Final Score: {analysis_result.score}"
    )


def create_summary_for_unverified(contract_name: Optional[str] = None) -> str:
    subject = f"Contract '{contract_name}'" if contract_name else "The contract's"
    return (
        f"{subject} source code is NOT verified on Etherscan. "
        "Without verified source code, it's impossible to audit the contract for security vulnerabilities. "
        "This is a major red flag for transparency and security."
    )


def build_scan_result(analysis_result: AnalysisResult, summary: str) -> ScanResult:
    return ScanResult(
        score=analysis_result.score,
        summary=summary,
        risks=[str(finding) for finding in analysis_result.findings],
    )


def build_unverified_scan_result(analysis_result: AnalysisResult, summary: str) -> ScanResult:
    return ScanResult(score=analysis_result.score, summary=summary, risks=[UNVERIFIED_RISK])
