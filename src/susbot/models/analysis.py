import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple

from ..utils.error_handling import CatalogueError

# Logical file name -> file content, as parsed from a multi-file payload
SourceBundle = Dict[str, str]


class Severity(Enum):
    """Risk tier of a catalogue check, most severe first."""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    INFO = "Info"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Check:
    """One entry of the rule catalogue.

    The pattern is compiled when the check is constructed, so an authoring
    mistake surfaces as a :class:`CatalogueError` when the catalogue module
    is imported rather than in the middle of a scan.
    """
    name: str
    description: str
    pattern: str
    severity: Severity
    score_impact: int
    regex: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.score_impact < 0:
            raise CatalogueError(f"Negative score impact for check {self.name}", self.name)
        try:
            compiled = re.compile(self.pattern)
        except re.error as e:
            raise CatalogueError(f"Invalid regex pattern for check {self.name}: {self.pattern} ({e})", self.name) from e
        object.__setattr__(self, 'regex', compiled)

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


@dataclass(frozen=True)
class Finding:
    check_name: str
    description: str
    severity: Severity

    def __str__(self) -> str:
        return f"[{self.severity.value}] {self.check_name}: {self.description}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.check_name,
            'description': self.description,
            'severity': self.severity.value,
        }


@dataclass(frozen=True)
class ContractTraits:
    verified: bool
    contract_type: str
    # Placeholder until token-holder data is available from an on-chain collaborator
    good_distribution: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            'verified': self.verified,
            'good_distribution': self.good_distribution,
            'contract_type': self.contract_type,
        }


@dataclass(frozen=True)
class AnalysisResult:
    score: int
    findings: Tuple[Finding, ...]
    traits: ContractTraits

    def to_dict(self) -> Dict[str, Any]:
        return {
            'score': self.score,
            'findings': [finding.to_dict() for finding in self.findings],
            'traits': self.traits.to_dict(),
        }
