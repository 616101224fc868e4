from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class ContractSource:
    """What the source provider resolved for an address.

    An empty ``source_code`` means the contract is not verified.
    """
    source_code: str
    contract_name: str

    @property
    def verified(self) -> bool:
        return bool(self.source_code)


@dataclass(frozen=True)
class ScanResult:
    """Transport-level result of one scan request."""
    score: int
    summary: str
    risks: List[str] = field(default_factory=list)

    @classmethod
    def new_error(cls, summary: str, risks: List[str]) -> 'ScanResult':
        return cls(score=0, summary=summary, risks=list(risks))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
