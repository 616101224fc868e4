"""
Susbot Models Package

- analysis: immutable scan types (checks, findings, traits, results)
- scan: types exchanged with collaborators and the transport layer
"""

from .analysis import (
    AnalysisResult,
    Check,
    ContractTraits,
    Finding,
    Severity,
    SourceBundle,
)
from .scan import ContractSource, ScanResult

__all__ = [
    'AnalysisResult',
    'Check',
    'ContractSource',
    'ContractTraits',
    'Finding',
    'ScanResult',
    'Severity',
    'SourceBundle',
]
