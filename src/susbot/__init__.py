"""
Susbot - static risk scanner for smart-contract source code.

This package provides:
- Normalization of block-explorer "verified source" payloads
- A fixed catalogue of lexical risk checks and a bounded trust score
- Coarse contract-type classification and deterministic summaries
- Etherscan and language-model collaborators, a REST API and a CLI
"""

__version__ = "0.1.0"

from .analyzers import RiskScanner, analyze_source_code, analyze_unverified, extract_true_source_code
from .models import AnalysisResult, ContractTraits, Finding, ScanResult, Severity

__all__ = [
    'AnalysisResult',
    'ContractTraits',
    'Finding',
    'RiskScanner',
    'ScanResult',
    'Severity',
    'analyze_source_code',
    'analyze_unverified',
    'extract_true_source_code',
]
