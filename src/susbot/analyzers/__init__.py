"""
Susbot Analyzers Package

Lexical risk analysis of smart-contract source:
- Source normalization of explorer payloads
- Rule catalogue and risk scanner
- Score calculation and contract-type classification
"""

from .contract_classifier import classify_contract_type
from .risk_scanner import RiskScanner, analyze_source_code, analyze_unverified
from .rule_catalogue import CHECKS
from .scoring import UNVERIFIED_CONTRACT_NEUTRAL_SCORE, calculate_score
from .source_normalizer import extract_true_source_code

__all__ = [
    'CHECKS',
    'RiskScanner',
    'UNVERIFIED_CONTRACT_NEUTRAL_SCORE',
    'analyze_source_code',
    'analyze_unverified',
    'calculate_score',
    'classify_contract_type',
    'extract_true_source_code',
]
