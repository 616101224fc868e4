"""Assembly of analysis results and deterministic summaries."""

from .assembler import (
    UNVERIFIED_RISK,
    assemble_analysis_result,
    build_scan_result,
    build_unverified_scan_result,
    count_severities,
    create_summary_for_unverified,
    create_summary_for_verified,
)

__all__ = [
    'UNVERIFIED_RISK',
    'assemble_analysis_result',
    'build_scan_result',
    'build_unverified_scan_result',
    'count_severities',
    'create_summary_for_unverified',
    'create_summary_for_verified',
]
