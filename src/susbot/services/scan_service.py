"""Scan orchestration: address -> source -> analysis -> summary.

The scanning core is synchronous and pure. Everything that can block
(block explorer lookups, narrative generation) runs in a worker thread so
the service can be awaited from an async transport.
"""

import asyncio
import logging
from typing import Optional

from ..analyzers.risk_scanner import RiskScanner, analyze_unverified
from ..analyzers.source_normalizer import extract_true_source_code
from ..config import settings
from ..models.analysis import AnalysisResult
from ..models.scan import ScanResult
from ..reporting.assembler import (
    build_scan_result,
    build_unverified_scan_result,
    create_summary_for_unverified,
    create_summary_for_verified,
)
from ..utils.error_handling import EtherscanError, NarrativeError
from .etherscan import EtherscanClient, is_valid_ethereum_address
from .narrative import NarrativeGenerator

INVALID_ADDRESS = "Error: Invalid Ethereum address format."


class ContractScanService:
    """Wire the source provider, scanner and optional narrative generator together."""

    def __init__(
        self,
        source_provider: Optional[EtherscanClient] = None,
        narrative_generator: Optional[NarrativeGenerator] = None,
        scanner: Optional[RiskScanner] = None,
        narrative_timeout: Optional[float] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.source_provider = source_provider or EtherscanClient()
        self.narrative_generator = narrative_generator
        self.scanner = scanner or RiskScanner()
        self.narrative_timeout = narrative_timeout if narrative_timeout is not None else settings.NARRATIVE_TIMEOUT

    @classmethod
    def from_settings(cls) -> 'ContractScanService':
        narrative = NarrativeGenerator() if settings.narrative_enabled else None
        return cls(source_provider=EtherscanClient(), narrative_generator=narrative)

    async def analyze_address(self, address: str) -> ScanResult:
        if not is_valid_ethereum_address(address):
            self.logger.warning(f"Rejected invalid address: {address!r}")
            return ScanResult.new_error(INVALID_ADDRESS, [])

        try:
            source = await asyncio.to_thread(self.source_provider.get_contract_source, address)
        except EtherscanError as e:
            self.logger.error(f"Source fetch for {address} failed: {e.summary} {e.reasons}")
            return ScanResult.new_error(e.summary, e.reasons)

        return await self.analyze_source(source.source_code, source.contract_name)

    async def analyze_source(self, source_code: str, contract_name: Optional[str] = None) -> ScanResult:
        """Analyze a raw verified-source payload.

        An empty payload takes the unverified path: it is not scanned and
        gets the neutral score.
        """
        if not source_code:
            analysis = analyze_unverified()
            summary = await self._narrate(analysis, contract_name)
            if summary is None:
                summary = create_summary_for_unverified(contract_name)
            return build_unverified_scan_result(analysis, summary)

        analysis = await asyncio.to_thread(self.analyze_text, source_code)
        return await self.report(analysis, contract_name)

    def analyze_text(self, source_code: str) -> AnalysisResult:
        normalized = extract_true_source_code(source_code)
        analysis = self.scanner.analyze(normalized, verified=bool(source_code))
        self.logger.info(
            f"Scan complete: score {analysis.score}, {len(analysis.findings)} finding(s), "
            f"type '{analysis.traits.contract_type}'"
        )
        return analysis

    async def report(self, analysis: AnalysisResult, contract_name: Optional[str] = None) -> ScanResult:
        """Turn a verified-source analysis into a transport result with a summary."""
        summary = await self._narrate(analysis, contract_name)
        if summary is None:
            summary = create_summary_for_verified(analysis, contract_name)
        return build_scan_result(analysis, summary)

    async def _narrate(self, analysis: AnalysisResult, contract_name: Optional[str]) -> Optional[str]:
        if self.narrative_generator is None:
            return None
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.narrative_generator.generate, analysis, contract_name or 'Unknown'),
                timeout=self.narrative_timeout,
            )
        except NarrativeError as e:
            self.logger.warning(f"AI summary failed: {e.summary} {e.reasons}")
        except asyncio.TimeoutError:
            self.logger.warning(f"AI summary timed out after {self.narrative_timeout}s")
        except Exception as e:
            self.logger.error(f"Unexpected AI summary failure: {e}", exc_info=True)
        return None
