"""
Susbot Services Package

Collaborators around the scanning core:
- EtherscanClient: verified source lookup
- NarrativeGenerator: optional language-model narrative
- ContractScanService: async orchestration of a full scan
"""

from .etherscan import EtherscanClient, is_valid_ethereum_address
from .narrative import NarrativeGenerator
from .scan_service import ContractScanService

__all__ = [
    'ContractScanService',
    'EtherscanClient',
    'NarrativeGenerator',
    'is_valid_ethereum_address',
]
