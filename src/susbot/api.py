import asyncio
import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI
from pydantic import BaseModel

from . import __version__
from .analyzers.rule_catalogue import CHECKS
from .config import settings
from .services.scan_service import ContractScanService
from .utils.error_handling import SusbotError, ValidationError, fastapi_exception_handler
from .utils.logger import setup_logger

setup_logger('susbot', log_level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
logger = logging.getLogger(__name__)

app = FastAPI(title="Susbot API",
              description="Rule-based risk scanning of verified smart contract source code",
              version=__version__)
app.add_exception_handler(SusbotError, fastapi_exception_handler)
app.add_exception_handler(Exception, fastapi_exception_handler)
logger.info(f"Susbot API ready with {len(CHECKS)} checks")


class AddressScanRequest(BaseModel):
    address: str

    model_config = {
        "json_schema_extra": {
            "example": {"address": "0xAb5801a7D398351b8bE11C439e05C5B3259aeC9B"}
        }
    }


class SourceScanRequest(BaseModel):
    source_code: str
    contract_name: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "source_code": "pragma solidity ^0.6.0; contract Vault { function kill() public { selfdestruct(msg.sender); } }",
                "contract_name": "Vault"
            }
        }
    }


class ScanResponse(BaseModel):
    score: int
    summary: str
    risks: List[str]


class SourceScanResponse(ScanResponse):
    findings: List[Dict[str, Any]]
    traits: Dict[str, Any]


@lru_cache(maxsize=1)
def get_scan_service() -> ContractScanService:
    return ContractScanService.from_settings()


@app.get('/health', summary="Service health")
def health() -> Dict[str, Any]:
    return {'status': 'ok', 'checks': len(CHECKS)}


@app.post('/analyze',
          response_model=ScanResponse,
          summary="Scan a contract by address",
          description="Fetches verified source from Etherscan and scans it against the rule catalogue")
async def analyze_address(request: AddressScanRequest,
                          service: ContractScanService = Depends(get_scan_service)) -> ScanResponse:
    result = await service.analyze_address(request.address.strip())
    return ScanResponse(**result.to_dict())


@app.post('/analyze/source',
          response_model=SourceScanResponse,
          summary="Scan supplied source code",
          description="Scans flat Solidity text or an Etherscan multi-file payload")
async def analyze_source(request: SourceScanRequest,
                         service: ContractScanService = Depends(get_scan_service)) -> SourceScanResponse:
    if not request.source_code.strip():
        raise ValidationError("Source code must not be empty", field='source_code', value=request.source_code)

    analysis = await asyncio.to_thread(service.analyze_text, request.source_code)
    result = await service.report(analysis, request.contract_name)
    return SourceScanResponse(
        **result.to_dict(),
        findings=[finding.to_dict() for finding in analysis.findings],
        traits=analysis.traits.to_dict(),
    )
