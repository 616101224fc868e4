"""Source provider backed by the Etherscan ``getsourcecode`` endpoint."""

import logging
import time
from typing import Any, Dict, Optional

import requests

from ..config import settings
from ..models.scan import ContractSource
from ..utils.error_handling import EtherscanError

HTTP_FAILED = "HTTP request to Etherscan failed."
PARSE_FAILED = "Failed to parse Etherscan API response."
API_ERROR = "Etherscan API returned an error."


def is_valid_ethereum_address(address: str) -> bool:
    """Validates if the given string is a plausible Ethereum address."""
    return address.startswith('0x') and len(address) == 42


class EtherscanClient:
    """Fetch verified source code for a contract address.

    Connection errors and timeouts are retried with exponential backoff.
    Every other failure raises :class:`EtherscanError` right away.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        chain_id: Optional[int] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        max_response_bytes: Optional[int] = None,
        base_delay: float = 1.0,
    ):
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key if api_key is not None else settings.ETHERSCAN_API_KEY
        self.base_url = base_url or settings.ETHERSCAN_API_URL
        self.chain_id = chain_id if chain_id is not None else settings.ETHERSCAN_CHAIN_ID
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.max_retries = max(1, max_retries if max_retries is not None else settings.ETHERSCAN_MAX_RETRIES)
        self.max_response_bytes = (
            max_response_bytes if max_response_bytes is not None else settings.ETHERSCAN_MAX_RESPONSE_BYTES
        )
        self.base_delay = base_delay

        if not self.api_key:
            self.logger.warning("ETHERSCAN_API_KEY not set - requests may be rejected or rate limited")

    def get_contract_source(self, address: str) -> ContractSource:
        """Resolve an address to its verified source and contract name.

        Args:
            address: Contract address (``0x`` followed by 40 hex characters)

        Returns:
            ContractSource; ``source_code`` is empty for unverified contracts

        Raises:
            EtherscanError: transport failure, bad status, unparsable body or
                an API-level error
        """
        data = self._request_source(address)

        if str(data.get('status')) != '1' or not data.get('result'):
            reasons = [str(data.get('message', 'Unknown error'))]
            result = data.get('result')
            if isinstance(result, str) and result:
                reasons.append(result)
            raise EtherscanError(API_ERROR, reasons)

        result = data['result']
        if not isinstance(result, list) or not isinstance(result[0], dict):
            raise EtherscanError(PARSE_FAILED, [f"Unexpected 'result' payload: {str(result)[:200]}"])

        contract_info = result[0]
        source = ContractSource(
            source_code=str(contract_info.get('SourceCode') or ''),
            contract_name=str(contract_info.get('ContractName') or ''),
        )
        self.logger.info(
            f"Fetched source for {address}: '{source.contract_name or 'unnamed'}' "
            f"({'verified' if source.verified else 'not verified'}, {len(source.source_code)} chars)"
        )
        return source

    def _request_source(self, address: str) -> Dict[str, Any]:
        params = {
            'chainid': self.chain_id,
            'module': 'contract',
            'action': 'getsourcecode',
            'address': address,
        }
        if self.api_key:
            params['apikey'] = self.api_key

        for attempt in range(self.max_retries):
            try:
                self.logger.info(f"Making Etherscan API request for {address} (chain_id: {self.chain_id})")
                response = requests.get(self.base_url, params=params, timeout=self.timeout)
                break
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                if attempt == self.max_retries - 1:
                    self.logger.error(f"Network error fetching contract source after {self.max_retries} attempts: {e}")
                    raise EtherscanError(HTTP_FAILED, [f"Error: {e}"]) from e
                delay = self.base_delay * (2 ** attempt)
                self.logger.warning(
                    f"API request failed (attempt {attempt + 1}/{self.max_retries}), retrying in {delay}s: {e}"
                )
                time.sleep(delay)
            except requests.exceptions.RequestException as e:
                raise EtherscanError(HTTP_FAILED, [f"Error: {e}"]) from e

        if not 200 <= response.status_code < 300:
            body = response.text[:400]
            raise EtherscanError(HTTP_FAILED, [f"HTTP Status: {response.status_code}. Body: {body}"])

        if len(response.content) > self.max_response_bytes:
            raise EtherscanError(
                PARSE_FAILED,
                [f"Response of {len(response.content)} bytes exceeds limit of {self.max_response_bytes}"],
            )

        try:
            data = response.json()
        except ValueError as e:
            raise EtherscanError(PARSE_FAILED, [str(e)]) from e

        if not isinstance(data, dict):
            raise EtherscanError(PARSE_FAILED, ["Response body is not a JSON object"])
        return data
