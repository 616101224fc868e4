"""Optional natural-language narration of scan results via a chat-completion API."""

import logging
from typing import Any, Dict, Optional

import requests

from ..config import settings
from ..models.analysis import AnalysisResult
from ..utils.error_handling import NarrativeError

SYSTEM_PROMPT = "You are a helpful web3 security assistant. Always respond with valid JSON."


def build_prompt(analysis_result: AnalysisResult, contract_name: str) -> str:
    risks_formatted = "\n".join(
        f"{finding.check_name}: {finding.description}" for finding in analysis_result.findings
    )
    traits = analysis_result.traits
    return (
        "You are a Web3 security analyst reviewing smart contract risks.\n"
        "Your task is to analyze the given smart contract, explain the security issues in simple terms, "
        "and assign a final trust score between 0 and 100. Return your response in strict JSON format.\n\n"
        "Input:\n"
        f"- Contract Name: {contract_name}\n"
        f"- Risks Detected:\n{risks_formatted}\n\n"
        "- Contract Traits:\n"
        f"  - Verified Source Code: {str(traits.verified).lower()}\n"
        f"  - Good Token Distribution: {str(traits.good_distribution).lower()}\n"
        f"  - Contract Type: {traits.contract_type}\n\n"
        "Please analyze these risks and provide a comprehensive summary with recommendations in valid JSON format. "
        "Focus on explaining technical risks in simple terms for non-technical users.\n"
        "The response should include verdict, summary, and recommendations fields."
    )


class NarrativeGenerator:
    def __init__(
        self,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self.api_key = api_key if api_key is not None else settings.OPENAI_API_KEY
        self.api_url = api_url or settings.OPENAI_API_URL
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else settings.NARRATIVE_TIMEOUT

    def build_request(self, analysis_result: AnalysisResult, contract_name: str) -> Dict[str, Any]:
        return {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': build_prompt(analysis_result, contract_name)},
            ],
        }

    def generate(self, analysis_result: AnalysisResult, contract_name: str) -> str:
        """Return a narrative for the result.

        Raises:
            NarrativeError: on any transport, status or payload problem
        """
        headers = {
            'Authorization': f"Bearer {self.api_key}",
            'Content-Type': 'application/json',
        }
        try:
            response = requests.post(
                self.api_url,
                json=self.build_request(analysis_result, contract_name),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise NarrativeError("HTTP request to OpenAI failed.", [str(e)]) from e

        if not 200 <= response.status_code < 300:
            raise NarrativeError(
                "OpenAI API returned an error.",
                [f"Status: {response.status_code}, Body: {response.text[:400]}"],
            )

        try:
            body = response.json()
        except ValueError as e:
            raise NarrativeError("Failed to parse OpenAI response.", [str(e)]) from e

        choices = body.get('choices') if isinstance(body, dict) else None
        if not isinstance(choices, list) or not choices:
            raise NarrativeError("OpenAI response contained no choices.")

        message = choices[0].get('message') if isinstance(choices[0], dict) else None
        if not isinstance(message, dict):
            raise NarrativeError("OpenAI response contained no message.")

        content = message.get('content')
        if not isinstance(content, str) or not content.strip():
            raise NarrativeError("OpenAI response contained an empty message.")

        self.logger.info(f"Narrative generated for '{contract_name}' ({len(content)} chars)")
        return content
