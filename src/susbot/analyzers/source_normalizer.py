"""Reconstruct one analyzable text from an explorer "verified source" field.

Etherscan returns the ``SourceCode`` field in one of three shapes:

* plain Solidity text (single flattened file),
* a JSON object ``{"sources": {"File.sol": {"content": "..."}}, ...}``,
* the same JSON wrapped in an extra pair of braces (``{{ ... }}``), used for
  standard-json-input submissions.

Normalization never raises: anything that is not a well-formed bundle is
returned unchanged and treated as a single flat file.
"""

import json
import logging
from typing import Optional

from ..models.analysis import SourceBundle

logger = logging.getLogger(__name__)

FILE_SEPARATOR = "\n"


def is_double_encoded_json(etherscan_source: str) -> bool:
    return etherscan_source.startswith("{{") and etherscan_source.endswith("}}")


def parse_source_bundle(text: str) -> Optional[SourceBundle]:
    """Parse a multi-file payload into a file name -> content mapping.

    Args:
        text: Candidate JSON text

    Returns:
        The bundle, or None when the text is not a JSON object whose
        ``sources`` member maps every file name to an object with a string
        ``content``.
    """
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None

    if not isinstance(parsed, dict):
        return None
    sources = parsed.get('sources')
    if not isinstance(sources, dict):
        return None

    bundle: SourceBundle = {}
    for file_name, file_data in sources.items():
        if not isinstance(file_data, dict):
            return None
        content = file_data.get('content')
        if not isinstance(content, str):
            return None
        bundle[file_name] = content
    return bundle


def concatenate_sources(bundle: SourceBundle) -> str:
    return FILE_SEPARATOR.join(bundle.values())


def extract_true_source_code(etherscan_source: str) -> str:
    """Return the analyzable text for a raw ``SourceCode`` payload.

    The double-encoded shape is tried first, then the single-encoded shape,
    and finally the payload itself is used as flat text.
    """
    if is_double_encoded_json(etherscan_source):
        bundle = parse_source_bundle(etherscan_source[1:-1])
        if bundle is not None:
            logger.debug(f"Double-encoded multi-file source with {len(bundle)} file(s)")
            return concatenate_sources(bundle)

    bundle = parse_source_bundle(etherscan_source)
    if bundle is not None:
        logger.debug(f"Multi-file source with {len(bundle)} file(s)")
        return concatenate_sources(bundle)

    return etherscan_source
