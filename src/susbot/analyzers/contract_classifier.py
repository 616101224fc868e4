"""Coarse contract-type label from substring markers.

Best effort only: the first label in priority order whose marker appears
anywhere in the text wins, so an ERC20 token that also mentions ERC721 is
still labelled as an ERC20 token.
"""

from typing import Tuple

UNKNOWN_CONTRACT_TYPE = "Unknown"

CONTRACT_TYPE_MARKERS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("ERC20 Token", ("ERC20", "IERC20")),
    ("NFT (ERC721)", ("ERC721", "IERC721")),
    ("Multi-Token (ERC1155)", ("ERC1155", "IERC1155")),
    ("Ownable Contract", ("Ownable",)),
    ("Smart Contract", ("contract",)),
)


def classify_contract_type(source_code: str) -> str:
    for label, markers in CONTRACT_TYPE_MARKERS:
        if any(marker in source_code for marker in markers):
            return label
    return UNKNOWN_CONTRACT_TYPE
