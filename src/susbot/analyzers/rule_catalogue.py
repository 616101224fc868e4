"""Built-in catalogue of lexical risk checks.

Order here is the order findings are reported in; it has no effect on the
score. Several checks overlap on purpose (a bare ``x.call(data);`` is a
low-level call, a reentrancy vector and an unchecked return at once) and all
of them fire.
"""

from typing import Dict, Tuple

from ..models.analysis import Check, Severity
from ..utils.error_handling import CatalogueError

# Supply cap markers that make a public mint function bounded
_SUPPLY_CAP = r"\b(?:_?cap|maxSupply|_maxSupply|MAX_SUPPLY)\b"

CHECKS: Tuple[Check, ...] = (
    Check(
        name="Self-Destruct",
        description="The contract can be destroyed by its owner, removing it from the blockchain and sending all its funds to a designated address.",
        pattern=r"selfdestruct\s*\(|suicide\s*\(",
        severity=Severity.CRITICAL,
        score_impact=25,
    ),
    Check(
        name="Delegate Call",
        description="Unsafe use of 'delegatecall' can lead to unexpected code execution and security vulnerabilities.",
        pattern=r"\.delegatecall\b",
        severity=Severity.CRITICAL,
        score_impact=40,
    ),
    Check(
        name="Reentrancy Vulnerability",
        description="External calls that forward control (and possibly Ether) to another contract can re-enter this contract before its state is updated.",
        pattern=r"\.call(?:\.value)?\s*[({]",
        severity=Severity.CRITICAL,
        score_impact=30,
    ),
    Check(
        name="Infinite Minting",
        description="A 'mint' function exists and no supply cap is declared, so new tokens may be created without limit.",
        pattern=r"^(?![\s\S]*" + _SUPPLY_CAP + r")[\s\S]*\bfunction\s+mint\s*\(",
        severity=Severity.CRITICAL,
        score_impact=25,
    ),
    Check(
        name="tx.origin Authentication",
        description="Using 'tx.origin' for authentication is unsafe and can make the contract vulnerable to phishing attacks.",
        pattern=r"\btx\.origin\b",
        severity=Severity.HIGH,
        score_impact=30,
    ),
    Check(
        name="Unprotected Ether Withdrawal",
        description="A 'transfer' function is used. If protections like 'require(msg.sender == owner)' are missing, it could be a vulnerability.",
        pattern=r"\.transfer\(",
        severity=Severity.HIGH,
        score_impact=25,
    ),
    Check(
        name="Owner Can Blacklist Users",
        description="The contract keeps a blacklist, so a privileged account can block addresses from transferring or selling.",
        pattern=r"[bB]lack[lL]ist",
        severity=Severity.HIGH,
        score_impact=15,
    ),
    Check(
        name="Block Timestamp Dependency",
        description="The contract's logic depends on 'block.timestamp', which can be manipulated by miners.",
        pattern=r"\bblock\.timestamp\b",
        severity=Severity.MEDIUM,
        score_impact=15,
    ),
    Check(
        name="Pausable Contract",
        description="The contract can be paused, letting a privileged account freeze transfers and other operations.",
        pattern=r"\bPausable\b|\bwhenNotPaused\b|\bfunction\s+pause\s*\(",
        severity=Severity.MEDIUM,
        score_impact=10,
    ),
    Check(
        name="Unchecked Call Return",
        description="A low-level call or send is used as a bare statement, so a failed call is silently ignored.",
        pattern=r"(?m)^[ \t]*[\w.\[\]]+\.(?:call|send)(?:\.value\([^)\n]*\))?(?:\{[^}\n]*\})?[ \t]*\([^;\n]*\)[ \t]*;",
        severity=Severity.MEDIUM,
        score_impact=10,
    ),
    Check(
        name="Inline Assembly",
        description="Use of inline assembly ('assembly') bypasses compiler safety checks and requires careful review.",
        pattern=r"\bassembly\b",
        severity=Severity.MEDIUM,
        score_impact=5,
    ),
    Check(
        name="Low-level Call",
        description="Low-level '.call' is used. If the return value is not checked, it can lead to failed external calls being missed.",
        pattern=r"\.call\b",
        severity=Severity.LOW,
        score_impact=5,
    ),
    Check(
        name="Outdated Compiler Version",
        description="An old Solidity version is used (pragma < 0.8.0), which lacks built-in overflow/underflow checks.",
        pattern=r"pragma\s+solidity\s*[\^<>=]*\s*0\.[4-7]\.",
        severity=Severity.LOW,
        score_impact=5,
    ),
    Check(
        name="Missing Event Emits",
        description="Events are declared but never emitted, so state changes cannot be tracked off-chain.",
        pattern=r"^(?![\s\S]*\bemit\b)[\s\S]*\bevent\s+\w+\s*\(",
        severity=Severity.LOW,
        score_impact=3,
    ),
    Check(
        name="Hardcoded Gas Limits",
        description="A fixed gas amount is forwarded to an external call, which can break when gas costs change.",
        pattern=r"\.gas\(\s*\d+\s*\)|\bgas\s*:\s*\d+",
        severity=Severity.LOW,
        score_impact=2,
    ),
    Check(
        name="Mint Function",
        description="The contract contains a 'mint' function, indicating it can create new tokens.",
        pattern=r"\bmint\b",
        severity=Severity.INFO,
        score_impact=0,
    ),
)


def _ensure_unique_names(checks: Tuple[Check, ...]) -> None:
    seen = set()
    for check in checks:
        if check.name in seen:
            raise CatalogueError(f"Duplicate check name in catalogue: {check.name}", check.name)
        seen.add(check.name)


_ensure_unique_names(CHECKS)

SCORE_IMPACTS: Dict[str, int] = {check.name: check.score_impact for check in CHECKS}
