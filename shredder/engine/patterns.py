"""Pattern tables for the text branch.

Detection and redaction deliberately use two separate tables. Detection
favours recall so the review screen shows anything that looks like a
secret; redaction favours precision so only well-formed tokens are
rewritten. Masks produced by ``REDACTION_RULES`` never match those rules
again, which keeps a second pass over redacted output a no-op.
"""

import re
from dataclasses import dataclass
from typing import Final

IPV4_MASK: Final = "xxx.xxx.xxx.xxx"
SECRET_MASK: Final = "*" * 20
OPENAI_KEY_MASK: Final = "sk-" + SECRET_MASK
AWS_KEY_MASK: Final = "AKIA" + "*" * 16


@dataclass(frozen=True)
class DetectionPattern:
    label: str
    pattern: re.Pattern[str]


@dataclass(frozen=True)
class RedactionRule:
    """Find-and-replace rule; ``replacement`` is an ``re.sub`` template."""

    label: str
    pattern: re.Pattern[str]
    replacement: str

    def apply(self, text: str) -> tuple[str, int]:
        return self.pattern.subn(self.replacement, text)


DETECTION_PATTERNS: Final[tuple[DetectionPattern, ...]] = (
    DetectionPattern(
        "IPv4 Address",
        re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b", re.ASCII),
    ),
    DetectionPattern(
        "Email Address",
        re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b", re.ASCII),
    ),
    DetectionPattern(
        "Generic API Key",
        re.compile(r"(?:api_key|apikey|secret|token|sk-)\S{10,}", re.IGNORECASE),
    ),
    DetectionPattern(
        "Auth Header",
        re.compile(r"Authorization:\s*(?:Bearer|Basic)\s+[A-Za-z0-9._-]+", re.IGNORECASE),
    ),
)

REDACTION_RULES: Final[tuple[RedactionRule, ...]] = (
    RedactionRule(
        "IPv4 Address",
        re.compile(r"\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b", re.ASCII),
        IPV4_MASK,
    ),
    RedactionRule(
        "Email Address",
        re.compile(
            r"\b([A-Za-z0-9._%+-])[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+)\.([A-Za-z]{2,})\b",
            re.ASCII,
        ),
        r"\1***@\2.\3",
    ),
    RedactionRule(
        "OpenAI API Key",
        re.compile(r"sk-[a-zA-Z0-9]{20,}"),
        OPENAI_KEY_MASK,
    ),
    RedactionRule(
        "AWS Access Key",
        re.compile(r"AKIA[0-9A-Z]{16}"),
        AWS_KEY_MASK,
    ),
    RedactionRule(
        "Auth Header",
        re.compile(r"Authorization:\s*(Bearer|Basic)\s+[A-Za-z0-9._-]+", re.IGNORECASE),
        r"Authorization: \1 " + SECRET_MASK,
    ),
)
