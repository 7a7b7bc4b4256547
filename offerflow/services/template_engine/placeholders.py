"""Placeholder discovery in template text."""

from __future__ import annotations

import re
from typing import List

# No "}" inside a token, so nested braces never match.
PLACEHOLDER_PATTERN = re.compile(r"\{\{[^}]+\}\}")

RESERVED_TOKENS = ("{{date}}", "{{today}}")


def extract_placeholders(text: str) -> List[str]:
    """Return distinct ``{{...}}`` tokens in first-occurrence order.

    Tokens are captured verbatim, so ``{{ name }}`` and ``{{name}}`` are
    different placeholders.
    """

    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(text)))


def mappable_placeholders(text: str) -> List[str]:
    """Placeholders the user has to map: every token except the reserved date ones."""

    return [token for token in extract_placeholders(text) if token not in RESERVED_TOKENS]


def placeholder_name(token: str) -> str:
    return token.replace("{", "").replace("}", "")
