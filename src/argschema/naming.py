"""Case normalization for argument and property names."""

from __future__ import annotations

import re

# Runs of letters and digits; underscores and everything else separate.
_RUN_RE = re.compile(r"[^\W_]+")


def _kind(char: str) -> str:
    if char.isdigit():
        return "digit"
    if char.isupper():
        return "upper"
    return "lower"


def _split_run(run: str) -> list[str]:
    parts: list[str] = []
    start = 0
    for i in range(1, len(run)):
        prev, cur = _kind(run[i - 1]), _kind(run[i])
        boundary = (
            (prev == "digit") != (cur == "digit")
            or (prev == "lower" and cur == "upper")
            or (
                prev == "upper"
                and cur == "upper"
                and i + 1 < len(run)
                and _kind(run[i + 1]) == "lower"
            )
        )
        if boundary:
            parts.append(run[start:i])
            start = i
    parts.append(run[start:])
    return parts


def words(text: str) -> list[str]:
    """Split text into words.

    Separators are any non-alphanumeric characters plus the implicit
    boundaries of mixed-case text:
    - lower to upper: ``someArg`` -> ``some``, ``Arg``
    - acronym to word: ``XMLHttp`` -> ``XML``, ``Http``
    - letters to digits: ``port2`` -> ``port``, ``2``

    Letters outside ASCII are kept: ``caféMode`` -> ``café``, ``Mode``.
    Uncased letters count as lowercase.
    """
    result: list[str] = []
    for run in _RUN_RE.findall(text):
        result.extend(_split_run(run))
    return result


def kebab_case(text: str) -> str:
    """Lowercase words joined by hyphens. Idempotent on kebab-case input."""
    return "-".join(word.lower() for word in words(text))


def camel_case(text: str) -> str:
    parts = words(text)
    if not parts:
        return ""
    head, *rest = parts
    return head.lower() + "".join(word[:1].upper() + word[1:].lower() for word in rest)
