"""Comment classification: decide whether a comment body carries an ACK/NACK marker.

Matching is a plain scan, not a word-boundary regex:

1. Compound phrases are checked as substrings of the lower-cased body, in the
   fixed priority order of the mode's table. The first phrase found wins, so a
   comment containing both "tested ack" and "utack" is classified as utACK.
2. Failing that, the body is split on whitespace, each token is stripped of
   leading/trailing non-alphanumeric characters and compared with the bare
   word. "ACK." and "(ack)" match; "hijacked" and "acknowledged" do not.

Because step 1 is a substring check, "utacknowledge" still matches utACK.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ackamoto_core.models import Mode

_EDGE_PUNCTUATION_RE = re.compile(r"^[\W_]+|[\W_]+$")


@dataclass(frozen=True)
class Vocabulary:
    """The marker table for one mode."""

    phrases: tuple[tuple[str, str], ...]  # (lower-case phrase, marker kind), in priority order
    bare_word: str
    bare_kind: str


VOCABULARIES: dict[Mode, Vocabulary] = {
    Mode.ACK: Vocabulary(
        phrases=(
            ("concept ack", "Concept ACK"),
            ("utack", "utACK"),
            ("tested ack", "Tested ACK"),
            ("code review ack", "Code Review ACK"),
        ),
        bare_word="ack",
        bare_kind="ACK",
    ),
    Mode.NACK: Vocabulary(
        phrases=(
            ("concept nack", "Concept NACK"),
            ("strong nack", "Strong NACK"),
            ("weak nack", "Weak NACK"),
        ),
        bare_word="nack",
        bare_kind="NACK",
    ),
}


def marker_kinds(mode: Mode | str) -> list[str]:
    """Return the closed set of marker kinds a mode can produce, in priority order."""
    vocab = VOCABULARIES[Mode(mode)]
    return [kind for _, kind in vocab.phrases] + [vocab.bare_kind]


def _strip_token(token: str) -> str:
    return _EDGE_PUNCTUATION_RE.sub("", token)


def classify(body: str, mode: Mode | str) -> str | None:
    """Return the marker kind found in ``body`` under ``mode``, or None."""
    vocab = VOCABULARIES[Mode(mode)]
    text = (body or "").lower()

    for phrase, kind in vocab.phrases:
        if phrase in text:
            return kind

    for token in text.split():
        if _strip_token(token) == vocab.bare_word:
            return vocab.bare_kind

    return None
