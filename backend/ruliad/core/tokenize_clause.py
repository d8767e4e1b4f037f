"""Clause Tokenizer — whitespace normalization and positioned tokens.

Invariants:
    - normalize_clause collapses whitespace runs and trims; idempotent
    - tokenize_clause("") == [] (empty input is not an error)
    - Token.index is the 0-based position in the normalized clause
    - clean_text strips leading/trailing characters that are neither letters nor digits
    - Non-str input is a contract violation (fail fast)

Design Decisions:
    - Token is a frozen dataclass; classification returns new tokens via replace()
    - Tokens start tagged WORD; classify_tokens() assigns the final tag
"""

import re
from dataclasses import dataclass

from ruliad.core.domain_types import TokenTag, TAG_ROLES
from ruliad.core.errors import ContractViolationError

_WHITESPACE_RE = re.compile(r"\s+")
_EDGE_PUNCT_RE = re.compile(r"^[\W_]+|[\W_]+$")


@dataclass(frozen=True)
class Token:
    """One whitespace-delimited chunk of a normalized clause."""
    index: int
    raw_text: str
    clean_text: str
    lower_text: str
    tag: TokenTag = TokenTag.WORD

    @property
    def role(self) -> str:
        return TAG_ROLES[self.tag]

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "raw_text": self.raw_text,
            "clean_text": self.clean_text,
            "lower_text": self.lower_text,
            "tag": self.tag.value,
            "role": self.role,
        }


def normalize_clause(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not isinstance(text, str):
        raise ContractViolationError(
            f"expected str, got {type(text).__name__}", "normalize_clause",
        )
    return _WHITESPACE_RE.sub(" ", text).strip()


def tokenize_clause(text: str) -> list[Token]:
    """Split a clause into positioned tokens (tagged WORD until classified)."""
    norm = normalize_clause(text)
    if not norm:
        return []

    tokens = []
    for idx, raw in enumerate(norm.split(" ")):
        clean = _EDGE_PUNCT_RE.sub("", raw)
        tokens.append(Token(
            index=idx, raw_text=raw, clean_text=clean, lower_text=clean.lower(),
        ))
    return tokens


def clause_text(tokens: list[Token]) -> str:
    """Rebuild the normalized clause from its tokens."""
    return " ".join(t.raw_text for t in tokens)


def find_phrases(tokens: list[Token], phrases: frozenset[str]) -> list[tuple[int, str]]:
    """Locate every (single- or multi-word) phrase over token windows.

    Returns (start_index, phrase) pairs sorted by position, then by phrase.
    """
    words = [t.lower_text for t in tokens]
    hits = []
    for phrase in phrases:
        parts = phrase.split(" ")
        width = len(parts)
        for start in range(len(words) - width + 1):
            if words[start:start + width] == parts:
                hits.append((start, phrase))
    hits.sort()
    return hits
