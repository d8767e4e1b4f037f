"""Token Classifier — assigns exactly one tag per token.

Invariants:
    - Pure and total: every lower-case word maps to exactly one TokenTag
    - Priority order NEG > PREP > VERB > QUANT > DET > CONJ > NUM > WORD
    - Same word always yields the same tag
"""

import re

from ruliad.core.domain_types import TokenTag
from ruliad.core.lexicon import (
    NEGATIONS, PREPOSITIONS, VERBS, QUANTIFIERS,
    DETERMINER_PATTERN, CONJUNCTION_PATTERN, NUMERAL_PATTERN,
)
from ruliad.core.tokenize_clause import Token

_SET_RULES: tuple[tuple[TokenTag, frozenset[str]], ...] = (
    (TokenTag.NEG, NEGATIONS),
    (TokenTag.PREP, PREPOSITIONS),
    (TokenTag.VERB, VERBS),
    (TokenTag.QUANT, QUANTIFIERS),
)

_PATTERN_RULES: tuple[tuple[TokenTag, re.Pattern], ...] = (
    (TokenTag.DET, re.compile(DETERMINER_PATTERN)),
    (TokenTag.CONJ, re.compile(CONJUNCTION_PATTERN)),
    (TokenTag.NUM, re.compile(NUMERAL_PATTERN)),
)


def classify_word(lower: str) -> TokenTag:
    """Tag a single lower-case word."""
    for tag, words in _SET_RULES:
        if lower in words:
            return tag
    for tag, pattern in _PATTERN_RULES:
        if pattern.match(lower):
            return tag
    return TokenTag.WORD


def classify_tokens(tokens: list[Token]) -> list[Token]:
    """Return new tokens carrying their classified tag."""
    return [
        Token(t.index, t.raw_text, t.clean_text, t.lower_text, classify_word(t.lower_text))
        for t in tokens
    ]
