"""Relation Skeleton Builder — preposition-segmented entity/relation formula.

Invariants:
    - Empty token list -> formula "—" with no entities
    - No PREP token -> single ClauseAsPredicate(c) formula over the whole clause
    - entities are unique, in order of first appearance
    - Each preposition followed by a phrase yields exactly one relation
    - A relation with no preceding entity uses the clause variable "c" as subject

Design Decisions:
    - Prepositions recognised by tag, so "without" (tagged NEG) is not a boundary
"""

import re
from dataclasses import dataclass, field

from ruliad.core.domain_types import TokenTag
from ruliad.core.tokenize_clause import Token

_STOPWORD_RE = re.compile(r"^(the|a|an|and|or|but)$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_CLAUSE_VARIABLE = "c"


@dataclass(frozen=True)
class RelationFormula:
    entities: list[str] = field(default_factory=list)
    relations: list[str] = field(default_factory=list)
    text: str = "—"
    notes: str = ""

    def to_dict(self) -> dict:
        return {
            "entities": list(self.entities),
            "relations": list(self.relations),
            "text": self.text,
            "notes": self.notes,
        }


def _phrase_to_entity(phrase: list[Token], index: int) -> str:
    """Name a phrase after its last non-stopword token."""
    core = [t.clean_text.lower() for t in phrase if not _STOPWORD_RE.match(t.lower_text)]
    if not core:
        return f"x{index}"
    name = _NON_ALNUM_RE.sub("", core[-1])
    return name or f"x{index}"


def _segment(tokens: list[Token]) -> list[tuple[str, list[Token]]]:
    """Alternate ("phrase", run) / ("prep", [token]) segments."""
    segments: list[tuple[str, list[Token]]] = []
    current: list[Token] = []
    for t in tokens:
        if t.tag == TokenTag.PREP:
            if current:
                segments.append(("phrase", current))
                current = []
            segments.append(("prep", [t]))
        else:
            current.append(t)
    if current:
        segments.append(("phrase", current))
    return segments


def _negation_note(negations: list[str]) -> str:
    return f"Negations detected: {', '.join(negations)}." if negations else ""


def build_relation_formula(tokens: list[Token]) -> RelationFormula:
    """Build the ∃-quantified entity/relation skeleton of a clause."""
    if not tokens:
        return RelationFormula(notes="No tokens to analyse.")

    negations = [t.lower_text for t in tokens if t.tag == TokenTag.NEG]
    if not any(t.tag == TokenTag.PREP for t in tokens):
        raw = " ".join(t.clean_text or t.lower_text for t in tokens)
        notes = "No explicit prepositions detected – treating the entire clause as a single predicate."
        if negations:
            notes += " " + _negation_note(negations)
        return RelationFormula(text=f'ClauseAsPredicate(c): "{raw}"', notes=notes)

    segments = _segment(tokens)
    entities: list[str] = []
    relations: list[str] = []
    last_entity: str | None = None
    entity_idx = 0

    i = 0
    while i < len(segments):
        kind, seg_tokens = segments[i]
        if kind == "phrase":
            entity = _phrase_to_entity(seg_tokens, entity_idx)
            entity_idx += 1
            entities.append(entity)
            if last_entity is None:
                last_entity = entity
        elif i + 1 < len(segments) and segments[i + 1][0] == "phrase":
            entity = _phrase_to_entity(segments[i + 1][1], entity_idx)
            entity_idx += 1
            entities.append(entity)
            subject = last_entity or _CLAUSE_VARIABLE
            relations.append(f"{seg_tokens[0].lower_text.capitalize()}({subject}, {entity})")
            last_entity = entity
            i += 1
        i += 1

    unique = list(dict.fromkeys(entities))
    var_list = ", ".join(unique)
    predicates = [f"E({e})" for e in unique] + relations
    formula = f"∃ {var_list} · " + " ∧ ".join(predicates)

    notes = (
        f"Derived {len(unique)} entity symbol(s): {var_list or 'none'} · "
        f"Relations ({len(relations)}): {', '.join(relations) if relations else 'none'}"
    )
    if negations:
        notes += " · " + _negation_note(negations)
    return RelationFormula(entities=unique, relations=relations, text=formula, notes=notes)
