"""Clause Structure — preposition wiring and agent/action/patient split.

Invariants:
    - Pure functions over classified tokens
    - Agent/action/patient fields are None when the clause has no verb
"""

from dataclasses import dataclass

from ruliad.core.domain_types import TokenTag
from ruliad.core.tokenize_clause import Token


@dataclass(frozen=True)
class AgentActionPatient:
    agent_phrase: str | None = None
    action_word: str | None = None
    patient_phrase: str | None = None

    def to_dict(self) -> dict:
        return {
            "agent_phrase": self.agent_phrase,
            "action_word": self.action_word,
            "patient_phrase": self.patient_phrase,
        }


def build_tone_summary(tokens: list[Token]) -> str:
    """Preposition frequencies, most frequent first (ties by first appearance)."""
    freq: dict[str, int] = {}
    for t in tokens:
        if t.tag == TokenTag.PREP:
            freq[t.lower_text] = freq.get(t.lower_text, 0) + 1
    if not freq:
        return "No preposition wiring detected."
    ranked = sorted(freq.items(), key=lambda kv: -kv[1])
    return "Preposition wiring: " + ", ".join(f"{p}×{c}" for p, c in ranked)


def _join_clean(tokens: list[Token]) -> str | None:
    parts = [t.clean_text for t in tokens if t.clean_text]
    return " ".join(parts) if parts else None


def extract_agent_action_patient(tokens: list[Token]) -> AgentActionPatient:
    """Split at the first verb: before = agent, verb = action, after = patient."""
    verb_index = next((i for i, t in enumerate(tokens) if t.tag == TokenTag.VERB), None)
    if verb_index is None:
        return AgentActionPatient()
    return AgentActionPatient(
        agent_phrase=_join_clean(tokens[:verb_index]),
        action_word=tokens[verb_index].lower_text,
        patient_phrase=_join_clean(tokens[verb_index + 1:]),
    )
