"""Ruliad State Projector — three scores thresholded into one of 8 states.

Invariants:
    - bits is a pure function of (structural, logical, ethical) and RULIAD_BIT_THRESHOLD
    - bit == 1 iff score >= threshold
    - Every one of the 2³ bit patterns has a title, description and dedicated sentence
"""

from dataclasses import dataclass

from ruliad.core.scoring_constants import RULIAD_BIT_THRESHOLD

Bits = tuple[int, int, int]

# (q, l, k) -> (title, description)
RULIAD_STATES: dict[Bits, tuple[str, str]] = {
    (0, 0, 0): ("Incoherent", "No stable grammar, logic, or CI."),
    (0, 0, 1): ("Moral Only", "Ethos present, form unstable."),
    (0, 1, 0): ("Logic Only", "Abstractly coherent, linguistically rough."),
    (0, 1, 1): ("Logic + Moral", "Ethical principle with clear inference."),
    (1, 0, 0): ("QSG Only", "Well-formed text, weak semantics."),
    (1, 0, 1): ("QSG + Moral", "Readable and ethically oriented."),
    (1, 1, 0): ("QSG + Logic", "Clear sentence with sound inference."),
    (1, 1, 1): ("Full Alignment", "Grammar, logic, and CI all coherent."),
}

_STATE_SENTENCES: dict[Bits, str] = {
    (0, 0, 0): (
        "The clause does not register as syntactically clear, logically structured, "
        "or morally oriented under the current heuristics."
    ),
    (0, 0, 1): (
        "Only the ethical signal is present: the wording leans protective, but the "
        "sentence form and logical structure are both weak."
    ),
    (0, 1, 0): (
        "Only the logical signal is present: relations and quantifiers are visible, "
        "but the sentence is rough and carries no clear ethical orientation."
    ),
    (0, 1, 1): (
        "The moral and logical signals are present, but the surface sentence is "
        "noisy or structurally fragile."
    ),
    (1, 0, 0): (
        "The sentence is well formed, but it makes no visible logical commitment and "
        "expresses no clear ethical orientation."
    ),
    (1, 0, 1): (
        "The sentence reads clearly and is morally oriented, but the logical structure "
        "(quantifiers, conditionals) is weak or implicit."
    ),
    (1, 1, 0): (
        "Form and inference are strong, but the wording does not clearly express an "
        "ethical commitment respecting persons as ends."
    ),
    (1, 1, 1): (
        "It occupies the highest triad state: well-formed, inferentially meaningful, "
        "and ethically protective, the highest alignment available."
    ),
}

_DIMENSIONS = (
    "syntax/structure (QSG)",
    "logical coherence (FOL-ish)",
    "Kantian alignment (CI heuristic)",
)


@dataclass(frozen=True)
class RuliadState:
    """Projected 3-bit state with its generated explanation."""
    bits: Bits
    explanation: str

    @property
    def bit_string(self) -> str:
        return "".join(str(b) for b in self.bits)

    @property
    def title(self) -> str:
        return RULIAD_STATES[self.bits][0]

    @property
    def description(self) -> str:
        return RULIAD_STATES[self.bits][1]

    def to_dict(self) -> dict:
        q, l, k = self.bits
        return {
            "bits": {"q": q, "l": l, "k": k},
            "bit_string": self.bit_string,
            "title": self.title,
            "description": self.description,
            "explanation": self.explanation,
        }


def scores_to_bits(
    structural: float, logical: float, ethical: float,
    threshold: float = RULIAD_BIT_THRESHOLD,
) -> Bits:
    """Threshold three scores into (q, l, k)."""
    return (
        1 if structural >= threshold else 0,
        1 if logical >= threshold else 0,
        1 if ethical >= threshold else 0,
    )


def explain_bits(bits: Bits, labels: dict[str, str] | None = None) -> str:
    """Natural-language explanation for a bit pattern.

    labels may carry "structural", "logical" and "ethical" metric labels,
    appended as a final sentence.
    """
    active = [dim for dim, bit in zip(_DIMENSIONS, bits) if bit]
    sentences = []
    if active:
        sentences.append("The clause is positively classified on " + ", ".join(active) + ".")
    sentences.append(_STATE_SENTENCES[bits])
    if labels is not None:
        sentences.append(
            f"QSG: {labels.get('structural', 'unknown')}. "
            f"Logic: {labels.get('logical', 'unknown')}. "
            f"Kant CI: {labels.get('ethical', 'unknown')}."
        )
    return " ".join(sentences)


def project_state(
    structural: float, logical: float, ethical: float,
    labels: dict[str, str] | None = None,
) -> RuliadState:
    bits = scores_to_bits(structural, logical, ethical)
    return RuliadState(bits=bits, explanation=explain_bits(bits, labels))
