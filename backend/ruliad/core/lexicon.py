"""Lexicons — fixed word lists shared by the classifier and all scorers.

Invariants:
    - Every list is a frozenset built once at import time and never mutated
    - All entries are lower-case; multi-word entries are single-space separated
    - NEGATIONS and PREPOSITIONS overlap on "without"; tag priority resolves it

Design Decisions:
    - Module-level frozensets, not lazily populated caches
    - Multi-word phrases live beside single words; find_phrases() handles both
"""

PREPOSITIONS = frozenset({
    "of", "with", "by", "within", "under", "over", "into", "onto", "from",
    "to", "for", "in", "on", "at", "through", "between", "before", "after",
    "against", "toward", "inside", "outside", "beyond", "without", "around",
})

VERBS = frozenset({
    "is", "are", "shall", "must", "may", "will", "can", "protect", "protects",
    "respect", "respects", "harm", "harms", "kill", "kills", "exploit", "exploits",
    "use", "uses", "manipulate", "manipulates", "help", "helps", "aid", "aids",
    "support", "supports",
})

QUANTIFIERS = frozenset({"every", "all", "any", "no", "none", "some", "each"})

NEGATIONS = frozenset({"not", "never", "no", "none", "without"})

DETERMINER_PATTERN = r"^(the|a|an)$"
CONJUNCTION_PATTERN = r"^(and|or|but)$"
NUMERAL_PATTERN = r"^[0-9]+$"

# Modal words counted by the shared token-statistics pass
STAT_MODALS = frozenset({"must", "shall", "may", "can", "should"})


# ─── Ethical polarity ───────────────────────────────────────────

HARMFUL_WORDS = frozenset({
    "kill", "kills", "harm", "harms", "exploit", "exploits", "deceive", "deceives",
    "lie", "lies", "steal", "steals", "coerce", "coerces", "abuse", "abuses",
    "manipulate", "manipulates", "dominate", "dominates", "enslave", "enslaves",
    "torture", "tortures", "use", "uses",
})

PROTECTIVE_WORDS = frozenset({
    "protect", "protects", "respect", "respects", "help", "helps", "aid", "aids",
    "support", "supports", "care", "cares", "defend", "defends", "preserve", "preserves",
    "honor", "honors", "safeguard", "safeguards", "benefit", "benefits",
})

PERSON_WORDS = frozenset({
    "person", "persons", "people", "citizen", "citizens",
    "worker", "workers", "human", "humans", "individual", "individuals",
})


# ─── Modal profile ──────────────────────────────────────────────

MODALS_OBLIGATION = frozenset({"must", "shall", "have to"})
MODALS_PERMISSION = frozenset({"may", "can", "could"})
MODALS_RECOMMENDATION = frozenset({"should", "ought"})


# ─── Vagueness (legal open texture) ─────────────────────────────

VAGUE_TERMS = frozenset({
    "reasonable", "appropriate", "adequate", "significant", "material",
    "substantial", "generally", "normally", "as needed", "if necessary",
    "from time to time", "where possible", "to the extent possible",
})


# ─── Legal layer ────────────────────────────────────────────────

LEGAL_VAGUE_TERMS = frozenset({
    "may", "might", "approximately", "about", "generally",
    "usually", "often", "sometimes", "reasonable", "appropriate",
})
LEGAL_PRECISE_TERMS = frozenset({
    "shall", "must", "will", "hereby", "whereas", "therefore",
    "pursuant to", "notwithstanding", "in accordance with",
})
DEFINITION_MARKERS = frozenset({"means", "mean", "defined"})

BINDING_VERBS = frozenset({
    "shall", "must", "will", "agree", "agrees", "covenant",
    "covenants", "undertake", "undertakes", "obligated",
})
CONSIDERATION_TERMS = frozenset({
    "consideration", "exchange", "payment", "compensation",
    "value", "fee", "price", "sum",
})
PARTY_TERMS = frozenset({
    "party", "parties", "vendor", "client", "buyer", "seller",
    "licensor", "licensee", "employer", "employee", "contractor",
})
FORMAL_TERMS = frozenset({
    "hereby", "whereas", "therefore", "aforementioned",
    "pursuant", "notwithstanding", "hereinafter", "therein",
})

RISK_AMBIGUOUS_TERMS = frozenset({
    "may", "might", "possibly", "approximately", "about",
    "reasonable", "appropriate", "substantial", "material",
})
ONE_SIDED_TERMS = frozenset({
    "unilateral", "sole discretion", "absolute", "unlimited",
    "perpetual", "irrevocable", "waive", "waives", "forfeit",
})
PROBLEMATIC_TERMS = frozenset({
    "illegal", "unlawful", "void", "penalty", "forfeiture",
    "indemnify all", "unlimited liability", "no recourse",
})
PROTECTIVE_QUALIFIERS = frozenset({
    "limited", "reasonable", "good faith", "commercially reasonable",
    "subject to", "except", "provided that", "unless",
})

COMPLETENESS_CHECKS: tuple[tuple[str, frozenset[str]], ...] = (
    ("parties", frozenset({"party", "parties", "between", "vendor", "client", "buyer", "seller"})),
    ("obligations", frozenset({"shall", "must", "will", "agree", "covenant", "undertake"})),
    ("consideration", frozenset({"payment", "fee", "price", "consideration", "exchange", "value"})),
    ("term", frozenset({"term", "duration", "period", "commence", "expire", "effective"})),
    ("termination", frozenset({"terminate", "termination", "cancel", "cancellation", "end"})),
    ("governing_law", frozenset({"governed", "jurisdiction", "law", "court", "venue"})),
)

OBLIGATION_ACTION_VERBS = frozenset({
    "pay", "deliver", "provide", "maintain", "notify",
    "perform", "indemnify", "defend", "comply",
})

DOCUMENT_TYPE_PATTERNS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Non-Disclosure Agreement (NDA)", ("confidential", "disclosure", "proprietary", "trade secret")),
    ("Service Agreement", ("services", "perform", "deliverables", "scope of work")),
    ("License Agreement", ("license", "licensor", "licensee", "grant", "intellectual property")),
    ("Employment Agreement", ("employee", "employer", "employment", "position", "salary", "duties")),
    ("Purchase Agreement", ("purchase", "buyer", "seller", "goods", "sale")),
    ("Lease Agreement", ("lease", "lessor", "lessee", "premises", "rent", "tenant")),
    ("Partnership Agreement", ("partner", "partnership", "profit", "loss", "contribution")),
    ("Indemnification Clause", ("indemnify", "indemnification", "hold harmless", "defend")),
    ("Termination Clause", ("terminate", "termination", "notice", "cause", "breach")),
    ("Payment Terms", ("payment", "invoice", "due", "net", "days")),
)


# ─── Clause dependency cues ─────────────────────────────────────

TEMPORAL_CUES = ("prior to", "before", "following", "after", "upon")
CONDITIONAL_CUES = ("subject to", "notwithstanding", "except as", "unless")
REFERENCE_NOUNS = ("section", "clause", "paragraph", "article", "exhibit", "schedule", "appendix")
