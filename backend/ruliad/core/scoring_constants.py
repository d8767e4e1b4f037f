"""Scoring Constants — every weight and threshold used by the metric engine.

Invariants:
    - Additive weights of each scorer sum to 1.0 (structural, logical)
    - RULIAD_BIT_THRESHOLD is the single source for state projection
    - Label thresholds are shared by all scorers

Design Decisions:
    - Plain module constants, documented next to their condition
"""

# Structural form: +0.4 verbs>0, +0.3 tokens>=6, +0.2 preps>0, +0.1 no garbage tokens
STRUCTURAL_VERB_WEIGHT = 0.4
STRUCTURAL_LENGTH_WEIGHT = 0.3
STRUCTURAL_MIN_TOKENS = 6
STRUCTURAL_PREP_WEIGHT = 0.2
STRUCTURAL_CLEAN_WEIGHT = 0.1

# Logical form: +0.4 verbs>0, +0.3 preps>0, +0.2 quantifier/modal>0, +0.1 negation with verb
LOGICAL_VERB_WEIGHT = 0.4
LOGICAL_PREP_WEIGHT = 0.3
LOGICAL_QUANT_MODAL_WEIGHT = 0.2
LOGICAL_NEGATION_WEIGHT = 0.1

# Ethical alignment: base 0.5, +/-0.1 per protective/harmful hit, clamped to [0, 1]
ETHICAL_BASE_SCORE = 0.5
ETHICAL_WORD_WEIGHT = 0.1

# Ambiguity: 1.0 - min(hits, 10) * 0.08
AMBIGUITY_PENALTY = 0.08
AMBIGUITY_MAX_PENALTY_TERMS = 10

# Score interpretation
SCORE_THRESHOLD_STRONG = 0.8
SCORE_THRESHOLD_MODERATE = 0.5
SCORE_THRESHOLD_WEAK = 0.0
ETHICAL_THRESHOLD_WEAK_ALIGNED = 0.6
ETHICAL_THRESHOLD_MIXED = 0.4

# State projection: bit = 1 iff score >= threshold
RULIAD_BIT_THRESHOLD = 0.6

# Status pill: ethical score below this flags a possible issue
STATUS_PILL_ETHICAL_ALERT = 0.4

# Multiway exploration / equivalence grouping defaults
MULTIWAY_DEFAULT_MAX_DEPTH = 2
MULTIWAY_MAX_DEPTH_LIMIT = 3
EQUIVALENCE_DEFAULT_THRESHOLD = 0.8
EQUIVALENCE_JACCARD_WEIGHT = 0.6
EQUIVALENCE_STRUCTURAL_WEIGHT = 0.4

# Result cache default capacity
CACHE_DEFAULT_MAX_SIZE = 100
