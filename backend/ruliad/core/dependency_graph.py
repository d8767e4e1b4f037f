"""Dependency Graph Engine — inferred clause-to-clause dependencies.

Invariants:
    - Edge u -> v means "u depends on v"; no self edges; at most one edge per (u, v)
    - When several dependency kinds hold for one pair, the first in
      DependencyKind declaration order is kept
    - topological_sort() returns None exactly when find_cycles() is non-empty
    - In a returned order every edge u -> v has u before v
    - find_cycles() is iterative; deep graphs cannot exhaust the call stack
    - Vertex and edge iteration follow insertion order, so output is stable

Design Decisions:
    - Adjacency list plus reverse list: O(V + E) for sort and SCC
    - Key terms are capitalized multi-word spans and quoted spans only
    - to_dot() emits every node declaration before any edge declaration
"""

import re
from collections import deque
from dataclasses import dataclass
from typing import Any

from ruliad.core.domain_types import ClauseId, DependencyKind
from ruliad.core.errors import ContractViolationError
from ruliad.core.lexicon import TEMPORAL_CUES, CONDITIONAL_CUES, REFERENCE_NOUNS

_DOT_LABEL_LENGTH = 30

_REFERENCE_RE = re.compile(
    r"\b(?:" + "|".join(REFERENCE_NOUNS) + r")\s+([a-z0-9]+(?:\.[a-z0-9]+)*)",
    re.IGNORECASE,
)
_TEMPORAL_RE = re.compile(r"\b(?:" + "|".join(TEMPORAL_CUES) + r")\b", re.IGNORECASE)
_CONDITIONAL_RE = re.compile(r"\b(?:" + "|".join(CONDITIONAL_CUES) + r")\b", re.IGNORECASE)
_CAPITALIZED_SPAN_RE = re.compile(r"\b[A-Z][a-z]+(?:\s+[A-Z][a-z]+)+\b")
_QUOTED_RE = re.compile(r"[\"“]([^\"”]+)[\"”]")


@dataclass(frozen=True)
class ClauseRecord:
    """One clause of a multi-clause document."""
    id: ClauseId
    text: str
    section_number: str | None = None
    defined_terms: tuple[str, ...] = ()

    @classmethod
    def from_mapping(cls, data: Any) -> "ClauseRecord":
        """Build from a dict, failing fast on missing id/text."""
        if isinstance(data, ClauseRecord):
            return data
        if not isinstance(data, dict):
            raise ContractViolationError(
                f"clause record must be a mapping, got {type(data).__name__}", "ClauseRecord",
            )
        clause_id = data.get("id")
        text = data.get("text")
        if not clause_id or not isinstance(clause_id, str):
            raise ContractViolationError("clause record missing 'id'", "ClauseRecord")
        if not isinstance(text, str):
            raise ContractViolationError(f"clause {clause_id!r} missing 'text'", "ClauseRecord")
        terms = data.get("defined_terms") or ()
        if not isinstance(terms, (list, tuple)) or not all(isinstance(t, str) for t in terms):
            raise ContractViolationError(
                f"clause {clause_id!r} defined_terms must be a list of str", "ClauseRecord",
            )
        section = data.get("section_number")
        return cls(
            id=ClauseId(clause_id),
            text=text,
            section_number=str(section) if section is not None else None,
            defined_terms=tuple(terms),
        )


def coerce_clause_records(clauses: list) -> list[ClauseRecord]:
    """Normalize mixed dict/record input and reject duplicate ids."""
    records = [ClauseRecord.from_mapping(c) for c in clauses]
    seen: set[str] = set()
    for record in records:
        if record.id in seen:
            raise ContractViolationError(f"duplicate clause id {record.id!r}", "coerce_clause_records")
        seen.add(record.id)
    return records


def extract_key_terms(text: str) -> list[str]:
    """Capitalized multi-word spans then quoted spans, deduplicated in order."""
    terms = [m.group(0) for m in _CAPITALIZED_SPAN_RE.finditer(text)]
    terms.extend(m.group(1).strip() for m in _QUOTED_RE.finditer(text))
    return list(dict.fromkeys(t for t in terms if t))


def _contains_term(haystack_lower: str, term: str) -> bool:
    needle = term.strip().lower()
    if not needle:
        return False
    return re.search(r"\b" + re.escape(needle) + r"\b", haystack_lower) is not None


class DependencyGraph:
    """Directed clause graph with Kahn ordering and Tarjan cycle search."""

    def __init__(self):
        self._adjacency: dict[str, list[str]] = {}
        self._reverse: dict[str, list[str]] = {}
        self._metadata: dict[str, dict] = {}
        self._kinds: dict[tuple[str, str], DependencyKind] = {}

    def add_clause(self, clause_id: str, metadata: dict | None = None) -> None:
        if clause_id in self._adjacency:
            return
        self._adjacency[clause_id] = []
        self._reverse[clause_id] = []
        self._metadata[clause_id] = metadata or {}

    def add_dependency(self, from_id: str, to_id: str, kind: DependencyKind) -> bool:
        """Add from_id -> to_id; returns False for self edges and duplicates."""
        if from_id == to_id:
            return False
        self.add_clause(from_id)
        self.add_clause(to_id)
        if (from_id, to_id) in self._kinds:
            return False
        self._adjacency[from_id].append(to_id)
        self._reverse[to_id].append(from_id)
        self._kinds[(from_id, to_id)] = kind
        return True

    @property
    def vertex_count(self) -> int:
        return len(self._adjacency)

    @property
    def edge_count(self) -> int:
        return len(self._kinds)

    def vertices(self) -> list[str]:
        return list(self._adjacency)

    def edges(self) -> list[dict]:
        return [
            {"from": src, "to": dst, "kind": kind.value}
            for (src, dst), kind in self._kinds.items()
        ]

    def topological_sort(self) -> list[str] | None:
        """Kahn's algorithm; None when the graph has a cycle."""
        in_degree = {v: len(self._reverse[v]) for v in self._adjacency}
        queue = deque(v for v, deg in in_degree.items() if deg == 0)
        order = []
        while queue:
            v = queue.popleft()
            order.append(v)
            for w in self._adjacency[v]:
                in_degree[w] -= 1
                if in_degree[w] == 0:
                    queue.append(w)
        if len(order) != len(self._adjacency):
            return None
        return order

    def find_cycles(self) -> list[list[str]]:
        """Strongly connected components of size > 1 (iterative Tarjan)."""
        index_of: dict[str, int] = {}
        low: dict[str, int] = {}
        on_stack: set[str] = set()
        stack: list[str] = []
        components: list[list[str]] = []
        counter = 0

        for root in self._adjacency:
            if root in index_of:
                continue
            index_of[root] = low[root] = counter
            counter += 1
            stack.append(root)
            on_stack.add(root)
            work = [(root, iter(self._adjacency[root]))]

            while work:
                v, successors = work[-1]
                descended = False
                for w in successors:
                    if w not in index_of:
                        index_of[w] = low[w] = counter
                        counter += 1
                        stack.append(w)
                        on_stack.add(w)
                        work.append((w, iter(self._adjacency[w])))
                        descended = True
                        break
                    if w in on_stack:
                        low[v] = min(low[v], index_of[w])
                if descended:
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[v])
                if low[v] == index_of[v]:
                    component = []
                    while True:
                        w = stack.pop()
                        on_stack.discard(w)
                        component.append(w)
                        if w == v:
                            break
                    if len(component) > 1:
                        component.reverse()
                        components.append(component)

        return components

    def stats(self) -> dict:
        v, e = self.vertex_count, self.edge_count
        return {
            "vertices": v,
            "edges": e,
            "density": e / (v * (v - 1)) if v > 1 else 0.0,
            "avg_out_degree": e / v if v > 0 else 0.0,
        }

    def to_dot(self) -> str:
        """GraphViz description: node declarations, then edge declarations."""
        lines = [
            "digraph ClauseDependencies {",
            "  rankdir=LR;",
            "  node [shape=box, style=rounded];",
            "",
        ]
        for clause_id in self._adjacency:
            label = self._metadata[clause_id].get("label", clause_id)
            lines.append(f'  "{_dot_escape(clause_id)}" [label="{_dot_escape(label)}"];')
        if self._kinds:
            lines.append("")
        for (src, dst), kind in self._kinds.items():
            lines.append(f'  "{_dot_escape(src)}" -> "{_dot_escape(dst)}" [label="{kind.value}"];')
        lines.append("}")
        return "\n".join(lines) + "\n"


def _dot_escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def _dot_label(text: str) -> str:
    if len(text) <= _DOT_LABEL_LENGTH:
        return text
    return text[:_DOT_LABEL_LENGTH] + "..."


def _detect_dependency(source: ClauseRecord, target: ClauseRecord) -> DependencyKind | None:
    """First matching dependency kind of source on target, if any."""
    source_lower = source.text.lower()

    if target.section_number:
        wanted = target.section_number.lower()
        if any(m.group(1).lower() == wanted for m in _REFERENCE_RE.finditer(source.text)):
            return DependencyKind.CROSS_REFERENCE

    if any(_contains_term(source_lower, term) for term in target.defined_terms):
        return DependencyKind.DEFINITION

    has_temporal = _TEMPORAL_RE.search(source.text) is not None
    has_conditional = _CONDITIONAL_RE.search(source.text) is not None
    if has_temporal or has_conditional:
        key_terms = extract_key_terms(target.text)
        shares_term = any(_contains_term(source_lower, term) for term in key_terms)
        if shares_term and has_temporal:
            return DependencyKind.TEMPORAL
        if shares_term and has_conditional:
            return DependencyKind.CONDITIONAL

    return None


def build_clause_dependency_graph(clauses: list) -> DependencyGraph:
    """Vertices for every clause, edges for every detected dependency. O(n^2 · m)."""
    records = coerce_clause_records(clauses)
    graph = DependencyGraph()
    for record in records:
        graph.add_clause(record.id, {
            "text": record.text,
            "label": _dot_label(record.text),
            "section_number": record.section_number,
        })

    for source in records:
        for target in records:
            if source.id == target.id:
                continue
            kind = _detect_dependency(source, target)
            if kind is not None:
                graph.add_dependency(source.id, target.id, kind)

    return graph
