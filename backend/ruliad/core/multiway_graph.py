"""Multiway Explorer — bounded BFS over repeated rule rewrites.

Invariants:
    - Root node "state_0" holds the original text at depth 0
    - Only nodes with depth < max_depth are expanded
    - Each expanded node gets at most one child per rule, and only when the
      rule matches AND its application changes the text
    - Hence node count <= sum(r**i for i in 0..max_depth), r = rule count
    - Terminal nodes are exactly the nodes without outgoing edges
    - Node ids are "state_<n>" in creation (BFS) order

Design Decisions:
    - A tree, not a DAG: identical texts reached by different rule orders
      stay separate nodes so the bound above is exact per expansion
"""

from collections import deque
from dataclasses import dataclass

from ruliad.core.domain_types import StateId
from ruliad.core.errors import ContractViolationError
from ruliad.core.scoring_constants import MULTIWAY_DEFAULT_MAX_DEPTH
from ruliad.core.transform_rules import (
    TRANSFORMATION_RULES, TransformationRule, apply_rule_once, rule_matches,
)


@dataclass(frozen=True)
class MultiwayNode:
    id: StateId
    text: str
    depth: int
    parent_id: str | None = None
    rule_applied: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "depth": self.depth,
            "parent_id": self.parent_id,
            "rule_applied": self.rule_applied,
        }


class MultiwayGraph:
    """Rewrite tree rooted at the original clause text."""

    ROOT_ID = StateId("state_0")

    def __init__(self, initial_text: str):
        self._nodes: dict[str, MultiwayNode] = {
            self.ROOT_ID: MultiwayNode(id=self.ROOT_ID, text=initial_text, depth=0),
        }
        self._edges: dict[str, list[str]] = {}

    @property
    def root(self) -> MultiwayNode:
        return self._nodes[self.ROOT_ID]

    @property
    def nodes(self) -> list[MultiwayNode]:
        return list(self._nodes.values())

    @property
    def state_count(self) -> int:
        return len(self._nodes)

    def get_node(self, node_id: str) -> MultiwayNode:
        return self._nodes[node_id]

    def children(self, node_id: str) -> list[str]:
        return list(self._edges.get(node_id, []))

    def add_state(self, parent_id: str, text: str, rule_label: str) -> StateId:
        """Attach a child below parent_id and return its id."""
        if parent_id not in self._nodes:
            raise ContractViolationError(f"unknown parent state {parent_id!r}", "MultiwayGraph")
        node_id = StateId(f"state_{len(self._nodes)}")
        parent = self._nodes[parent_id]
        self._nodes[node_id] = MultiwayNode(
            id=node_id, text=text, depth=parent.depth + 1,
            parent_id=parent_id, rule_applied=rule_label,
        )
        self._edges.setdefault(parent_id, []).append(node_id)
        return node_id

    def terminal_states(self) -> list[str]:
        return [nid for nid in self._nodes if not self._edges.get(nid)]

    def get_path(self, node_id: str) -> list[MultiwayNode]:
        """Nodes from the root down to node_id (inclusive)."""
        path = []
        current: str | None = node_id
        while current is not None:
            node = self._nodes[current]
            path.append(node)
            current = node.parent_id
        path.reverse()
        return path

    def max_depth_reached(self) -> int:
        return max(n.depth for n in self._nodes.values())

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self._nodes.values()],
            "edges": [
                {"from": src, "to": dst, "rule": self._nodes[dst].rule_applied}
                for src, dsts in self._edges.items()
                for dst in dsts
            ],
            "terminal_states": self.terminal_states(),
        }

    def summary(self, max_depth: int) -> dict:
        terminals = self.terminal_states()
        return {
            "state_count": self.state_count,
            "terminal_states": terminals,
            "terminal_count": len(terminals),
            "max_depth": max_depth,
            "depth_reached": self.max_depth_reached(),
        }


def multiway_node_bound(rule_count: int, max_depth: int) -> int:
    """Upper bound on generated nodes: 1 + r + r^2 + ... + r^d."""
    return sum(rule_count ** i for i in range(max_depth + 1))


def generate_multiway_graph(
    text: str,
    max_depth: int = MULTIWAY_DEFAULT_MAX_DEPTH,
    rules: tuple[TransformationRule, ...] = TRANSFORMATION_RULES,
) -> MultiwayGraph:
    """Breadth-first rewrite exploration down to max_depth."""
    if max_depth < 0:
        raise ContractViolationError(f"max_depth must be >= 0, got {max_depth}", "generate_multiway_graph")

    graph = MultiwayGraph(text)
    queue = deque([graph.root])

    while queue:
        node = queue.popleft()
        if node.depth >= max_depth:
            continue
        for rule in rules:
            if not rule_matches(rule, node.text):
                continue
            new_text = apply_rule_once(rule, node.text)
            if new_text == node.text:
                continue
            child_id = graph.add_state(node.id, new_text, rule.label)
            queue.append(graph.get_node(child_id))

    return graph
