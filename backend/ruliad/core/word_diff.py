"""Diff Engine — word-level LCS alignment into an edit script.

Invariants:
    - Input is split on whitespace; segments carry space-joined words
    - equal + delete segments, in order, rebuild the original words
    - equal + insert segments, in order, rebuild the revised words
    - The script is minimal: it keeps a longest common subsequence
    - Adjacent segments never share a kind; within a change, delete precedes insert
    - O(m·n) time and space table (Hirschberg would cut space to O(min(m, n)))
"""

import html
from dataclasses import dataclass

from ruliad.core.domain_types import DiffKind


@dataclass(frozen=True)
class DiffSegment:
    kind: DiffKind
    text: str

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "text": self.text}


def _lcs_suffix_table(a: list[str], b: list[str]) -> list[list[int]]:
    """table[i][j] = LCS length of a[i:] and b[j:]."""
    m, n = len(a), len(b)
    table = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m - 1, -1, -1):
        row, below = table[i], table[i + 1]
        for j in range(n - 1, -1, -1):
            if a[i] == b[j]:
                row[j] = below[j + 1] + 1
            else:
                row[j] = max(below[j], row[j + 1])
    return table


def diff_words(original: str, revised: str) -> list[DiffSegment]:
    """Minimal equal/delete/insert script turning original into revised."""
    a, b = original.split(), revised.split()
    table = _lcs_suffix_table(a, b)

    ops: list[tuple[DiffKind, str]] = []
    i = j = 0
    while i < len(a) and j < len(b):
        if a[i] == b[j]:
            ops.append((DiffKind.EQUAL, a[i]))
            i += 1
            j += 1
        elif table[i + 1][j] >= table[i][j + 1]:
            ops.append((DiffKind.DELETE, a[i]))
            i += 1
        else:
            ops.append((DiffKind.INSERT, b[j]))
            j += 1
    ops.extend((DiffKind.DELETE, w) for w in a[i:])
    ops.extend((DiffKind.INSERT, w) for w in b[j:])

    segments: list[DiffSegment] = []
    pending_kind, pending_words = None, []
    for kind, word in ops:
        if kind != pending_kind and pending_words:
            segments.append(DiffSegment(pending_kind, " ".join(pending_words)))
            pending_words = []
        pending_kind = kind
        pending_words.append(word)
    if pending_words:
        segments.append(DiffSegment(pending_kind, " ".join(pending_words)))
    return segments


def _rebuild(segments: list[DiffSegment], keep: DiffKind) -> str:
    return " ".join(s.text for s in segments if s.kind in (DiffKind.EQUAL, keep))


def reconstruct_original(segments: list[DiffSegment]) -> str:
    return _rebuild(segments, DiffKind.DELETE)


def reconstruct_revised(segments: list[DiffSegment]) -> str:
    return _rebuild(segments, DiffKind.INSERT)


def render_diff_html(segments: list[DiffSegment]) -> str:
    """<del>/<ins> markup with escaped text."""
    parts = []
    for seg in segments:
        text = html.escape(seg.text)
        if seg.kind == DiffKind.DELETE:
            parts.append(f'<del class="diff-del">{text}</del>')
        elif seg.kind == DiffKind.INSERT:
            parts.append(f'<ins class="diff-ins">{text}</ins>')
        else:
            parts.append(text)
    return " ".join(parts)
