"""Fuzzy matching and ranking of candidate strings against a query."""

from __future__ import annotations

import heapq
import string
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_BOUNDARY_CHARS = frozenset("/\\_-.:")


@dataclass
class FuzzyMatch:
    """A candidate that matched a query, with its score and matched positions."""

    index: int
    score: int
    matched_indices: List[int] = field(default_factory=list)
    ranges: List[Tuple[int, int]] = field(default_factory=list)


def match_candidates(query: str, candidates: Sequence[str]) -> List[FuzzyMatch]:
    """Match every candidate against ``query``, best score first.

    An empty query matches every candidate with a score of zero.
    """
    query = query.strip()
    matches: List[FuzzyMatch] = []
    for index, candidate in enumerate(candidates):
        if not query:
            matches.append(FuzzyMatch(index=index, score=0))
            continue
        indices = _match_indices(query, candidate)
        if indices is None:
            continue
        matches.append(
            FuzzyMatch(
                index=index,
                score=_score_match(candidate, indices, query),
                matched_indices=indices,
                ranges=_indices_to_ranges(indices),
            )
        )
    matches.sort(key=lambda m: -m.score)
    return matches


def match_candidates_limited(
    query: str, candidates: Sequence[str], limit: int
) -> List[FuzzyMatch]:
    """Like :func:`match_candidates`, keeping at most ``limit`` results."""
    if limit == 0:
        return []
    return match_candidates(query, candidates)[:limit]


def match_candidates_top(
    query: str, candidates: Sequence[str], limit: int
) -> List[FuzzyMatch]:
    """Return the ``limit`` best matches without sorting every match."""
    if limit == 0:
        return []

    query = query.strip()
    heap: List[Tuple[int, int]] = []
    matches: List[FuzzyMatch] = []

    for index, candidate in enumerate(candidates):
        if not query:
            indices: List[int] = []
        else:
            found = _match_indices(query, candidate)
            if found is None:
                continue
            indices = found

        score = _score_match(candidate, indices, query)
        matches.append(
            FuzzyMatch(
                index=index,
                score=score,
                matched_indices=indices,
                ranges=_indices_to_ranges(indices),
            )
        )
        entry = (score, len(matches) - 1)

        if len(heap) < limit:
            heapq.heappush(heap, entry)
        else:
            min_score, min_idx = heap[0]
            if score > min_score or (
                score == min_score and index < matches[min_idx].index
            ):
                heapq.heapreplace(heap, entry)

    out = [matches[i] for _, i in heap]
    out.sort(key=lambda m: (-m.score, m.index))
    return out


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _match_indices(query: str, candidate: str) -> Optional[List[int]]:
    q = _ascii_lower(query)
    c = _ascii_lower(candidate)
    if not q:
        return []

    start = c.find(q)
    if start >= 0:
        return list(range(start, start + len(q)))

    indices: List[int] = []
    qpos = 0
    for cpos, ch in enumerate(c):
        if qpos >= len(q):
            break
        if ch == q[qpos]:
            indices.append(cpos)
            qpos += 1
    return indices if qpos == len(q) else None


def _score_match(candidate: str, matched: Sequence[int], query: str) -> int:
    if not matched:
        return 0

    score = len(matched) * 10
    query = query.strip()
    candidate_lower = _ascii_lower(candidate)
    query_lower = _ascii_lower(query)

    if len(matched) == len(query):
        score += 20
    if matched[0] == 0:
        score += 30

    consecutive_run = 1
    for prev, cur in zip(matched, matched[1:]):
        if cur == prev + 1:
            consecutive_run += 1
            score += 8
        else:
            score -= max(cur - (prev + 1), 0) * 2
    if consecutive_run == len(matched):
        score += 40

    for idx in matched:
        if idx == 0:
            score += 15
            continue
        before = candidate[idx - 1]
        if _is_boundary(before):
            score += 12
        if candidate[idx].isupper() and before.islower():
            score += 10

    if query_lower:
        if candidate_lower.endswith(query_lower):
            score += 80
            if query_lower.startswith("."):
                score += 40
        if _contains_whole_segment(candidate_lower, query_lower):
            score += 60

    score -= len(candidate) // 2
    return score


def _indices_to_ranges(indices: Sequence[int]) -> List[Tuple[int, int]]:
    if not indices:
        return []
    ranges: List[Tuple[int, int]] = []
    start = prev = indices[0]
    for idx in indices[1:]:
        if idx == prev + 1:
            prev = idx
            continue
        ranges.append((start, prev + 1))
        start = prev = idx
    ranges.append((start, prev + 1))
    return ranges


def _is_boundary(ch: str) -> bool:
    return ch.isspace() or ch in _BOUNDARY_CHARS


def _contains_whole_segment(hay: str, needle: str) -> bool:
    if not needle:
        return False
    start = hay.find(needle)
    while start >= 0:
        end = start + len(needle)
        before_ok = start == 0 or _is_boundary(hay[start - 1])
        after_ok = end >= len(hay) or _is_boundary(hay[end])
        if before_ok and after_ok:
            return True
        start = hay.find(needle, end)
    return False