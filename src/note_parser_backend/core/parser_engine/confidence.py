"""
Confidence Arbitrator

Chooses one winning candidate among the pattern matches of a single field,
and collapses per-field confidences into one document-level confidence.
"""

from typing import Iterable, Optional, Sequence, TypeVar

from .types import Confidence


T = TypeVar("T")


def should_replace(incumbent: Optional[Confidence], challenger: Confidence) -> bool:
    """Decide whether a challenger displaces the current incumbent.

    The challenger wins when there is no incumbent, when it is HIGH and the
    incumbent is not, or when it is MEDIUM and the incumbent is LOW. Equal
    confidence never displaces, so the first-seen candidate is kept.
    """
    if incumbent is None:
        return True
    if challenger is Confidence.HIGH and incumbent is not Confidence.HIGH:
        return True
    if challenger is Confidence.MEDIUM and incumbent is Confidence.LOW:
        return True
    return False


def select_winner(candidates: Iterable[T]) -> Optional[T]:
    """Pick the winning candidate in one greedy pass over evaluation order.

    Each candidate is compared only against the current incumbent. For
    ``[LOW, HIGH, MEDIUM]`` the HIGH candidate wins.

    Args:
        candidates: Objects with a ``confidence`` attribute, in evaluation order

    Returns:
        The winning candidate, or None if there were no candidates
    """
    winner = None
    for candidate in candidates:
        incumbent = winner.confidence if winner is not None else None
        if should_replace(incumbent, candidate.confidence):
            winner = candidate
    return winner


def overall_confidence(confidences: Sequence[Confidence]) -> Confidence:
    """Collapse per-field confidences into one document-level level.

    HIGH when more than half the results are HIGH, else MEDIUM when more
    than half are MEDIUM, else LOW. No results is LOW.
    """
    total = len(confidences)
    if total == 0:
        return Confidence.LOW

    high_count = sum(1 for c in confidences if c is Confidence.HIGH)
    medium_count = sum(1 for c in confidences if c is Confidence.MEDIUM)

    if high_count > total / 2:
        return Confidence.HIGH
    if medium_count > total / 2:
        return Confidence.MEDIUM
    return Confidence.LOW
