"""
Per-call scoring state and the measurements the heuristics share.

A ScoringContext holds the Score Map and the Candidate Set for exactly one
extraction run. It is created by the transcoder for every run and passed
explicitly to each stage, so a Transcoder instance carries no mutable
extraction state and can be reused (or shared) freely.
"""

from bs4 import Tag

from .dom import get_class, get_id, get_inner_text
from .patterns import CLASS_WEIGHT_STEP, NEGATIVE_WEIGHT, POSITIVE_WEIGHT


def get_segments_count(s: str, ch: str = ",") -> int:
    """Number of pieces `s` splits into on `ch`: "" → 1, "a,b,c" → 3."""
    return s.count(ch) + 1


class ScoringContext:
    """Score Map, Candidate Set and text options for one extraction run."""

    def __init__(self, dont_normalize_spaces: bool = False, dont_weight_classes: bool = False):
        self.dont_normalize_spaces = dont_normalize_spaces
        self.dont_weight_classes = dont_weight_classes
        # Keyed by id(); the element is kept alongside so its id can't be
        # recycled by a new node while this context is alive.
        self._scores: dict[int, tuple[Tag, float]] = {}
        self._candidates: dict[int, Tag] = {}

    # --- Score Map ---

    def get_score(self, element: Tag) -> float:
        entry = self._scores.get(id(element))
        return entry[1] if entry else 0.0

    def set_score(self, element: Tag, score: float) -> None:
        self._scores[id(element)] = (element, score)

    def add_points(self, element: Tag, points: float) -> None:
        self.set_score(element, self.get_score(element) + points)

    def has_score(self, element: Tag) -> bool:
        return id(element) in self._scores

    # --- Candidate Set (insertion-ordered) ---

    def add_candidate(self, element: Tag) -> None:
        self._candidates.setdefault(id(element), element)

    @property
    def candidates(self) -> list:
        return list(self._candidates.values())

    # --- Measurements ---

    def inner_text(self, node) -> str:
        return get_inner_text(node, self.dont_normalize_spaces)

    def links_density(self, element: Tag) -> float:
        """Share of the element's text that sits inside anchors, in [0, 1]."""
        text_length = len(self.inner_text(element))
        if text_length == 0:
            return 0.0

        links_length = sum(len(self.inner_text(anchor)) for anchor in element.find_all("a"))
        return min(1.0, links_length / text_length)

    def class_weight(self, element: Tag) -> int:
        """
        Class/id weight: ±25 for a positive/negative keyword in the class,
        and again for the id. Always 0 when class weighting is disabled.
        """
        if self.dont_weight_classes:
            return 0

        weight = 0
        for value in (get_class(element), get_id(element)):
            if not value:
                continue
            if NEGATIVE_WEIGHT.search(value):
                weight -= CLASS_WEIGHT_STEP
            if POSITIVE_WEIGHT.search(value):
                weight += CLASS_WEIGHT_STEP
        return weight
