"""
Tiered similarity scoring of a query against one material.

Every name and alias of the material is compared with the query and the
highest tier score wins:

    exact equality       1.0
    example phrase       0.9
    word containment     0.7 + 0.2 * length ratio
    token overlap        0.85 * jaccard
    tag containment      0.5
    edit distance        0.6 * similarity   (similarity >= 0.7 only)
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from rapidfuzz.distance import Levenshtein

from ..models import Material, round_score
from .tokenizer import normalize, tokenize

EXACT_SCORE = 1.0
EXAMPLE_SCORE = 0.9
CONTAINMENT_BASE = 0.7
CONTAINMENT_SPAN = 0.2
TOKEN_WEIGHT = 0.85
TAG_SCORE = 0.5
EDIT_WEIGHT = 0.6
EDIT_MIN_SIMILARITY = 0.7


@dataclass(frozen=True)
class ScoredMatch:
    """Score of one material plus a trace of how it was obtained."""
    material: Material
    score: float
    tier: str
    matched_text: Optional[str] = None
    exact_name: bool = False

    def describe(self) -> str:
        via = f' on "{self.matched_text}"' if self.matched_text else ""
        return f'"{self.material.name}" ({self.tier}{via}, score: {self.score})'


@dataclass(frozen=True)
class PreparedQuery:
    """Query normalized once and reused across every material."""
    text: str
    tokens: frozenset
    phrase: str = ""

    @classmethod
    def from_text(cls, query: str) -> "PreparedQuery":
        tokens = tokenize(query)
        return cls(text=normalize(query), tokens=frozenset(tokens), phrase=" ".join(tokens))


def contains_words(longer: str, shorter: str) -> bool:
    """True when `shorter` occurs in `longer` on word boundaries."""
    return f" {shorter} " in f" {longer} "


def containment_score(query: PreparedQuery, candidate: str) -> float:
    """
    Containment of one string in the other, compared as depluralized
    token phrases so "bottle" is found in "Plastic Bottles".

    The length ratio is taken on the normalized texts.
    """
    text = normalize(candidate)
    phrase = " ".join(tokenize(candidate))
    if not query.phrase or not phrase or query.phrase == phrase:
        return 0.0
    if not (contains_words(query.phrase, phrase) or contains_words(phrase, query.phrase)):
        return 0.0
    ratio = min(len(query.text), len(text)) / max(len(query.text), len(text))
    return CONTAINMENT_BASE + CONTAINMENT_SPAN * ratio


def token_score(query_tokens: frozenset, candidate: str) -> float:
    candidate_tokens = set(tokenize(candidate))
    if not query_tokens or not candidate_tokens:
        return 0.0
    union = query_tokens | candidate_tokens
    return TOKEN_WEIGHT * len(query_tokens & candidate_tokens) / len(union)


def edit_score(a: str, b: str) -> float:
    if not a or not b:
        return 0.0
    similarity = Levenshtein.normalized_similarity(a, b)
    if similarity < EDIT_MIN_SIMILARITY:
        return 0.0
    return EDIT_WEIGHT * similarity


def score_material(material: Material, query: PreparedQuery) -> ScoredMatch:
    """Score a prepared query against a material's name, aliases, examples and tags."""
    if not query.text:
        return ScoredMatch(material=material, score=0.0, tier="none")

    name = normalize(material.name)
    if name == query.text:
        return ScoredMatch(
            material=material,
            score=EXACT_SCORE,
            tier="exact-name",
            matched_text=material.name,
            exact_name=True,
        )

    for alias in material.aliases:
        if normalize(alias) == query.text:
            return ScoredMatch(
                material=material,
                score=EXACT_SCORE,
                tier="exact-alias",
                matched_text=alias,
            )

    best = ScoredMatch(material=material, score=0.0, tier="none")

    def consider(score: float, tier: str, text: str) -> None:
        nonlocal best
        rounded = round_score(min(max(score, 0.0), 1.0))
        if rounded > best.score:
            best = ScoredMatch(material=material, score=rounded, tier=tier, matched_text=text)

    for example in material.examples:
        if normalize(example) == query.text:
            consider(EXAMPLE_SCORE, "example", example)

    all_names: Sequence[str] = (material.name,) + tuple(material.aliases)
    for candidate in all_names:
        consider(containment_score(query, candidate), "contains", candidate)

    for candidate in all_names:
        consider(token_score(query.tokens, candidate), "token", candidate)

    for tag in material.tags:
        normalized_tag = normalize(tag)
        if normalized_tag and (
            contains_words(query.text, normalized_tag)
            or contains_words(normalized_tag, query.text)
        ):
            consider(TAG_SCORE, "tag", tag)

    for candidate in all_names:
        consider(edit_score(query.text, normalize(candidate)), "edit-distance", candidate)

    return best
