"""Shared utilities for reelnotes."""

import re

from rapidfuzz import fuzz

from .models import Annotation, UserMovie


def normalize_title(title: str) -> str:
    """Normalize a title for comparison.

    Args:
        title: The title to normalize

    Returns:
        Lowercased title without leading articles, punctuation or extra spaces
    """
    if not title:
        return ""

    normalized = title.lower()

    for prefix in ("the ", "a ", "an "):
        if normalized.startswith(prefix):
            normalized = normalized[len(prefix) :]

    normalized = re.sub(r"[^\w\s]", "", normalized)
    normalized = re.sub(r"\s+", " ", normalized).strip()

    return normalized


def titles_match(title1: str | None, title2: str | None, threshold: int = 85) -> bool:
    """Check if two titles match using fuzzy comparison.

    Uses a combination of:
    - Exact normalized match (fast path)
    - Substring match for queries like "wire" against "The Wire"
    - Fuzzy matching via rapidfuzz for typos and word order

    Args:
        title1: First title
        title2: Second title
        threshold: Minimum fuzzy match score (0-100) for non-exact matches

    Returns:
        True if titles are considered a match
    """
    if not title1 or not title2:
        return False

    norm1 = normalize_title(title1)
    norm2 = normalize_title(title2)

    if norm1 == norm2:
        return True

    if norm1 and norm2 and (norm1 in norm2 or norm2 in norm1):
        return True

    return fuzz.token_set_ratio(norm1, norm2) >= threshold


def annotation_title(annotation: Annotation) -> str:
    if isinstance(annotation, UserMovie):
        return annotation.movie.title
    return annotation.series.name


def annotation_kind(annotation: Annotation) -> str:
    return "movie" if isinstance(annotation, UserMovie) else "series"


def find_annotations(annotations: list[Annotation], query: str) -> list[Annotation]:
    """Annotations whose title matches ``query``; exact title matches come first."""
    wanted = normalize_title(query)
    exact = [a for a in annotations if normalize_title(annotation_title(a)) == wanted]
    exact_ids = {id(a) for a in exact}
    fuzzy = [a for a in annotations if id(a) not in exact_ids and titles_match(annotation_title(a), query)]
    return exact + fuzzy


def format_rating(rating: float) -> str:
    """Format a 0-10 rating as five stars followed by the number.

    Args:
        rating: Rating value (0-10)

    Returns:
        Star string like "[****.] 8.0"
    """
    stars = max(0, min(5, round(rating / 2)))
    return "[" + "*" * stars + "." * (5 - stars) + f"] {rating:.1f}"
