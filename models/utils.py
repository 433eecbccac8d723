"""Utility functions for working with v2 API resources.

This module contains helper functions used across the application:
- resource_name: Display name of a resource with a synthetic fallback
- find_service_rid: Locate a member service reference (e.g. grouped_light) on a room
- similarity_score: Canonical fuzzy string matching algorithm
- find_similar_strings: Find similar strings using fuzzy matching
"""


def resource_name(resource: dict, kind: str) -> str:
    """Return the resource's metadata name, or '<Kind> <id>' when it has none.

    Args:
        resource: v2 API resource dict
        kind: Resource kind used for the fallback (e.g. 'light' -> 'Light 1234')
    """
    name = (resource.get('metadata') or {}).get('name')
    if name:
        return name
    return f"{kind.replace('_', ' ').capitalize()} {resource.get('id')}"


def find_service_rid(resource: dict, rtype: str) -> str | None:
    """Return the rid of the first service of the given type, or None."""
    for service in resource.get('services') or []:
        if service.get('rtype') == rtype and service.get('rid'):
            return service['rid']
    return None


def similarity_score(s1: str, s2: str) -> int:
    """Calculate similarity score between two strings.

    Args:
        s1: First string to compare
        s2: Second string to compare

    Returns:
        Similarity score:
        - 100: Exact match (case-insensitive)
        - 80: Prefix match
        - 60: Substring match
        - 0-50: Character sequence match (proportional to matching characters)
        - 0: No match
    """
    s1_lower = s1.lower()
    s2_lower = s2.lower()

    if s1_lower == s2_lower:
        return 100

    if s2_lower.startswith(s1_lower) or s1_lower.startswith(s2_lower):
        return 80

    if s1_lower in s2_lower or s2_lower in s1_lower:
        return 60

    # Character sequence matching
    matches = 0
    j = 0
    for char in s1_lower:
        while j < len(s2_lower):
            if s2_lower[j] == char:
                matches += 1
                j += 1
                break
            j += 1

    if matches > 0:
        score = int((matches / max(len(s1_lower), len(s2_lower))) * 50)
        return score if score > 20 else 0

    return 0


def find_similar_strings(target: str, candidates: list[str], limit: int = 3) -> list[str]:
    """Find similar strings, most similar first.

    Args:
        target: The string to match against
        candidates: List of candidate strings to search
        limit: Maximum number of results to return
    """
    scored = [(candidate, similarity_score(target, candidate)) for candidate in candidates]
    filtered = [(c, s) for c, s in scored if s > 0]
    sorted_matches = sorted(filtered, key=lambda x: x[1], reverse=True)
    return [c for c, s in sorted_matches[:limit]]
