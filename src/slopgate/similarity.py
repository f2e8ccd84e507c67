"""
String similarity used to compare PR titles, bodies and code.

Short strings are compared by normalized edit distance; long strings fall
back to word-set Jaccard overlap so the cost stays near-linear.
"""

# Above this length the O(n*m) edit distance is replaced by Jaccard
MAX_EDIT_DISTANCE_LENGTH = 500


def similarity(a: str, b: str) -> float:
    """
    Return how similar two strings are, from 0.0 (different) to 1.0 (identical).

    Symmetric in its arguments.
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    if len(a) > MAX_EDIT_DISTANCE_LENGTH or len(b) > MAX_EDIT_DISTANCE_LENGTH:
        return jaccard_similarity(a, b)

    return 1.0 - levenshtein_distance(a, b) / max(len(a), len(b))


def levenshtein_distance(a: str, b: str) -> int:
    """Unit-cost edit distance (insert, delete, substitute)."""
    if len(a) < len(b):
        a, b = b, a

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost,
            ))
        previous = current

    return previous[-1]


def jaccard_similarity(a: str, b: str) -> float:
    """Word-set overlap |A & B| / |A | B|; 0.0 when both are empty."""
    words_a = set(a.split())
    words_b = set(b.split())

    union = words_a | words_b
    if not union:
        return 0.0

    return len(words_a & words_b) / len(union)
