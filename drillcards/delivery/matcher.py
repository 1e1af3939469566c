"""
Tolerant Answer Matching.

Judges whether a typed response matches a canonical answer written in the
deck's compact romanization, where one canonical letter may be spelled
several ways by the learner:
- x  -> kh, x, h
- q  -> gh, q, g
- A  -> aa, a
- '  -> may be typed or left out entirely

Also renders the casual spelling of an answer for display
(`transliterate`). Transliteration is display-only and never used for
matching.
"""

from __future__ import annotations

import re

# =============================================================================
# Substitution Table
# =============================================================================

# (canonical pattern, response equivalents). Order matters: patterns are
# tried top to bottom and equivalents left to right; the first equivalent
# that fits ends the scan.
SUBSTITUTIONS: list[tuple[str, tuple[str, ...]]] = [
    ("'", ("'", "`", "")),
    ("ow", ("ow", "ou", "o")),
    ("ey", ("ey", "ei", "ay")),
    ("o", ("o", "u")),
    ("A", ("aa", "a")),
    ("c", ("ch", "c")),
    ("S", ("sh", "s")),
    ("Z", ("zh", "j")),
    ("x", ("kh", "x", "h")),
    ("q", ("gh", "q", "g")),
    ("i", ("ee", "i")),
    ("u", ("oo", "u")),
]


def matches(response: str, canonical: str) -> bool:
    """
    Check a response against one canonical answer.

    Exact equality wins outright, then equality of the lower-cased response.
    Otherwise the lower-cased response is aligned greedily against the
    canonical text using SUBSTITUTIONS, falling back to literal
    one-character matches. Both strings must be consumed completely.

    Args:
        response: What the learner typed
        canonical: One acceptable answer from the deck

    Returns:
        True if the response is accepted
    """
    if response == canonical:
        return True

    lowered = response.lower()
    if lowered == canonical:
        return True

    r = 0  # response cursor
    c = 0  # canonical cursor

    while c < len(canonical):
        start = c

        for pattern, equivalents in SUBSTITUTIONS:
            if not canonical.startswith(pattern, c):
                continue
            for equivalent in equivalents:
                if lowered.startswith(equivalent, r):
                    r += len(equivalent)
                    c += len(pattern)
                    break
            if c != start:
                break

        if c == start and r < len(lowered) and lowered[r] == canonical[c]:
            r += 1
            c += 1

        if c == start:
            # Stalled
            break

    return r == len(lowered) and c == len(canonical)


# =============================================================================
# Transliteration
# =============================================================================

# vowel, hiatus "i", vowel -> vowel, glide "y", vowel
_HIATUS = re.compile(r"([aeiouA])i([aeiouA])")
_GLIDE = r"\1y\2"

TRANSLITERATIONS: dict[str, str] = {
    "A": "aa",
    "c": "ch",
    "S": "sh",
    "Z": "zh",
    "x": "kh",
    "q": "gh",
    "i": "ee",
    "u": "oo",
}


def transliterate(text: str) -> str:
    """Render the casual spelling of a romanized answer, e.g. qitab -> gheetab."""
    glided = _HIATUS.sub(_GLIDE, text, count=1)
    return "".join(TRANSLITERATIONS.get(ch, ch) for ch in glided)
