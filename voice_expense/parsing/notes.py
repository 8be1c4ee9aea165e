"""Notes Extractor: free-text remarks attached to an expense."""

import re
from typing import Optional

MAX_NOTES_LENGTH = 500

# Explicit "note:" wins over the looser "for ..." phrase
_NOTE_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\bnote:\s*(.+)$", re.IGNORECASE | re.DOTALL),
    re.compile(r"\bfor\s+(.+)$", re.IGNORECASE | re.DOTALL),
)

_TRAILING_PUNCTUATION = ".,;:!? \t\n"


def extract_notes(transcript: str) -> Optional[str]:
    """
    Extract notes from a transcript.

    "I paid 20 for tea with Sam" -> "tea with Sam".
    Returns None when neither pattern matches or the note is empty.
    """
    if not transcript:
        return None

    for pattern in _NOTE_PATTERNS:
        match = pattern.search(transcript)
        if match is None:
            continue
        note = " ".join(match.group(1).split()).rstrip(_TRAILING_PUNCTUATION)
        if note:
            return note[:MAX_NOTES_LENGTH].rstrip()
    return None
