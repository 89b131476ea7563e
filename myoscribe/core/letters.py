"""
MyoScribe Letter Decoding.
==========================

Gesture tokens are buffered into a sequence key ("roll" + "pitch" -> "rollpitch")
and the key is looked up in a fixed alphabet.

The alphabet arrives as a list of (key, letter) pairs rather than a dict so that
duplicated keys are visible. Building a table from entries where one key names
two different letters fails unless the caller says which letter wins.
"""
from collections import OrderedDict
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from myoscribe.core.types import Axis

class AmbiguousLetterError(ValueError):
    """A sequence key maps to several letters and no resolution was given."""

    def __init__(self, key: str, candidates: List[str]):
        self.key = key
        self.candidates = candidates
        super().__init__(
            f"Gesture sequence {key!r} maps to {candidates}; "
            f"add it to LETTER_RESOLUTIONS to choose one."
        )

class GestureSequenceBuffer:
    def __init__(self):
        self.tokens: List[Axis] = []

    def append(self, token: Axis):
        self.tokens.append(token)

    @property
    def key(self) -> str:
        return "".join(t.value for t in self.tokens)

    def clear(self):
        self.tokens.clear()

    def __len__(self):
        return len(self.tokens)

class LetterTable:
    def __init__(self, mapping: Mapping[str, str], fallback: str = " "):
        self._mapping: Dict[str, str] = dict(mapping)
        self.fallback = fallback

    @classmethod
    def from_entries(cls,
                     entries: Iterable[Tuple[str, str]],
                     resolutions: Optional[Mapping[str, str]] = None,
                     fallback: str = " ") -> "LetterTable":
        resolutions = resolutions or {}
        candidates: "OrderedDict[str, List[str]]" = OrderedDict()
        for key, letter in entries:
            bucket = candidates.setdefault(key, [])
            if letter not in bucket:
                bucket.append(letter)

        mapping = {}
        for key, letters in candidates.items():
            if len(letters) == 1:
                mapping[key] = letters[0]
                continue
            if key not in resolutions:
                raise AmbiguousLetterError(key, letters)
            chosen = resolutions[key]
            if chosen not in letters:
                raise ValueError(f"Resolution {chosen!r} for {key!r} is not one of {letters}")
            mapping[key] = chosen
        return cls(mapping, fallback)

    def lookup(self, key: str) -> Tuple[str, bool]:
        """Returns (letter, known). Unknown keys resolve to the fallback letter."""
        if key in self:
            return self._mapping[key], True
        return self.fallback, False

    def __contains__(self, key: str) -> bool:
        return key in self._mapping

    def __len__(self):
        return len(self._mapping)

    def key_for(self, letter: str) -> Optional[str]:
        """Reverse lookup: the gesture sequence that spells `letter`."""
        for key, value in self._mapping.items():
            if value == letter:
                return key
        return None
