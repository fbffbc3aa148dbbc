"""Word normalization and input coercion for the layout engine."""

from __future__ import annotations

import re
import unicodedata
from typing import Any, List, Mapping, Sequence, Union

from ..core.exceptions import InvalidWordListError
from ..core.models import WordEntry

# Letters NFKD does not decompose into an ASCII base.
SPECIAL_LETTERS = {
    "ß": "SS",
    "Æ": "AE",
    "æ": "AE",
    "Ø": "O",
    "ø": "O",
    "Œ": "OE",
    "œ": "OE",
    "Ł": "L",
    "ł": "L",
}

WORD_RE = re.compile(r"[^A-Za-z]")
VALID_WORD_RE = re.compile(r"^[A-Z]{2,}$")

RawEntry = Union[WordEntry, Mapping[str, Any]]


def clean_word(text: str) -> str:
    """Return a normalized uppercase ASCII representation of ``text``.

    Diacritics are folded onto their base letter and anything that is not a
    letter (spaces, hyphens, digits, punctuation) is dropped.
    """

    if not text:
        return ""
    transformed = []
    for char in text:
        if char in SPECIAL_LETTERS:
            transformed.append(SPECIAL_LETTERS[char])
            continue
        decomposed = unicodedata.normalize("NFKD", char)
        transformed.append("".join(c for c in decomposed if not unicodedata.combining(c)))
    ascii_word = WORD_RE.sub("", "".join(transformed))
    return ascii_word.upper()


def coerce_entry(raw: RawEntry) -> WordEntry:
    """Build a :class:`WordEntry` from an entry or a ``{word, clue}`` mapping.

    Words are upper-cased but otherwise taken as given; use
    :func:`clean_word` first when the text may contain spaces or accents.
    """

    if isinstance(raw, WordEntry):
        word, clue, main_index = raw.word, raw.clue, raw.main_word_index
    elif isinstance(raw, Mapping):
        if "word" not in raw:
            raise InvalidWordListError(f"Entry is missing a 'word' field: {raw!r}")
        word = raw["word"]
        clue = raw.get("clue") or ""
        main_index = raw.get("main_word_index", raw.get("mainWordIndex"))
    else:
        raise InvalidWordListError(f"Unsupported word entry type: {type(raw).__name__}")

    if not isinstance(word, str):
        raise InvalidWordListError(f"Word must be a string, got {word!r}")
    word = word.strip().upper()
    if not VALID_WORD_RE.match(word):
        raise InvalidWordListError(
            f"Invalid word {word!r}: expected at least 2 letters A-Z with no spaces or punctuation"
        )
    if main_index is not None and not isinstance(main_index, int):
        raise InvalidWordListError(f"main_word_index for {word!r} must be an integer")
    return WordEntry(word=word, clue=str(clue), main_word_index=main_index)


def coerce_entries(words: Sequence[RawEntry], *, min_words: int = 2) -> List[WordEntry]:
    """Validate and convert the caller's word list before any search runs."""

    if words is None:
        raise InvalidWordListError("Word list is required")
    entries = [coerce_entry(raw) for raw in words]
    if len(entries) < min_words:
        raise InvalidWordListError(
            f"At least {min_words} words are required, got {len(entries)}"
        )
    return entries


__all__ = ["clean_word", "coerce_entry", "coerce_entries", "SPECIAL_LETTERS"]
