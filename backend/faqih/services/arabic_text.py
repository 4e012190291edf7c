"""Arabic text normalization for lexical matching.

Query text and every fatwa field go through the same ``normalize`` call so
that both sides of a comparison are tokenized identically.
"""

import unicodedata

_TATWEEL = "ـ"

_CHAR_FOLDS = str.maketrans({
    "أ": "ا",
    "إ": "ا",
    "آ": "ا",
    "ٱ": "ا",
    "ى": "ي",
    "ة": "ه",
})


def _is_arabic(c: str) -> bool:
    return "؀" <= c <= "ۿ"


def _strip_diacritics(text: str) -> str:
    """Remove Arabic tashkeel, Quranic annotation marks and tatweel."""
    return "".join(
        c for c in text
        if c != _TATWEEL and not (_is_arabic(c) and unicodedata.category(c) == "Mn")
    )


def _keep(c: str) -> bool:
    if c.isspace() or c in "0123456789":
        return True
    if not _is_arabic(c):
        return False
    # Arabic letters and Arabic-Indic digits; punctuation such as "،" and "؟" is dropped
    return unicodedata.category(c)[0] == "L" or unicodedata.category(c) == "Nd"


def normalize(text: str) -> list[str]:
    """Canonicalize ``text`` into a list of comparable word tokens.

    Case-folds, decomposes (NFKD), strips diacritics and tatweel, folds
    alef variants to bare alef, alef maksura to yeh and teh marbuta to
    heh, then blanks out anything that is not an Arabic letter, a digit or
    whitespace. Token order and duplicates are preserved.
    """
    if not text:
        return []

    text = unicodedata.normalize("NFKD", text.casefold())
    text = _strip_diacritics(text)
    text = text.translate(_CHAR_FOLDS)
    text = "".join(c if _keep(c) else " " for c in text)
    return text.split()


def normalize_set(text: str) -> frozenset[str]:
    """Normalized tokens of ``text`` as a set, for membership checks."""
    return frozenset(normalize(text))
