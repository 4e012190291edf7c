"""Per-fatwa relevance scoring.

A query is routed to one of two independent strategies depending on its
script: plain Latin-letter queries are matched against the raw medical
keywords and tags, everything else goes through Arabic normalization and
is matched token by token against the normalized fields.

Scores are additive heuristics. 0 means no evidence of relevance.
"""

import re
from enum import Enum
from typing import Protocol

from faqih.models.schemas import Fatwa
from faqih.services.arabic_text import normalize, normalize_set
from faqih.services.similarity import similarity
from faqih.services.synonyms import synonym_terms

_LATIN_QUERY = re.compile(r"[a-z\s]+")
_CONTEXT_SPLIT = re.compile(r"[\s,()/-]+")


class Script(str, Enum):
    LATIN = "latin"
    ARABIC = "arabic"


def classify(query: str) -> Script:
    """Latin if the trimmed, case-folded query is only a-z letters and whitespace."""
    if _LATIN_QUERY.fullmatch(query.strip().casefold()):
        return Script.LATIN
    return Script.ARABIC


class FatwaScorer(Protocol):
    def score(self, query: str, fatwa: Fatwa) -> float: ...


class LatinScorer:
    """Substring matching against ``medical_context`` and tags, with a fuzzy fallback."""

    CONTEXT_PHRASE = 20
    TAGS_PHRASE = 15
    CONTEXT_WORD = 12
    TAGS_WORD = 10
    FUZZY_THRESHOLD = 0.78
    MIN_WORD_LEN = 3

    def score(self, query: str, fatwa: Fatwa) -> float:
        q = query.strip().casefold()
        context = fatwa.medical_context.casefold()
        tags = " ".join(fatwa.tags).casefold()

        total = 0.0
        if q in context:
            total += self.CONTEXT_PHRASE
        if q in tags:
            total += self.TAGS_PHRASE

        words = [w for w in q.split() if len(w) >= self.MIN_WORD_LEN]
        if not words:
            # Short or trivial queries are rejected outright
            return 0.0

        direct_hits = 0
        for word in words:
            if word in context:
                total += self.CONTEXT_WORD
                direct_hits += 1
            elif word in tags:
                total += self.TAGS_WORD
                direct_hits += 1

        if direct_hits == 0:
            context_words = _CONTEXT_SPLIT.split(context)
            for word in words:
                for context_word in context_words:
                    if len(context_word) < self.MIN_WORD_LEN:
                        continue
                    sim = similarity(word, context_word)
                    if sim > self.FUZZY_THRESHOLD:
                        total += 3 + 2 * sim

        return total


class ArabicScorer:
    """Normalized token matching over context, title, tags and question.

    Direct token hits are checked field by field in priority order, then
    synonym terms at half weight. Only when neither produced a hit do the
    fuzzy fallbacks run, and only when everything scored zero is the
    ruling text consulted.
    """

    # (field, weight) in priority order; first match wins per token
    FIELD_WEIGHTS = (
        ("medical_context", 14),
        ("title", 11),
        ("tags", 9),
        ("question", 7),
    )
    SYNONYM_FACTOR = 0.5
    LATIN_SYNONYM_CONTEXT = 6
    LATIN_SYNONYM_TAGS = 5
    FUZZY_THRESHOLD = 0.80
    RULING_HIT = 2
    MIN_TOKEN_LEN = 2

    def score(self, query: str, fatwa: Fatwa) -> float:
        tokens = [t for t in normalize(query) if len(t) >= self.MIN_TOKEN_LEN]
        if not tokens:
            return 0.0

        tags_text = " ".join(fatwa.tags)
        context_tokens = normalize(fatwa.medical_context)
        tag_tokens = normalize(tags_text)
        fields = {
            "medical_context": frozenset(context_tokens),
            "title": normalize_set(fatwa.title),
            "tags": frozenset(tag_tokens),
            "question": normalize_set(fatwa.question),
        }

        total = 0.0
        direct_hits = 0
        for token in tokens:
            weight = self._field_weight(token, fields)
            if weight:
                total += weight
                direct_hits += 1

        raw_context = fatwa.medical_context.casefold()
        raw_tags = tags_text.casefold()
        for term in sorted(synonym_terms(tokens)):
            if len(term) < self.MIN_TOKEN_LEN:
                continue
            if term.isascii():
                if term in raw_context:
                    weight = self.LATIN_SYNONYM_CONTEXT
                elif term in raw_tags:
                    weight = self.LATIN_SYNONYM_TAGS
                else:
                    weight = 0
            else:
                weight = self._field_weight(term, fields) * self.SYNONYM_FACTOR
            if weight:
                total += weight
                direct_hits += 1

        if direct_hits == 0:
            for token in tokens:
                for context_token in context_tokens:
                    if len(context_token) <= 2:
                        continue
                    sim = similarity(token, context_token)
                    if sim > self.FUZZY_THRESHOLD:
                        total += 3 + 2 * sim
                for tag_token in tag_tokens:
                    if len(tag_token) <= 2:
                        continue
                    sim = similarity(token, tag_token)
                    if sim > self.FUZZY_THRESHOLD:
                        total += 2 + 1.5 * sim

        if total == 0:
            ruling = normalize_set(fatwa.ruling)
            for token in tokens:
                if token in ruling:
                    total += self.RULING_HIT

        return total

    def _field_weight(self, token: str, fields: dict[str, frozenset[str]]) -> float:
        for name, weight in self.FIELD_WEIGHTS:
            if token in fields[name]:
                return weight
        return 0


_SCORERS: dict[Script, FatwaScorer] = {
    Script.LATIN: LatinScorer(),
    Script.ARABIC: ArabicScorer(),
}


def score(query: str, fatwa: Fatwa) -> float:
    """Relevance of ``fatwa`` to ``query``; higher is better, 0 means unrelated."""
    return _SCORERS[classify(query)].score(query, fatwa)
