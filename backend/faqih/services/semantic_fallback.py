"""Best-effort remote semantic lookup, consulted only when local matching finds nothing.

The LLM is given a compact knowledge map (id, keywords, question, title)
and may point at one existing fatwa id. It never produces ruling text.
Any failure (HTTP error, timeout, malformed reply, unknown id) degrades
to "no match".
"""

import asyncio
import json
import logging
import re
from collections.abc import Sequence

import httpx

from faqih.config import settings
from faqih.models.schemas import Fatwa, KnowledgeEntry
from faqih.prompts.semantic_search import SEMANTIC_SEARCH_SYSTEM_PROMPT
from faqih.services.llm import LLMError, call_llm

logger = logging.getLogger(__name__)


def build_knowledge_map(fatwas: Sequence[Fatwa]) -> list[KnowledgeEntry]:
    return [
        KnowledgeEntry(
            id=f.id,
            keywords=f.medical_context,
            question=f.question,
            title=f.title,
        )
        for f in fatwas
    ]


def parse_match_id(raw: str | None) -> str | None:
    """Extract ``matchId`` from the LLM reply.

    Tolerates markdown code fences around the JSON object. An empty or
    missing reply means no match.
    Raises ValueError if no JSON object can be parsed.
    """
    if not isinstance(raw, str) or not raw.strip():
        return None
    text = raw.strip()

    m = re.search(r"```(?:json)?\s*\n?(.*?)```", text, re.DOTALL)
    if m:
        text = m.group(1).strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"LLM reply is not JSON: {text[:100]!r}") from exc

    if not isinstance(data, dict):
        raise ValueError(f"Expected JSON object, got {type(data).__name__}")

    match_id = data.get("matchId")
    if match_id is None:
        return None
    return str(match_id)


class SemanticFallback:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.client = client
        self.timeout = timeout if timeout is not None else settings.semantic_fallback_timeout

    async def find_match(self, query: str, fatwas: Sequence[Fatwa]) -> str | None:
        """Return the id of the single best fatwa for ``query``, or None."""
        knowledge_map = [e.model_dump() for e in build_knowledge_map(fatwas)]
        system_prompt = SEMANTIC_SEARCH_SYSTEM_PROMPT.format(
            knowledge_map=json.dumps(knowledge_map, ensure_ascii=False),
        )

        try:
            raw = await asyncio.wait_for(
                call_llm(
                    system_prompt=system_prompt,
                    user_message=query,
                    max_tokens=100,
                    temperature=0.3,
                    json_mode=True,
                    client=self.client,
                ),
                timeout=self.timeout,
            )
            match_id = parse_match_id(raw)
        except asyncio.TimeoutError:
            logger.warning("Semantic fallback timed out after %.1fs", self.timeout)
            return None
        except (LLMError, httpx.HTTPError, ValueError) as exc:
            logger.warning("Semantic fallback failed, treating as no match: %s", exc)
            return None
        except Exception:
            logger.warning("Semantic fallback raised unexpectedly, treating as no match", exc_info=True)
            return None

        known_ids = {f.id for f in fatwas}
        if match_id is not None and match_id not in known_ids:
            logger.warning("Semantic fallback returned unknown id %r", match_id)
            return None

        logger.info("Semantic fallback matched %r for query %r", match_id, query)
        return match_id


def get_semantic_fallback() -> SemanticFallback | None:
    """The configured fallback, or None when disabled or unconfigured."""
    if not settings.semantic_fallback_enabled or not settings.openrouter_api_key:
        return None
    return SemanticFallback()
