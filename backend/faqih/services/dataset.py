"""Static fatwa dataset, loaded once and shared read-only."""

import json
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from faqih.config import settings
from faqih.models.schemas import Fatwa

logger = logging.getLogger(__name__)

_FATWA_LIST = TypeAdapter(list[Fatwa])


class DatasetError(Exception):
    """Raised when the fatwa dataset is missing or malformed."""


def load_fatwas(path: str | Path) -> tuple[Fatwa, ...]:
    """Read and validate the dataset at ``path``.

    Rejects unknown verdicts/categories and duplicate ids.
    """
    path = Path(path)
    if not path.exists():
        raise DatasetError(f"Fatwa dataset not found: {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        fatwas = _FATWA_LIST.validate_python(raw)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise DatasetError(f"Invalid fatwa dataset {path}: {exc}") from exc

    seen: set[str] = set()
    for fatwa in fatwas:
        if fatwa.id in seen:
            raise DatasetError(f"Duplicate fatwa id {fatwa.id!r} in {path}")
        seen.add(fatwa.id)

    logger.info("Loaded %d fatwas from %s", len(fatwas), path)
    return tuple(fatwas)


@lru_cache(maxsize=1)
def get_fatwas() -> tuple[Fatwa, ...]:
    return load_fatwas(settings.dataset_path)


def find_fatwa(fatwas: tuple[Fatwa, ...], fatwa_id: str) -> Fatwa | None:
    for fatwa in fatwas:
        if fatwa.id == fatwa_id:
            return fatwa
    return None
