"""Rank the bundled fatwas for a query and print the matches with their scores.

Useful for checking how a query is classified and scored without running
the server.

Usage (from project root):
    python scripts/search_fatwas.py "اجهاض"
    python scripts/search_fatwas.py dialysis
"""

import logging
import sys
from pathlib import Path

# Add backend to path so we can import faqih modules
backend_dir = Path(__file__).resolve().parent.parent / "backend"
sys.path.insert(0, str(backend_dir))

from faqih.services.arabic_text import normalize  # noqa: E402
from faqih.services.dataset import get_fatwas  # noqa: E402
from faqih.services.ranker import classify  # noqa: E402
from faqih.services.selector import rank  # noqa: E402
from faqih.services.session import reply_text  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s", force=True)
logger = logging.getLogger(__name__)


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    query = " ".join(sys.argv[1:])
    fatwas = get_fatwas()

    print(f"Query: {query!r} ({classify(query).value})")
    print(f"Tokens: {normalize(query)}")

    hits = rank(query, fatwas)
    print(reply_text(len(hits)))
    for i, (fatwa, score) in enumerate(hits, start=1):
        print(f"  {i}. [{fatwa.id}] {fatwa.title}  score={score:.2f}  verdict={fatwa.verdict}")


if __name__ == "__main__":
    main()
