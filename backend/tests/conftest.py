import pytest

from faqih.models.schemas import Fatwa


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_fatwa():
    """Factory for fatwas with neutral defaults that match nothing."""
    counter = iter(range(1, 1000))

    def _make(**overrides) -> Fatwa:
        fields = {
            "id": f"f-{next(counter)}",
            "title": "عنوان",
            "question": "سؤال",
            "medical_context": "",
            "ruling": "",
            "verdict": "PERMITTED",
            "source": "مصدر",
            "category": "GENERAL",
            "tags": [],
        }
        fields.update(overrides)
        return Fatwa(**fields)

    return _make
