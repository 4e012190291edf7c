import json

import pytest

from faqih.services.dataset import DatasetError, find_fatwa, get_fatwas, load_fatwas

_RECORD = {
    "id": "x-1",
    "title": "عنوان",
    "question": "سؤال",
    "medical_context": "",
    "ruling": "حكم",
    "verdict": "PERMITTED",
    "source": "مصدر",
    "category": "GENERAL",
    "tags": [],
}


def _write(tmp_path, records):
    path = tmp_path / "fatwas.json"
    path.write_text(json.dumps(records, ensure_ascii=False), encoding="utf-8")
    return path


def test_bundled_dataset_loads():
    fatwas = get_fatwas()
    assert len(fatwas) == 10
    assert len({f.id for f in fatwas}) == len(fatwas)
    assert {f.verdict for f in fatwas} == {"PERMITTED", "FORBIDDEN", "CONDITIONAL"}


def test_load_valid_file(tmp_path):
    fatwas = load_fatwas(_write(tmp_path, [_RECORD, {**_RECORD, "id": "x-2"}]))
    assert [f.id for f in fatwas] == ["x-1", "x-2"]


def test_missing_file(tmp_path):
    with pytest.raises(DatasetError, match="not found"):
        load_fatwas(tmp_path / "missing.json")


def test_duplicate_ids_rejected(tmp_path):
    with pytest.raises(DatasetError, match="Duplicate"):
        load_fatwas(_write(tmp_path, [_RECORD, _RECORD]))


@pytest.mark.parametrize("field, value", [("verdict", "MAKRUH"), ("category", "DENTAL")])
def test_invalid_enum_values_rejected(tmp_path, field, value):
    with pytest.raises(DatasetError):
        load_fatwas(_write(tmp_path, [{**_RECORD, field: value}]))


def test_invalid_json(tmp_path):
    path = tmp_path / "fatwas.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(DatasetError):
        load_fatwas(path)


def test_find_fatwa():
    fatwas = get_fatwas()
    assert find_fatwa(fatwas, "icu-001").title.startswith("رفع")
    assert find_fatwa(fatwas, "nope") is None


def test_bundled_queries():
    from faqih.services.selector import select_top_matches

    fatwas = get_fatwas()
    assert [f.id for f in select_top_matches("dialysis", fatwas)] == ["internal-001"]
    assert select_top_matches("اجهاض", fatwas)[0].id == "obgyn-001"
    assert select_top_matches("rhinoplasty", fatwas)[0].id == "surgery-001"
