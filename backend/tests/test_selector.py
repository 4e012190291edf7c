from faqih.services.selector import rank, select_top_matches


def _scorer(scores):
    return lambda query, fatwa: scores[fatwa.id]


def test_threshold_is_strictly_above_three(make_fatwa):
    fatwas = [make_fatwa(id="a"), make_fatwa(id="b"), make_fatwa(id="c")]
    scorer = _scorer({"a": 3, "b": 3.01, "c": 0})
    assert [f.id for f in select_top_matches("q", fatwas, scorer=scorer)] == ["b"]


def test_sorted_by_descending_score(make_fatwa):
    fatwas = [make_fatwa(id="a"), make_fatwa(id="b"), make_fatwa(id="c")]
    scorer = _scorer({"a": 5, "b": 9, "c": 7})
    assert [f.id for f in select_top_matches("q", fatwas, scorer=scorer)] == ["b", "c", "a"]


def test_ties_keep_dataset_order(make_fatwa):
    fatwas = [make_fatwa(id=i) for i in ("a", "b", "c", "d")]
    scorer = _scorer({"a": 5, "b": 8, "c": 5, "d": 8})
    assert [f.id for f in select_top_matches("q", fatwas, scorer=scorer)] == ["b", "d", "a", "c"]


def test_at_most_five_results(make_fatwa):
    fatwas = [make_fatwa(id=str(i)) for i in range(10)]
    result = select_top_matches("q", fatwas, scorer=lambda q, f: 10)
    assert [f.id for f in result] == ["0", "1", "2", "3", "4"]


def test_rank_returns_scores(make_fatwa):
    fatwas = [make_fatwa(id="a"), make_fatwa(id="b")]
    hits = rank("q", fatwas, scorer=_scorer({"a": 4, "b": 12}))
    assert [(f.id, s) for f, s in hits] == [("b", 12), ("a", 4)]


def test_no_matches(make_fatwa):
    fatwas = [make_fatwa(medical_context="kidney transplant")]
    assert select_top_matches("vaccine", fatwas) == []


def test_dialysis_end_to_end(make_fatwa):
    a = make_fatwa(id="A", medical_context="kidney dialysis")
    b = make_fatwa(id="B", medical_context="renal care", tags=["dialysis", "renal"])
    c = make_fatwa(id="C", medical_context="rhinoplasty nose job", tags=["cosmetic"])
    assert [f.id for f in select_top_matches("dialysis", [c, b, a])] == ["A", "B"]


def test_arabic_abortion_query_selects_record(make_fatwa):
    target = make_fatwa(id="abortion", medical_context="إجهاض الجنين")
    other = make_fatwa(id="other", medical_context="انعاش")
    assert [f.id for f in select_top_matches("اجهاض", [other, target])] == ["abortion"]


def test_ruling_only_hit_is_below_threshold(make_fatwa):
    fatwa = make_fatwa(ruling="يحرم استعمال الخنزير")
    assert select_top_matches("الخنزير", [fatwa]) == []
