"""Medical and juristic synonym table plus query expansion.

Keys are written in normalized form (see ``arabic_text.normalize``) because
lookup is an exact match on already-normalized query tokens.
"""

from faqih.services.arabic_text import normalize

# Canonical token -> alternates (Arabic synonyms, transliterations, English)
SYNONYMS: dict[str, list[str]] = {
    # Pregnancy and reproduction
    "اجهاض": ["اسقاط", "انهاء حمل", "اسقاط جنين", "abortion", "terminate"],
    "اسقاط": ["اجهاض", "انهاء حمل", "abortion"],
    "حمل": ["حامل", "حاملة", "pregnancy", "pregnant"],
    "جنين": ["fetus", "foetus", "embryo"],
    "تلقيح": ["اخصاب", "اطفال الانابيب", "حقن مجهري", "ivf", "icsi", "artificial insemination"],
    "اخصاب": ["تلقيح", "ivf", "اطفال الانابيب", "fertilization"],
    "بويضه": ["بويضات", "egg", "oocyte", "ovum"],
    # Organs and transplantation
    "كلوي": ["كلي", "كلى", "كلية", "renal", "kidney", "kidneys"],
    "كلي": ["كلية", "كلوي", "renal", "kidney"],
    "عضو": ["اعضاء", "زراعة اعضاء", "نقل اعضاء", "transplant", "organ"],
    "اعضاء": ["عضو", "زراعة اعضاء", "نقل اعضاء", "organs"],
    "غسيل": ["غسيل كلى", "dialysis", "تصفية", "hemodialysis"],
    # Surgery and gender
    "تجميل": ["جراحة تجميلية", "بوتوكس", "فيلر", "rhinoplasty", "plastic surgery", "cosmetic"],
    "خنثي": ["تصحيح الجنس", "تصحيح نوع الجنس", "intersex", "hermaphrodite"],
    "تحويل": ["تغيير الجنس", "تحول جنسي", "gender reassignment", "sex change"],
    # Infection and vaccines
    "لقاح": ["تطعيم", "vaccine", "كورونا", "covid"],
    "كورونا": ["covid", "كوفيد", "كوفيد19", "فيروس كورونا", "coronavirus"],
    "كحول": ["معقم", "alcohol", "ethanol"],
    # Worship
    "صيام": ["صوم", "ramadan", "fasting", "سيام"],
    "صوم": ["صيام", "fasting", "ramadan"],
    # End of life
    "موت": ["وفاة", "death", "دماغي", "brain death"],
    "دماغي": ["موت دماغي", "brain death", "brain stem"],
    "اعاشه": ["انعاش", "resuscitation", "life support", "ventilator"],
    "انعاش": ["اعاشة", "resuscitation", "cpr"],
    "سرطان": ["ورم", "cancer", "malignancy", "tumour"],
    # Juristic principles and verdicts
    "ضرر": ["harm", "damage", "injury"],
    "ضروره": ["necessity", "medical emergency"],
    "حرام": ["محرم", "forbidden", "unlawful", "haram"],
    "حلال": ["جائز", "permitted", "lawful", "halal"],
    "جايز": ["حلال", "permitted", "allowed", "lawful"],
    "مشروط": ["conditional", "بشروط", "conditions"],
}


def expand(tokens: list[str]) -> set[str]:
    """Return ``tokens`` plus every synonym of every token found in the table.

    Each synonym is added both case-folded as written and as its
    normalized tokens, so multi-word and English alternates are covered.
    """
    expanded = set(tokens)
    for token in tokens:
        for syn in SYNONYMS.get(token, []):
            expanded.add(syn.casefold())
            expanded.update(normalize(syn))
    return expanded


def synonym_terms(tokens: list[str]) -> set[str]:
    """Expansion terms that are not already among ``tokens``."""
    return expand(tokens) - set(tokens)
