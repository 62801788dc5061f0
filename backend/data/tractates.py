"""
Bavli tractate table.

The 37 Bavli tractates plus Shekalim. One entry per tractate: canonical
Hebrew name, English name, last daf, seder, and every spelling users type
for it (abbreviations with ASCII quotes and with geresh/gershayim).

A variant must belong to exactly one tractate.
"""

TRACTATES_DATA = [
    # --------------------------------------------------------------------------
    # SEDER ZERAIM
    # --------------------------------------------------------------------------
    {"name": "ברכות", "name_english": "Berakhot", "max_daf": 64, "seder": "זרעים",
     "variants": ["ברכות", "ברכ'", "ברכ׳", "מס' ברכות", "מסכת ברכות"]},

    # --------------------------------------------------------------------------
    # SEDER MOED
    # --------------------------------------------------------------------------
    {"name": "שבת", "name_english": "Shabbat", "max_daf": 157, "seder": "מועד",
     "variants": ["שבת", "שב'", "שב׳", "מס' שבת", "מסכת שבת"]},
    {"name": "עירובין", "name_english": "Eruvin", "max_daf": 105, "seder": "מועד",
     "variants": ["עירובין", "עירוב'", "עירוב׳", "ערובין", "עירו'", "עירו׳"]},
    {"name": "פסחים", "name_english": "Pesachim", "max_daf": 121, "seder": "מועד",
     "variants": ["פסחים", "פסח'", "פסח׳", "פסחי'", "פסחי׳"]},
    {"name": "שקלים", "name_english": "Shekalim", "max_daf": 22, "seder": "מועד",
     "variants": ["שקלים", "שקל'", "שקל׳", "שקלי'", "שקלי׳"]},
    {"name": "יומא", "name_english": "Yoma", "max_daf": 88, "seder": "מועד",
     "variants": ["יומא", "יומ'", "יומ׳"]},
    {"name": "סוכה", "name_english": "Sukkah", "max_daf": 56, "seder": "מועד",
     "variants": ["סוכה", "סוכ'", "סוכ׳"]},
    {"name": "ביצה", "name_english": "Beitzah", "max_daf": 40, "seder": "מועד",
     "variants": ["ביצה", "ביצ'", "ביצ׳"]},
    {"name": "ראש השנה", "name_english": "Rosh Hashanah", "max_daf": 35, "seder": "מועד",
     "variants": ["ראש השנה", 'ר"ה', "ר״ה", 'רה"ש', "רה״ש", "ר''ה", "ראש-השנה"]},
    {"name": "תענית", "name_english": "Taanit", "max_daf": 31, "seder": "מועד",
     "variants": ["תענית", "תענ'", "תענ׳", "תעני'", "תעני׳"]},
    {"name": "מגילה", "name_english": "Megillah", "max_daf": 32, "seder": "מועד",
     "variants": ["מגילה", "מגיל'", "מגיל׳", "מגי'", "מגי׳"]},
    {"name": "מועד קטן", "name_english": "Moed Katan", "max_daf": 29, "seder": "מועד",
     "variants": ["מועד קטן", 'מו"ק', "מו״ק", 'מ"ק', "מ״ק", 'מוע"ק', "מוע״ק"]},
    {"name": "חגיגה", "name_english": "Chagigah", "max_daf": 27, "seder": "מועד",
     "variants": ["חגיגה", "חגיג'", "חגיג׳", "חגי'", "חגי׳"]},

    # --------------------------------------------------------------------------
    # SEDER NASHIM
    # --------------------------------------------------------------------------
    {"name": "יבמות", "name_english": "Yevamot", "max_daf": 122, "seder": "נשים",
     "variants": ["יבמות", "יבמ'", "יבמ׳", "יבמו'", "יבמו׳"]},
    {"name": "כתובות", "name_english": "Ketubot", "max_daf": 112, "seder": "נשים",
     "variants": ["כתובות", "כתוב'", "כתוב׳", "כתובו'", "כתובו׳"]},
    {"name": "נדרים", "name_english": "Nedarim", "max_daf": 91, "seder": "נשים",
     "variants": ["נדרים", "נדר'", "נדר׳", "נדרי'", "נדרי׳"]},
    {"name": "נזיר", "name_english": "Nazir", "max_daf": 66, "seder": "נשים",
     "variants": ["נזיר", "נזי'", "נזי׳"]},
    {"name": "סוטה", "name_english": "Sotah", "max_daf": 49, "seder": "נשים",
     "variants": ["סוטה", "סוט'", "סוט׳"]},
    {"name": "גיטין", "name_english": "Gittin", "max_daf": 90, "seder": "נשים",
     "variants": ["גיטין", "גיט'", "גיט׳", "גיטי'", "גיטי׳"]},
    {"name": "קידושין", "name_english": "Kiddushin", "max_daf": 82, "seder": "נשים",
     "variants": ["קידושין", "קידוש'", "קידוש׳", "קיד'", "קיד׳", "קידושי'", "קידושי׳"]},

    # --------------------------------------------------------------------------
    # SEDER NEZIKIN
    # --------------------------------------------------------------------------
    {"name": "בבא קמא", "name_english": "Bava Kamma", "max_daf": 119, "seder": "נזיקין",
     "variants": ["בבא קמא", 'ב"ק', "ב״ק", 'בב"ק', "בב״ק", "ב''ק", "בבא-קמא"]},
    {"name": "בבא מציעא", "name_english": "Bava Metzia", "max_daf": 119, "seder": "נזיקין",
     "variants": ["בבא מציעא", 'ב"מ', "ב״מ", 'בב"מ', "בב״מ", "ב''מ", "בבא-מציעא"]},
    {"name": "בבא בתרא", "name_english": "Bava Batra", "max_daf": 176, "seder": "נזיקין",
     "variants": ["בבא בתרא", 'ב"ב', "ב״ב", 'בב"ב', "בב״ב", "ב''ב", "בבא-בתרא"]},
    {"name": "סנהדרין", "name_english": "Sanhedrin", "max_daf": 113, "seder": "נזיקין",
     "variants": ["סנהדרין", "סנהד'", "סנהד׳", "סנה'", "סנה׳", "סנהדרי'", "סנהדרי׳"]},
    {"name": "מכות", "name_english": "Makkot", "max_daf": 24, "seder": "נזיקין",
     "variants": ["מכות", "מכו'", "מכו׳"]},
    {"name": "שבועות", "name_english": "Shevuot", "max_daf": 49, "seder": "נזיקין",
     "variants": ["שבועות", "שבוע'", "שבוע׳", "שבועו'", "שבועו׳"]},
    {"name": "עבודה זרה", "name_english": "Avodah Zarah", "max_daf": 76, "seder": "נזיקין",
     "variants": ["עבודה זרה", 'ע"ז', "ע״ז", 'עבו"ז', "עבו״ז", "ע''ז", "עבודה-זרה"]},
    {"name": "הוריות", "name_english": "Horayot", "max_daf": 14, "seder": "נזיקין",
     "variants": ["הוריות", "הורי'", "הורי׳", "הוריו'", "הוריו׳"]},

    # --------------------------------------------------------------------------
    # SEDER KODASHIM
    # --------------------------------------------------------------------------
    {"name": "זבחים", "name_english": "Zevachim", "max_daf": 120, "seder": "קדשים",
     "variants": ["זבחים", "זבח'", "זבח׳", "זבחי'", "זבחי׳"]},
    {"name": "מנחות", "name_english": "Menachot", "max_daf": 110, "seder": "קדשים",
     "variants": ["מנחות", "מנח'", "מנח׳", "מנחו'", "מנחו׳"]},
    {"name": "חולין", "name_english": "Chullin", "max_daf": 142, "seder": "קדשים",
     "variants": ["חולין", "חול'", "חול׳", "חולי'", "חולי׳"]},
    {"name": "בכורות", "name_english": "Bekhorot", "max_daf": 61, "seder": "קדשים",
     "variants": ["בכורות", "בכור'", "בכור׳", "בכורו'", "בכורו׳"]},
    {"name": "ערכין", "name_english": "Arachin", "max_daf": 34, "seder": "קדשים",
     "variants": ["ערכין", "ערכ'", "ערכ׳", "ערכי'", "ערכי׳"]},
    {"name": "תמורה", "name_english": "Temurah", "max_daf": 34, "seder": "קדשים",
     "variants": ["תמורה", "תמור'", "תמור׳"]},
    {"name": "כריתות", "name_english": "Keritot", "max_daf": 28, "seder": "קדשים",
     "variants": ["כריתות", "כריתו'", "כריתו׳", "כרית'", "כרית׳"]},
    {"name": "מעילה", "name_english": "Meilah", "max_daf": 22, "seder": "קדשים",
     "variants": ["מעילה", "מעיל'", "מעיל׳"]},
    {"name": "תמיד", "name_english": "Tamid", "max_daf": 33, "seder": "קדשים",
     "variants": ["תמיד", "תמי'", "תמי׳"]},

    # --------------------------------------------------------------------------
    # SEDER TAHAROT
    # --------------------------------------------------------------------------
    {"name": "נדה", "name_english": "Niddah", "max_daf": 73, "seder": "טהרות",
     "variants": ["נדה", "נד'", "נד׳"]},
]
