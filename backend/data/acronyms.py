"""
Hebrew acronyms (ראשי תיבות) common in rabbinic and court rulings.

Keys are written without quote marks; lookups strip ״ ׳ " ' from the query
before matching.
"""

HEBREW_ACRONYMS = {
    # General
    "וכו": ["וכולי", "וכדומה"],
    "וכד": ["וכדומה"],
    "כנל": ["כנזכר לעיל", "כאמור לעיל"],
    "הנל": ["הנזכר לעיל"],
    "עמ": ["עמוד", "עמודים"],
    "סע": ["סעיף"],
    "פס": ["פסוק"],

    # Sources
    "רמבם": ["רבי משה בן מימון", "הרמבם", "משנה תורה"],
    "רשי": ["רבי שלמה יצחקי"],
    "שס": ["ששה סדרים", "תלמוד", "גמרא"],
    "שות": ["שאלות ותשובות"],
    "שוע": ["שולחן ערוך"],
    "אהע": ["אבן העזר"],
    "חומ": ["חושן משפט"],
    "יוד": ["יורה דעה"],
    "אוח": ["אורח חיים"],

    # Legal
    "ביהמש": ["בית המשפט", "בית משפט"],
    "בימש": ["בית משפט"],
    "ביהד": ["בית הדין", "בית דין"],
    "ביד": ["בית דין"],
    "בד": ["בית דין"],
    "בדר": ["בית דין רבני"],
    "ביהדר": ["בית הדין הרבני"],
    "פסד": ["פסק דין"],
    "עוד": ["עורך דין"],
    "בכ": ["בא כוח"],
    "שח": ["שקלים חדשים", "שקל חדש"],

    # Bodies
    "ממ": ["מדינת ישראל"],
    "בטל": ["ביטוח לאומי"],
    "מבל": ["המוסד לביטוח לאומי"],
}
