"""
Mock Completions

Offline stand-in for the text-completion service, used when no API key is
configured. Returns role-appropriate canned session summaries in the
language of the input.
"""

import re
from enum import Enum
from typing import Optional

from insight_engine.llm.client import GenerationResult
from insight_engine.schemas.insights import GenerationMode
from insight_engine.schemas.session import TherapistRole, require_complete

MOCK_MODEL = "mock-v1"

HEBREW_PATTERN = re.compile(r"[\u0590-\u05FF]")


class Language(str, Enum):
    ENGLISH = "en"
    HEBREW = "he"


def detect_language(*texts: Optional[str]) -> Language:
    """Hebrew if any Hebrew-range character appears in any of the texts."""
    for text in texts:
        if text and HEBREW_PATTERN.search(text):
            return Language.HEBREW
    return Language.ENGLISH


def _summary(title: str, narrative: str, points: list[str], plan: str) -> str:
    bullets = "\n".join(f"- {p}" for p in points)
    return f"**{title}**\n\n{narrative}\n\n{bullets}\n\n{plan}"


MOCK_SUMMARIES: dict[TherapistRole, dict[Language, str]] = require_complete({
    TherapistRole.PSYCHOLOGIST: {
        Language.ENGLISH: _summary(
            "Clinical Session Summary",
            "The patient presented with moderate anxiety symptoms. Negative self-talk and catastrophic thinking were observed, particularly around work-related stressors.",
            [
                "Patient demonstrated insight into anxiety triggers",
                "Grounding techniques practiced successfully in session",
                "Homework from the previous session partially completed",
            ],
            "Plan: continue cognitive restructuring and assign a thought record for anxiety episodes.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש קליני",
            "המטופל/ת הציג/ה סימפטומים של חרדה ברמה בינונית. נצפו שיח עצמי שלילי וחשיבה קטסטרופלית, במיוחד סביב לחצים בעבודה.",
            [
                "המטופל/ת הפגין/ה תובנה לגבי טריגרים לחרדה",
                "תרגול מוצלח של טכניקות הארקה במהלך המפגש",
                "שיעורי הבית מהמפגש הקודם הושלמו חלקית",
            ],
            "תוכנית: המשך עבודה על ארגון מחדש קוגניטיבי ומתן יומן מחשבות למעקב אחר אירועי חרדה.",
        ),
    },
    TherapistRole.PSYCHIATRIST: {
        Language.ENGLISH: _summary(
            "Psychiatric Consultation Summary",
            "Current medication regimen reviewed; the patient reports adherence. Mood has improved since the last adjustment.",
            [
                "Mood euthymic with reactive affect",
                "Thought process linear and goal-directed",
                "No current suicidal or homicidal ideation",
            ],
            "Plan: continue current regimen and follow up in 4 weeks.",
        ),
        Language.HEBREW: _summary(
            "סיכום התייעצות פסיכיאטרית",
            "נסקר משטר התרופות הנוכחי והמטופל/ת מדווח/ת על היענות. מצב הרוח השתפר מאז ההתאמה האחרונה.",
            [
                "מצב רוח אאוטימי עם אפקט תגובתי",
                "תהליך חשיבה ליניארי ומכוון מטרה",
                "אין אידאציה אובדנית או רצחנית נוכחית",
            ],
            "תוכנית: המשך המשטר הנוכחי ומעקב בעוד 4 שבועות.",
        ),
    },
    TherapistRole.SOCIAL_WORKER: {
        Language.ENGLISH: _summary(
            "Social Work Session Summary",
            "Psychosocial assessment addressed the patient's current needs and resources.",
            [
                "Housing stable, no current concerns",
                "Connected to community assistance programs",
                "Moderate family involvement",
            ],
            "Plan: follow up on pending benefit applications and continue care coordination.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש עבודה סוציאלית",
            "הערכה פסיכו-סוציאלית התייחסה לצרכים ולמשאבים הנוכחיים של המטופל/ת.",
            [
                "דיור יציב, אין חששות נוכחיים",
                "חובר/ה לתוכניות סיוע קהילתיות",
                "מעורבות משפחתית בינונית",
            ],
            "תוכנית: מעקב אחר בקשות הזכאות ותיאום טיפול מתמשך.",
        ),
    },
    TherapistRole.OCCUPATIONAL_THERAPIST: {
        Language.ENGLISH: _summary(
            "Occupational Therapy Session Summary",
            "Session focused on daily living skills and sensory regulation strategies.",
            [
                "Improved independence in morning routine",
                "Sensory diet tolerated well",
                "Fine motor tasks completed with minimal cueing",
            ],
            "Plan: introduce workplace adaptations and review the home routine chart.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש ריפוי בעיסוק",
            "המפגש התמקד במיומנויות יומיומיות ובאסטרטגיות לוויסות חושי.",
            [
                "שיפור בעצמאות בשגרת הבוקר",
                "תוכנית חושית נסבלה היטב",
                "משימות מוטוריקה עדינה בוצעו עם הכוונה מינימלית",
            ],
            "תוכנית: הכנסת התאמות בסביבת העבודה ובחינת לוח השגרה בבית.",
        ),
    },
    TherapistRole.SPEECH_THERAPIST: {
        Language.ENGLISH: _summary(
            "Speech-Language Session Summary",
            "Session targeted expressive language and pragmatic communication skills.",
            [
                "Improved turn-taking in structured conversation",
                "Target sounds produced accurately at word level",
                "Caregiver reports increased spontaneous requests",
            ],
            "Plan: progress targets to sentence level and continue home practice.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש קלינאות תקשורת",
            "המפגש התמקד בשפה הבעתית ובמיומנויות תקשורת פרגמטית.",
            [
                "שיפור בחילופי תורות בשיחה מובנית",
                "הפקה מדויקת של צלילי המטרה ברמת המילה",
                "ההורה מדווח/ת על עלייה בבקשות ספונטניות",
            ],
            "תוכנית: התקדמות לרמת המשפט והמשך תרגול בבית.",
        ),
    },
    TherapistRole.PHYSICAL_THERAPIST: {
        Language.ENGLISH: _summary(
            "Physical Therapy Session Summary",
            "Session addressed lower back pain and functional mobility.",
            [
                "Pain reduced from 6/10 to 4/10",
                "Improved lumbar range of motion",
                "Home exercise program performed with good form",
            ],
            "Plan: progress core stabilization exercises and reassess in two weeks.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש פיזיותרפיה",
            "המפגש עסק בכאבי גב תחתון ובניידות תפקודית.",
            [
                "ירידה בכאב מ-6/10 ל-4/10",
                "שיפור בטווח התנועה המותני",
                "תוכנית התרגילים הביתית בוצעה בצורה נכונה",
            ],
            "תוכנית: התקדמות בתרגילי ייצוב ליבה והערכה חוזרת בעוד שבועיים.",
        ),
    },
    TherapistRole.COUNSELOR: {
        Language.ENGLISH: _summary(
            "Counseling Session Summary",
            "The patient explored stress related to a recent life transition and identified existing coping strengths.",
            [
                "Strong therapeutic alliance maintained",
                "Patient identified two new coping strategies",
                "No safety concerns reported",
            ],
            "Plan: continue goal-focused work on the transition and review coping log.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש ייעוץ",
            "המטופל/ת חקר/ה לחץ הקשור למעבר חיים לאחרונה וזיהה/תה כוחות התמודדות קיימים.",
            [
                "נשמרה ברית טיפולית חזקה",
                "המטופל/ת זיהה/תה שתי אסטרטגיות התמודדות חדשות",
                "לא דווחו חששות בטיחותיים",
            ],
            "תוכנית: המשך עבודה ממוקדת מטרה סביב המעבר ובחינת יומן ההתמודדות.",
        ),
    },
    TherapistRole.ART_THERAPIST: {
        Language.ENGLISH: _summary(
            "Art Therapy Session Summary",
            "The patient engaged thoughtfully with materials, showing increased comfort with creative expression.",
            [
                "Chose watercolor and produced a landscape with recurring themes of distance",
                "Verbal processing of the artwork facilitated insight",
                "Affect brightened over the course of the session",
            ],
            "Plan: continue directive work on relational themes.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש טיפול באמנות",
            "המטופל/ת עבד/ה עם החומרים באופן מעמיק והפגין/ה נוחות גוברת בביטוי יצירתי.",
            [
                "בחר/ה בצבעי מים ויצר/ה נוף עם נושאים חוזרים של מרחק",
                "עיבוד מילולי של היצירה אפשר תובנה",
                "האפקט השתפר לאורך המפגש",
            ],
            "תוכנית: המשך עבודה מכוונת סביב נושאים בינאישיים.",
        ),
    },
    TherapistRole.MUSIC_THERAPIST: {
        Language.ENGLISH: _summary(
            "Music Therapy Session Summary",
            "Session used drumming and improvisation to support emotional regulation.",
            [
                "Patient matched and led rhythmic patterns",
                "Improved attention during structured musical tasks",
                "Expressed emotions through lyric writing",
            ],
            "Plan: introduce a calming playlist for use between sessions.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש טיפול במוזיקה",
            "המפגש שילב תיפוף ואלתור לתמיכה בוויסות רגשי.",
            [
                "המטופל/ת התאים/ה והוביל/ה דפוסים קצביים",
                "שיפור בקשב במשימות מוזיקליות מובנות",
                "ביטוי רגשות באמצעות כתיבת מילים לשיר",
            ],
            "תוכנית: בניית רשימת השמעה מרגיעה לשימוש בין המפגשים.",
        ),
    },
    TherapistRole.FAMILY_THERAPIST: {
        Language.ENGLISH: _summary(
            "Family Therapy Session Summary",
            "Session explored communication patterns and conflict cycles within the family system.",
            [
                "Parents identified a recurring pursue-withdraw cycle",
                "Adolescent participated more openly than in prior sessions",
                "Family practiced a structured problem-solving exercise",
            ],
            "Plan: continue enactments and assign a weekly family meeting.",
        ),
        Language.HEBREW: _summary(
            "סיכום מפגש טיפול משפחתי",
            "המפגש חקר דפוסי תקשורת ומעגלי קונפליקט במערכת המשפחתית.",
            [
                "ההורים זיהו מעגל חוזר של רדיפה ונסיגה",
                "המתבגר/ת השתתף/ה בפתיחות רבה יותר מבמפגשים קודמים",
                "המשפחה תרגלה פתרון בעיות מובנה",
            ],
            "תוכנית: המשך עבודה חווייתית וקביעת פגישה משפחתית שבועית.",
        ),
    },
}, TherapistRole)

GENERIC_SUMMARIES: dict[Language, str] = require_complete({
    Language.ENGLISH: _summary(
        "Session Summary",
        "The session reviewed the patient's current concerns and progress toward treatment goals.",
        ["Patient engaged throughout the session", "No safety concerns reported"],
        "Plan: continue the current treatment plan.",
    ),
    Language.HEBREW: _summary(
        "סיכום מפגש",
        "המפגש סקר את הקשיים הנוכחיים של המטופל/ת ואת ההתקדמות לעבר מטרות הטיפול.",
        ["המטופל/ת היה/תה מעורב/ת לאורך המפגש", "לא דווחו חששות בטיחותיים"],
        "תוכנית: המשך תוכנית הטיפול הנוכחית.",
    ),
}, Language)


def generate_mock_completion(
    user_prompt: str,
    role: Optional[TherapistRole] = None,
) -> GenerationResult:
    """Canned summary for the role (or a generic one) in the prompt's language."""
    language = detect_language(user_prompt)
    if role is None:
        text = GENERIC_SUMMARIES[language]
    else:
        text = MOCK_SUMMARIES[role][language]

    return GenerationResult(text=text, mode=GenerationMode.MOCK, model=MOCK_MODEL)
