"""Trigger vocabularies for the counselor.

Every topic is a disjunction of lowercase triggers.  A trigger listed under
``phrases`` matches anywhere in the message; one listed under ``words`` only
matches as a whole word, which keeps fragments like "ex" or "no" from firing
inside "exam" or "know".
"""

from __future__ import annotations

import re
from typing import Iterable

from soulsync.counselor.models import Topic


class TriggerSet:
    """A set of triggers; :meth:`matches` is true if any of them occurs."""

    __slots__ = ("phrases", "words", "_word_re")

    def __init__(self, phrases: Iterable[str] = (), words: Iterable[str] = ()) -> None:
        self.phrases: tuple[str, ...] = tuple(p.lower() for p in phrases)
        self.words: tuple[str, ...] = tuple(w.lower() for w in words)
        self._word_re: re.Pattern[str] | None = None
        if self.words:
            alternation = "|".join(re.escape(w) for w in self.words)
            self._word_re = re.compile(rf"\b(?:{alternation})\b")

    def matches(self, lower: str) -> bool:
        """Return True if *lower* (already lowercased) contains a trigger."""
        for phrase in self.phrases:
            if phrase in lower:
                return True
        return self._word_re is not None and self._word_re.search(lower) is not None

    def __repr__(self) -> str:
        return f"TriggerSet(phrases={len(self.phrases)}, words={self.words!r})"


# ---------------------------------------------------------------------------
# Safety
# ---------------------------------------------------------------------------

CRISIS = TriggerSet(
    phrases=[
        "suicide", "hurt myself", "end life", "end my life", "kill myself",
        "no reason to live",
    ],
    words=["die"],
)

THANKS = TriggerSet(phrases=["thank"])


# ---------------------------------------------------------------------------
# Topic classification (priority order is TOPIC_PRIORITY, not dict order)
# ---------------------------------------------------------------------------

TOPIC_PRIORITY: tuple[Topic, ...] = (
    Topic.career,
    Topic.relationships,
    Topic.academics,
    Topic.friendship,
    Topic.mental_health,
    Topic.family,
    Topic.goals,
    Topic.hobbies,
)

TOPIC_TRIGGERS: dict[Topic, TriggerSet] = {
    Topic.career: TriggerSet(
        phrases=[
            "career", "future", "job", "placement", "earning", "salary",
            "kya karun", "kya kare", "confused about future", "goal", "laxya",
            "ban na chahta", "ban na chahti", "kya banu", "kya bane",
            "tension about future", "scope", "options", "field", "stream",
            "which course", "kaunsa subject", "branch", "upsc", "ssc", "bank",
            "government job", "private job", "internship", "fresher",
            "experienced", "switch job", "resign",
        ],
        words=["aim"],
    ),
    Topic.relationships: TriggerSet(
        phrases=[
            "love", "crush", "like a girl", "like a boy", "girl in my class",
            "boy in my class", "propose", "confess", "relationship",
            "girlfriend", "boyfriend", "breakup", "single", "dating", "marry",
            "shaadi", "wedding", "husband", "wife", "partner", "soulmate",
            "true love", "first love", "love at first sight", "affair",
            "flirt", "fling", "casual", "serious relationship",
        ],
        words=["gf", "bf", "ex", "date"],
    ),
    Topic.academics: TriggerSet(
        phrases=[
            "exam", "test", "paper", "study", "padhai", "marks", "percentage",
            "fail", "result", "grade", "cgpa", "supply", "arrear", "teacher",
            "professor", "subject", "assignment", "project", "homework",
            "class", "lecture", "college", "school", "university", "degree",
            "semester", "internal", "external", "practical", "viva",
            "presentation", "attendance", "shortage", "detain", "promotion",
            "exam fear", "exam pressure",
        ],
        words=["pass", "back"],
    ),
    Topic.friendship: TriggerSet(
        phrases=[
            "friend", "lonely", "alone", "group", "gang", "social", "party",
            "gathering", "meet", "instagram", "social media", "follow",
            "popular", "ignore", "left out", "include", "invite", "cold",
            "best friend", "bff", "yaar", "dost", "friendship",
            "fight with friend", "argument with friend", "trust", "betray",
            "fake friends", "true friends",
        ],
    ),
    Topic.mental_health: TriggerSet(
        phrases=[
            "stress", "anxiety", "nervous", "tension", "pressure", "overthink",
            "worry", "scared", "fear", "depress", "sad", "cry",
            "mental health", "therapy", "help", "suicide", "hurt",
            "worthless", "hopeless", "empty", "panic", "attack", "breathing",
            "tired", "exhausted", "thak", "sleep", "insomnia", "neend",
            "relax", "calm", "peace",
        ],
        words=["pain"],
    ),
    Topic.family: TriggerSet(
        phrases=[
            "parents", "mother", "father", "maa", "papa", "dad", "sibling",
            "brother", "sister", "bhai", "behen", "family", "ghar", "home",
            "expectation", "pressure from home", "maa baap", "parental",
            "house", "hostel", "room", "roommate", "flat",
        ],
        words=["mom", "pg", "rent"],
    ),
    Topic.goals: TriggerSet(
        phrases=[
            "goal", "dream", "aspire", "plan", "motivation", "inspire",
            "success", "achieve", "want to become", "skill", "learn",
            "improve", "grow", "develop", "better version", "habit",
            "routine", "discipline", "focus", "concentrate", "procrastinate",
            "productivity", "time management", "schedule",
        ],
        words=["aim"],
    ),
    Topic.hobbies: TriggerSet(
        phrases=[
            "hobby", "interest", "passion", "music", "song", "movie", "film",
            "web series", "netflix", "game", "gaming", "cricket", "football",
            "sport", "dance", "singing", "draw", "write", "book", "reading",
            "travel", "trip", "weekend", "timepass", "bike", "drive",
            "photography", "camera", "photo", "cooking", "food", "baking",
            "painting", "craft", "yoga", "meditation", "gym", "workout",
            "fitness", "health",
        ],
        words=["sing", "read", "car", "art"],
    ),
}


# ---------------------------------------------------------------------------
# Sub-condition flags, per topic
# ---------------------------------------------------------------------------

SUBCASE_FLAGS: dict[Topic, dict[str, TriggerSet]] = {
    Topic.career: {
        "confused": TriggerSet(["confuse", "samajh nahi aata", "pata nahi", "sure nahi"]),
        "job": TriggerSet(["job", "placement", "salary", "earning", "internship"]),
        "govt": TriggerSet(["government", "upsc", "ssc", "bank", "civil services"]),
        "switch": TriggerSet(["switch", "change job", "resign", "quit"]),
        "stream": TriggerSet([
            "stream", "branch", "course", "subject",
            "scope", "future", "opportunity",
        ]),
    },
    Topic.relationships: {
        "crush": TriggerSet(["crush", "like a", "pasand hai", "acha lagta"]),
        "propose": TriggerSet(["propose", "confess", "tell her", "tell him", "batau"]),
        "scared": TriggerSet(
            ["scared", "fear", "nervous", "shake", "hichak", "hesitate"], words=["dar"]
        ),
        "rejected": TriggerSet(
            ["reject", "refuse", "inkar", "thukra"], words=["mana", "no", "na"]
        ),
        "accepted": TriggerSet(["yes", "haan", "accept", "mana liya", "han kar di", "agreed"]),
        "breakup": TriggerSet(
            ["breakup", "chhod", "separate", "alag", "chhut", "khatam"], words=["tut"]
        ),
        "ex": TriggerSet(["puran", "old relationship", "bhul"], words=["ex"]),
        "long_distance": TriggerSet(
            ["long distance", "door", "ldr", "different city"], words=["far"]
        ),
        "cheating": TriggerSet([
            "cheat", "dhokha", "third", "someone else", "other person", "bewafa",
        ]),
        "confused": TriggerSet(["confuse", "samajh nahi", "pata nahi", "suggest", "advice"]),
        "parents": TriggerSet(["parents", "maa baap", "ghar wale", "family", "home"]),
        "first_love": TriggerSet(["first love", "pehla pyaar", "first time"]),
        "marriage": TriggerSet(["marry", "shaadi", "wedding", "future together"]),
    },
    Topic.academics: {
        "exam_stress": TriggerSet(["exam", "test", "paper", "stress", "pressure", "tension"]),
        "fail": TriggerSet(["fail", "supply", "arrear", "fear", "pass nahi"], words=["back"]),
        "result": TriggerSet(["result", "percentage", "grade", "cgpa", "marksheet"]),
        "assignment": TriggerSet(["assignment", "project", "homework", "deadline", "submission"]),
        "attendance": TriggerSet(["attendance", "shortage", "detain", "present"]),
        "practical": TriggerSet(["practical", "viva", "experiment"], words=["lab"]),
    },
    Topic.friendship: {
        "lonely": TriggerSet(["lonely", "alone", "akela", "single", "tanha"]),
        "left_out": TriggerSet(["left out", "ignore", "cold", "include", "shamil"]),
        "social_media": TriggerSet(["instagram", "social media", "follow", "like", "post"]),
        "friendship_issue": TriggerSet(["fight", "argument", "trust", "betray", "fake"]),
        "best_friend": TriggerSet(["best friend", "bff", "close friend"]),
    },
    Topic.mental_health: {
        "depressed": TriggerSet(["depress", "hopeless", "worthless", "empty", "meaningless"]),
        "anxiety": TriggerSet(["anxiety", "overthink", "panic", "nervous", "heart racing"]),
        "stress": TriggerSet(["stress", "tension", "pressure", "overwhelm"]),
        "tired": TriggerSet(["tired", "exhausted", "thak", "sleep", "insomnia"]),
    },
    Topic.family: {
        "expectation": TriggerSet([
            "expectation", "pressure from home", "comparison", "tulna", "hope",
        ]),
        "fight": TriggerSet(["fight", "argument", "ladai", "disagree", "dispute"]),
        "missing": TriggerSet(["miss", "yaad", "away", "ghar yaad"]),
        "hostel": TriggerSet(["hostel", "roommate", "flat"], words=["pg"]),
    },
    Topic.goals: {
        "motivation": TriggerSet(["motivation", "inspire", "discipline"]),
        "dream": TriggerSet(["dream", "want to become", "aspire"]),
        "asks_motivation": TriggerSet(["motivation", "inspire"]),
        "asks_dream": TriggerSet(["dream", "want to become"]),
        "improve": TriggerSet(["improve", "skill", "learn"]),
        "procrastinate": TriggerSet(["procrastinate", "delay", "focus", "concentrate"]),
    },
    Topic.hobbies: {
        "movie": TriggerSet(["movie", "film", "web series", "netflix", "prime", "hotstar"]),
        "game": TriggerSet(["game", "gaming", "cricket", "football", "sport", "player"]),
        "music": TriggerSet(
            ["music", "song", "singing", "guitar", "piano", "instrument"], words=["sing"]
        ),
        "travel": TriggerSet(["travel", "trip", "weekend", "holiday", "vacation"]),
        "art": TriggerSet(["draw", "paint", "craft", "sketch"], words=["art"]),
        "food": TriggerSet(["cook", "food", "bake", "recipe", "kitchen"]),
        "fitness": TriggerSet(["gym", "workout", "yoga", "fitness", "exercise"]),
    },
}


def classify_topic(text: str) -> Topic | None:
    """Return the first topic (in priority order) whose triggers occur in *text*."""
    lower = text.lower()
    for topic in TOPIC_PRIORITY:
        if TOPIC_TRIGGERS[topic].matches(lower):
            return topic
    return None


def is_crisis(text: str) -> bool:
    """True if *text* contains a self-harm trigger."""
    return CRISIS.matches(text.lower())
