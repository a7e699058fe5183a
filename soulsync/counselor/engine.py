"""Reply selection engine.

Selection is a pure function of ``(text, mood, persona)``:

1. crisis triggers win outright;
2. the message is classified into at most one topic (fixed priority);
3. inside a topic, a low or high mood selects that arm of branches,
   otherwise the neutral arm is used;
4. the first branch in the arm whose flags are all present wins; every arm
   ends with an unconditional branch;
5. with no topic, the reply depends on mood alone.

The branch tables below reference template keys in ``data/templates.yaml``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from loguru import logger

from soulsync.counselor.models import ChatMood, Persona, Reply, Topic
from soulsync.counselor.templates import (
    MOOD_SECTION,
    TemplateError,
    TemplateTable,
    get_table,
)
from soulsync.counselor.triggers import (
    SUBCASE_FLAGS,
    THANKS,
    classify_topic,
    is_crisis,
)
from soulsync.log import snippet


@dataclass(frozen=True)
class Branch:
    """A template key guarded by flags that must all be present."""

    key: str
    flags: tuple[str, ...] = ()

    def applies(self, present: set[str]) -> bool:
        return all(flag in present for flag in self.flags)


def _b(key: str, *flags: str) -> Branch:
    return Branch(key, flags)


@dataclass(frozen=True)
class TopicRule:
    """Ordered branch lists for one topic.

    ``high`` is ``None`` for topics that have no happy-mood variants; those
    fall through to the neutral arm.
    """

    topic: Topic
    low: tuple[Branch, ...]
    high: Optional[tuple[Branch, ...]]
    neutral: tuple[Branch, ...]

    def arm_for(self, mood: Optional[ChatMood]) -> tuple[Branch, ...]:
        if mood is not None and mood.is_low:
            return self.low
        if mood is not None and mood.is_high and self.high is not None:
            return self.high
        return self.neutral

    def arms(self) -> Iterator[tuple[Branch, ...]]:
        yield self.low
        if self.high is not None:
            yield self.high
        yield self.neutral


# ---------------------------------------------------------------------------
# Branch tables
# ---------------------------------------------------------------------------

TOPIC_RULES: dict[Topic, TopicRule] = {
    Topic.career: TopicRule(
        Topic.career,
        low=(_b("low"),),
        high=(_b("high"),),
        neutral=(
            _b("confused", "confused"),
            _b("job", "job"),
            _b("govt", "govt"),
            _b("switch", "switch"),
            _b("stream", "stream"),
            _b("default"),
        ),
    ),
    Topic.relationships: TopicRule(
        Topic.relationships,
        low=(
            _b("low_breakup", "breakup"),
            _b("low_rejected", "rejected"),
            _b("low_cheating", "cheating"),
            _b("low"),
        ),
        high=(
            _b("high_accepted", "accepted"),
            _b("high_crush", "crush"),
            _b("high"),
        ),
        neutral=(
            _b("breakup", "breakup"),
            _b("cheating", "cheating"),
            _b("long_distance", "long_distance"),
            _b("ex", "ex"),
            _b("parents", "parents"),
            _b("first_love", "first_love"),
            _b("marriage", "marriage"),
            _b("rejected", "rejected"),
            _b("accepted", "accepted"),
            _b("propose_scared", "propose", "scared"),
            _b("propose", "propose"),
            _b("crush", "crush"),
            _b("confused", "confused"),
            _b("default"),
        ),
    ),
    Topic.academics: TopicRule(
        Topic.academics,
        low=(
            _b("low_fail", "fail"),
            _b("low_exam_stress", "exam_stress"),
            _b("low"),
        ),
        high=(
            _b("high_result", "result"),
            _b("high_exam_stress", "exam_stress"),
            _b("high"),
        ),
        neutral=(
            _b("fail", "fail"),
            _b("exam_stress", "exam_stress"),
            _b("result", "result"),
            _b("assignment", "assignment"),
            _b("attendance", "attendance"),
            _b("practical", "practical"),
            _b("default"),
        ),
    ),
    Topic.friendship: TopicRule(
        Topic.friendship,
        low=(
            _b("low_lonely", "lonely"),
            _b("low_left_out", "left_out"),
            _b("low"),
        ),
        high=(
            _b("high_best_friend", "best_friend"),
            _b("high_social_media", "social_media"),
            _b("high"),
        ),
        neutral=(
            _b("lonely", "lonely"),
            _b("left_out", "left_out"),
            _b("social_media", "social_media"),
            _b("friendship_issue", "friendship_issue"),
            _b("default"),
        ),
    ),
    Topic.mental_health: TopicRule(
        Topic.mental_health,
        low=(
            _b("low_depressed", "depressed"),
            _b("low_anxiety", "anxiety"),
            _b("low"),
        ),
        high=None,
        neutral=(
            _b("depressed", "depressed"),
            _b("anxiety", "anxiety"),
            _b("stress", "stress"),
            _b("tired", "tired"),
            _b("default"),
        ),
    ),
    Topic.family: TopicRule(
        Topic.family,
        low=(
            _b("low_missing", "missing"),
            _b("low_fight", "fight"),
            _b("low"),
        ),
        high=None,
        neutral=(
            _b("expectation", "expectation"),
            _b("fight", "fight"),
            _b("missing", "missing"),
            _b("hostel", "hostel"),
            _b("default"),
        ),
    ),
    Topic.goals: TopicRule(
        Topic.goals,
        low=(
            _b("low_motivation", "motivation"),
            _b("low_dream", "dream"),
            _b("low"),
        ),
        high=(
            _b("high_motivation", "motivation"),
            _b("high_dream", "dream"),
            _b("high"),
        ),
        neutral=(
            _b("motivation", "asks_motivation"),
            _b("dream", "asks_dream"),
            _b("improve", "improve"),
            _b("procrastinate", "procrastinate"),
            _b("default"),
        ),
    ),
    Topic.hobbies: TopicRule(
        Topic.hobbies,
        low=(_b("low"),),
        high=(_b("high"),),
        neutral=(
            _b("movie", "movie"),
            _b("game", "game"),
            _b("music", "music"),
            _b("travel", "travel"),
            _b("art", "art"),
            _b("food", "food"),
            _b("fitness", "fitness"),
            _b("default"),
        ),
    ),
}

MOOD_BRANCHES: tuple[str, ...] = tuple(m.value for m in ChatMood) + ("thanks", "open")


def required_keys() -> list[tuple[str, str]]:
    """Every ``(section, branch)`` pair the engine can select."""
    keys: list[tuple[str, str]] = []
    for rule in TOPIC_RULES.values():
        for arm in rule.arms():
            keys.extend((rule.topic.value, branch.key) for branch in arm)
    keys.extend((MOOD_SECTION, name) for name in MOOD_BRANCHES)
    return keys


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class ReplyEngine:
    """Chooses a reply template for a user message.

    The template table is checked on construction, so :meth:`select` has no
    error path of its own.
    """

    def __init__(self, table: TemplateTable | None = None) -> None:
        self.table = table or get_table()
        problems = self.table.verify(required_keys())
        if problems:
            raise TemplateError("; ".join(problems))

    def flags_for(self, topic: Topic, lower: str) -> set[str]:
        """Names of the sub-condition flags of *topic* present in *lower*."""
        return {name for name, triggers in SUBCASE_FLAGS[topic].items() if triggers.matches(lower)}

    def select(self, text: str, mood: object = None, persona: object = None) -> Reply:
        lower = (text or "").lower()
        chat_mood = ChatMood.parse(mood)
        voice = Persona.parse(persona)

        if is_crisis(lower):
            logger.warning("crisis triggers matched in message: {}", snippet(text or ""))
            return Reply(text=self.table.crisis, crisis=True)

        topic = classify_topic(lower)
        if topic is not None:
            rule = TOPIC_RULES[topic]
            present = self.flags_for(topic, lower)
            for branch in rule.arm_for(chat_mood):
                if branch.applies(present):
                    return Reply(
                        text=self.table.get(topic, branch.key, voice),
                        topic=topic,
                        branch=branch.key,
                    )

        key = self._mood_branch(chat_mood, lower)
        return Reply(text=self.table.get(MOOD_SECTION, key, voice), branch=key)

    @staticmethod
    def _mood_branch(mood: ChatMood | None, lower: str) -> str:
        if mood is not None and mood is not ChatMood.neutral:
            return mood.value
        if THANKS.matches(lower):
            return "thanks"
        return mood.value if mood is not None else "open"


_engine: ReplyEngine | None = None


def get_engine() -> ReplyEngine:
    global _engine
    if _engine is None:
        _engine = ReplyEngine()
    return _engine


def select_reply(text: str, mood: object = None, persona: object = None) -> Reply:
    """Select the counselor reply for *text* given *mood* and *persona*.

    *mood* may be a :class:`ChatMood`, a chat or daily mood name, or ``None``.
    *persona* defaults to ``boy`` when missing or unknown.
    """
    return get_engine().select(text, mood, persona)
