"""Tests for the reply selection engine and its template table."""

import tempfile
from pathlib import Path

import pytest
import yaml

from soulsync.counselor.engine import ReplyEngine, TOPIC_RULES, required_keys, select_reply
from soulsync.counselor.models import ChatMood, Persona, Topic
from soulsync.counselor.templates import TemplateError, TemplateTable, get_table

MOODS = [None, *ChatMood]


def test_crisis_wins_regardless_of_mood_and_persona():
    texts = set()
    for mood in MOODS:
        for persona in Persona:
            reply = select_reply("exam stress makes me want to die", mood, persona)
            assert reply.crisis
            assert reply.topic is None
            assert reply.template_key == "crisis"
            texts.add(reply.text)
    assert len(texts) == 1
    text = texts.pop()
    assert "9152987821" in text
    assert "9820466726" in text


def test_sad_career_confusion_gets_low_mood_variant():
    reply = select_reply("I am confused about my career", ChatMood.sad, Persona.boy)
    assert reply.topic is Topic.career
    assert reply.branch == "low"
    assert reply.text == get_table().get(Topic.career, "low", Persona.boy)


def test_neutral_career_confusion_uses_flag_branch():
    reply = select_reply("I am confused about my career", "neutral", "boy")
    assert reply.template_key == "career.confused"


def test_crush_and_scared_to_confess():
    reply = select_reply("I have a crush but I'm scared to confess", "neutral", "girl")
    assert reply.topic is Topic.relationships
    assert reply.branch == "propose_scared"
    assert reply.text == get_table().get(Topic.relationships, "propose_scared", Persona.girl)


def test_mood_arm_is_checked_before_flags():
    assert select_reply("we had a breakup", "neutral", "girl").branch == "breakup"
    assert select_reply("we had a breakup", "very_sad", "girl").branch == "low_breakup"
    assert select_reply("My crush said yes!", "happy", "boy").branch == "high_accepted"


def test_topics_without_high_arm_fall_back_to_neutral_arm():
    assert TOPIC_RULES[Topic.mental_health].high is None
    assert select_reply("I can't sleep at night", "very_happy", "boy").template_key == "mental_health.tired"
    assert select_reply("I miss my home", "happy", "girl").template_key == "family.missing"


def test_academic_branches_by_mood():
    text = "I have an exam tomorrow"
    assert select_reply(text, "neutral", "boy").branch == "exam_stress"
    assert select_reply(text, "sad", "boy").branch == "low_exam_stress"
    assert select_reply(text, "happy", "boy").branch == "high_exam_stress"


def test_goal_branches_by_mood():
    text = "I need some motivation"
    assert select_reply(text, "neutral", "girl").branch == "motivation"
    assert select_reply(text, "sad", "girl").branch == "low_motivation"
    assert select_reply(text, "very_happy", "girl").branch == "high_motivation"


def test_hobby_flag_branch():
    assert select_reply("Any good netflix movie?", "neutral", "boy").template_key == "hobbies.movie"


def test_mood_only_replies():
    for mood in ChatMood:
        reply = select_reply("hello there", mood, "boy")
        assert reply.topic is None
        assert reply.template_key == f"mood.{mood.value}"


def test_thanks_only_for_neutral_or_unknown_mood():
    assert select_reply("thank you so much", "neutral", "girl").branch == "thanks"
    assert select_reply("thank you so much", None, "girl").branch == "thanks"
    assert select_reply("thank you so much", "happy", "girl").branch == "happy"


def test_unknown_mood_gets_open_prompt():
    reply = select_reply("okay", "grumpy", "girl")
    assert reply.template_key == "mood.open"
    assert reply.text == get_table().get("mood", "open", Persona.girl)


def test_daily_mood_names_are_accepted():
    assert select_reply("hello there", "awesome", "boy").branch == "very_happy"
    assert select_reply("hello there", "very_bad", "boy").branch == "very_sad"


def test_unknown_persona_defaults_to_boy():
    assert select_reply("hello there", "happy", "robot").text == select_reply("hello there", "happy", "boy").text


def test_empty_input_never_raises():
    reply = select_reply("", None, None)
    assert reply.template_key == "mood.open"
    assert reply.text


def test_selection_is_deterministic():
    first = select_reply("I have a crush but I'm scared to confess", "sad", "girl")
    second = select_reply("I have a crush but I'm scared to confess", "sad", "girl")
    assert first == second


def test_every_key_has_distinct_persona_tracks():
    table = get_table()
    assert table.verify(required_keys()) == []
    for section, branch in required_keys():
        boy = table.get(section, branch, Persona.boy)
        girl = table.get(section, branch, Persona.girl)
        assert boy.strip() and girl.strip()
        assert boy != girl, f"{section}.{branch}"


def test_every_arm_ends_with_unconditional_branch():
    for rule in TOPIC_RULES.values():
        for arm in rule.arms():
            assert arm[-1].flags == ()


def test_verify_reports_missing_persona():
    table = TemplateTable({"crisis": "call someone", "career": {"low": {"boy": "hang in there"}}})
    problems = table.verify()
    assert "career.low: missing girl text" in problems


def test_engine_rejects_incomplete_table():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "templates.yaml"
        with open(path, "w") as f:
            yaml.dump({"crisis": "call someone", "mood": {"open": {"boy": "hi", "girl": "hey"}}}, f)

        table = TemplateTable.load(path)
        with pytest.raises(TemplateError):
            ReplyEngine(table)
