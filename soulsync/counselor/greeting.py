"""Intro message, quick-reply suggestions and mood labels for the chat UI."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from soulsync.config import get_settings
from soulsync.counselor.models import ChatMood, Persona

MOOD_DISPLAY_NAMES: dict[ChatMood, str] = {
    ChatMood.very_sad: "Deep Sadness",
    ChatMood.sad: "Sad",
    ChatMood.neutral: "Neutral",
    ChatMood.happy: "Happy",
    ChatMood.very_happy: "Very Happy",
}

MOOD_INDICATORS: dict[ChatMood, str] = {
    ChatMood.very_sad: "💝 Holding space",
    ChatMood.sad: "🫂 Here for you",
    ChatMood.neutral: "👋 Listening",
    ChatMood.happy: "😊 Positive",
    ChatMood.very_happy: "✨ High Energy",
}

MOOD_EMOJI: dict[ChatMood, str] = {
    ChatMood.very_sad: "💜",
    ChatMood.sad: "🫂",
    ChatMood.neutral: "👋",
    ChatMood.happy: "😊",
    ChatMood.very_happy: "🎉",
}

# Empathy line after "you're feeling X today", per persona.
_ACKNOWLEDGE: dict[Persona, dict[ChatMood, str]] = {
    Persona.girl: {
        ChatMood.very_sad: "Mujhe pata hai kaise lagta hai jab sab kuch heavy lagta hai.",
        ChatMood.sad: "It's okay to have these days. Main hoon na tumhare saath.",
        ChatMood.neutral: "Main yahan hoon sunne ke liye.",
        ChatMood.happy: "Achha lag raha hai sunke!",
        ChatMood.very_happy: "Wah! Ye toh celebrate karne wali baat hai!",
    },
    Persona.boy: {
        ChatMood.very_sad: "Bhai, pata hai kaise hota hai jab sab kuch heavy lagta hai.",
        ChatMood.sad: "Chinta mat kar, sab theek hoga. Main hoon na saath.",
        ChatMood.neutral: "Jo bhi chal raha hai, main sunne ko taiyaar hoon.",
        ChatMood.happy: "Mast! Ye sunke acha laga.",
        ChatMood.very_happy: "Bhai ye toh celebration mode hai!",
    },
}

_QUICK_REPLIES_LOW = [
    "मुझे अकेलापन लग रहा है 🫂",
    "सब कुछ बेकार लग रहा है 💔",
    "कोई बात नहीं करनी 🤐",
    "थक गया/गयी हूँ 😔",
]

_QUICK_REPLIES_HIGH = [
    "आज बहुत अच्छा दिन है ✨",
    "कुछ खास हुआ है 🎉",
    "जश्न मनाना है 🥳",
    "तुमसे बात करके अच्छा लगा 😊",
]

_QUICK_REPLIES_DEFAULT = [
    "मुझे एक लड़की/लड़का पसंद है 💕",
    "पढ़ाई का तनाव है 📚",
    "दोस्तों से बात करनी है 👥",
    "घर की याद आ रही है 🏠",
    "करियर को लेकर confused हूँ 🎯",
    "बस यूं ही 💭",
]


def time_greeting(now: Optional[datetime] = None) -> str:
    """Morning before noon, afternoon before 17:00, evening after.

    Without *now* the clock is read in ``SOULSYNC_TIMEZONE``.
    """
    hour = (now or datetime.now(get_settings().tzinfo)).hour
    if hour < 12:
        return "Good Morning"
    if hour < 17:
        return "Good Afternoon"
    return "Good Evening"


def quick_replies(mood: object = None) -> list[str]:
    """Suggested openers for the given mood."""
    chat_mood = ChatMood.parse(mood)
    if chat_mood is not None and chat_mood.is_low:
        return list(_QUICK_REPLIES_LOW)
    if chat_mood is not None and chat_mood.is_high:
        return list(_QUICK_REPLIES_HIGH)
    return list(_QUICK_REPLIES_DEFAULT)


def intro_message(
    persona: object = None,
    mood: object = None,
    *,
    name: str = "",
    level: str = "",
    class_or_course: str = "",
    now: Optional[datetime] = None,
) -> str:
    """Build the first assistant message of a conversation.

    Parameters
    ----------
    persona : Persona | str | None
        Voice of the assistant; defaults to ``boy``.
    mood : ChatMood | str | None
        Today's mood; unknown values read as neutral.
    name : str
        The user's name or username; only the first word is used.
    level, class_or_course : str
        ``"college"`` users are greeted about their course, everyone else
        about school life.
    now : datetime | None
        Clock used for the time-of-day greeting.
    """
    voice = Persona.parse(persona)
    chat_mood = ChatMood.parse(mood) or ChatMood.neutral
    greeting = f"{time_greeting(now)} {MOOD_EMOJI[chat_mood]}"
    display = MOOD_DISPLAY_NAMES[chat_mood]
    acknowledge = _ACKNOWLEDGE[voice][chat_mood]
    is_college = level.strip().lower() == "college"
    first_name = name.split()[0] if name.strip() else ""

    if voice is Persona.girl:
        owner = f"{first_name}'s" if first_name else "your"
        where = (
            f"apne {class_or_course or 'college'} life mein" if is_college else "school life mein"
        )
        return (
            f"{greeting} I'm {owner} companion.\n\n"
            f"I can see you're feeling *{display}* today. {acknowledge}\n\n"
            f"Batao, kya chal raha hai {where}? Kuch bhi share karo - happy, sad, "
            "confused, excited - main ready hoon sunne ke liye 💝"
        )

    where = f"{class_or_course or 'college'} life mein" if is_college else "school life mein"
    return (
        f"{greeting} Main hoon tera companion.\n\n"
        f"Dekh raha hoon aaj tu *{display}* feel kar raha hai. {acknowledge}\n\n"
        f"Bata, kya chal raha hai {where}? Kuch bhi bol - main tere saath hoon 💙"
    )
