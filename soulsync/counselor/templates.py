"""Template table for counselor replies.

Texts live in ``data/templates.yaml`` and are loaded once with PyYAML.  The
table is keyed by ``(section, branch, persona)`` where *section* is a topic
name or ``"mood"``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import yaml

from soulsync.counselor.models import Persona, Topic

_DEFAULT_PATH = Path(__file__).parent / "data" / "templates.yaml"

MOOD_SECTION = "mood"


class TemplateError(ValueError):
    """Raised when the template file is missing a required entry."""


class TemplateTable:
    """Lookup of reply texts by section, branch and persona."""

    def __init__(self, data: dict) -> None:
        self._crisis: str = str(data.get("crisis", "")).strip()
        self._sections: dict[str, dict[str, dict[str, str]]] = {
            key: value for key, value in data.items()
            if key != "crisis" and isinstance(value, dict)
        }

    @classmethod
    def load(cls, path: str | Path | None = None) -> "TemplateTable":
        """Read a template file (the packaged one by default)."""
        source = Path(path) if path else _DEFAULT_PATH
        with open(source, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise TemplateError(f"{source}: expected a mapping at the top level")
        return cls(data)

    # -- lookups -------------------------------------------------------------

    @property
    def crisis(self) -> str:
        return self._crisis

    def get(self, section: Topic | str, branch: str, persona: Persona) -> str:
        """Return the text for *branch* of *section* in *persona*'s voice.

        Raises ``KeyError`` when the entry does not exist.
        """
        name = section.value if isinstance(section, Topic) else section
        return self._sections[name][branch][Persona.parse(persona).value]

    def has(self, section: Topic | str, branch: str) -> bool:
        name = section.value if isinstance(section, Topic) else section
        return branch in self._sections.get(name, {})

    def branches(self, section: Topic | str) -> list[str]:
        name = section.value if isinstance(section, Topic) else section
        return list(self._sections.get(name, {}))

    def sections(self) -> list[str]:
        return list(self._sections)

    # -- validation ----------------------------------------------------------

    def verify(self, required: Optional[Iterable[tuple[str, str]]] = None) -> list[str]:
        """Return a list of problems; an empty list means the table is usable.

        Every branch present must carry a non-empty text for each persona.
        When *required* is given, each ``(section, branch)`` pair in it must
        also exist.
        """
        problems: list[str] = []
        if not self._crisis:
            problems.append("crisis: missing text")

        for section, branches in self._sections.items():
            for branch, voices in branches.items():
                if not isinstance(voices, dict):
                    problems.append(f"{section}.{branch}: expected persona mapping")
                    continue
                for persona in Persona:
                    text = voices.get(persona.value)
                    if not isinstance(text, str) or not text.strip():
                        problems.append(f"{section}.{branch}: missing {persona.value} text")

        for section, branch in required or ():
            if not self.has(section, branch):
                problems.append(f"{section}.{branch}: not defined")
        return problems


_table: TemplateTable | None = None


def get_table() -> TemplateTable:
    """Return the packaged template table, loading it on first use."""
    global _table
    if _table is None:
        _table = TemplateTable.load()
    return _table
