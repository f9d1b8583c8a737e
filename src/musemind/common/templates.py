"""Prompt templating helpers."""
from __future__ import annotations
from enum import Enum

WRITE_NOW = "Write the poem now:"


class Theme(str, Enum):
    """Poem themes offered by the frontend."""
    LOVELINES = "lovelines"
    MOODVERSE = "moodverse"
    SOULSCRIPT = "soulscript"

    @classmethod
    def resolve(cls, key: object) -> "Theme":
        """Map a request's theme value to a Theme, falling back to the default."""
        try:
            return cls(key)
        except (ValueError, TypeError):
            return DEFAULT_THEME

    @property
    def template(self) -> str:
        return THEME_TEMPLATES[self]


DEFAULT_THEME = Theme.MOODVERSE

THEME_TEMPLATES: dict[Theme, str] = {
    Theme.LOVELINES: (
        "You are a romantic poet. Write a beautiful, heartfelt love poem "
        "(exactly 5 lines) about: {{input}}\n" + WRITE_NOW
    ),
    Theme.MOODVERSE: (
        "You are an emotional poet. Write a deeply emotional poem "
        "(exactly 5 lines) that captures these feelings: {{input}}\n" + WRITE_NOW
    ),
    Theme.SOULSCRIPT: (
        "You are an inspirational poet. Write an uplifting, reflective affirmation poem "
        "(exactly 5 lines) about: {{input}}\n" + WRITE_NOW
    ),
}


def render_prompt(template: str, user_input: str) -> str:
    """
    Render user input into the template.

    Args:
        template: Template content containing {{input}}.
        user_input: Input string.

    Returns:
        Rendered prompt.
    """
    return template.replace("{{input}}", user_input)


def build_prompt(user_input: str, theme: str | Theme | None = None) -> str:
    """
    Build the Gemini prompt for a theme.

    Unknown or missing themes use the default theme's template.

    Args:
        user_input: Feelings or thoughts typed by the user, embedded verbatim.
        theme: Theme key from the request.
    """
    return render_prompt(Theme.resolve(theme).template, user_input)
