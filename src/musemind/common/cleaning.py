"""Post-processing of raw model output into a short poem."""
from __future__ import annotations
import re

MAX_LINES = 5

_PREAMBLE = re.compile(r"^(?:Here['’]s|Here is).*?:\s*", re.IGNORECASE)
_LABEL_LINE = re.compile(r"^(?:Title|Poem):.*$\n?", re.IGNORECASE | re.MULTILINE)


def _strip_once(text: str) -> str:
    text = text.strip()
    text = text.replace("**", "").replace("*", "")
    text = _PREAMBLE.sub("", text, count=1)
    text = _LABEL_LINE.sub("", text)
    return "\n".join(line for line in text.split("\n") if line.strip()).strip()


def clean_poem(text: str) -> str:
    """
    Strip markdown emphasis, preambles and label lines; keep at most 5 lines.

    Stripping a preamble can expose another one, so stripping repeats until
    the text stops changing (each pass only removes characters). The line
    cap is applied once, afterwards.
    """
    stripped = _strip_once(text)
    while True:
        again = _strip_once(stripped)
        if again == stripped:
            break
        stripped = again
    return "\n".join(stripped.split("\n")[:MAX_LINES]).strip()
