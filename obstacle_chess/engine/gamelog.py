from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from .boardfile import END_MARKER, content_lines, timestamp
from .move import PASS_TOKEN


def parse_log(text: str) -> List[str]:
    """Return the actions of a game log, one per non-comment line."""
    return content_lines(text)


def format_log(labels: List[str], *, black_first: bool = False, now: Optional[datetime] = None) -> str:
    """Serialize history labels in game-log form.

    Args:
        labels (List[str]): Actions oldest first.
        black_first (bool): Prefix a ``...`` marker so a replay starts with black.
    """
    lines = [f"% Game Log Saved: {timestamp(now)}"]
    if black_first:
        lines.append(PASS_TOKEN)
    lines.extend(labels)
    lines.append(END_MARKER)
    return "\n".join(lines) + "\n"
