# src/wordtally/core/report.py
from typing import Iterable, List

from wordtally.models import SortedEntry


def format_entry(entry: SortedEntry) -> str:
    # Words are written as-is; a comma inside a word is not escaped
    return f"{entry.word},{entry.count}"


def render_lines(entries: Iterable[SortedEntry]) -> List[str]:
    """Output file lines, one "word,count" per entry."""
    return [format_entry(e) for e in entries]


def render_summary(entries: List[SortedEntry], unique: int, total: int) -> str:
    """Generates the top-words table printed by the CLI."""
    lines = [
        f"{'Rank':<5} | {'Count':<10} | {'Word'}",
        "-" * 60,
    ]
    for i, entry in enumerate(entries):
        lines.append(f"{i+1:<5} | {entry.count:<10} | {entry.word}")
    lines.append("-" * 60)
    lines.append(f"Unique words: {unique}")
    lines.append(f"Total words: {total}")
    lines.append("-" * 60)
    return "\n".join(lines) + "\n"
