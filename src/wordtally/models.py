# src/wordtally/models.py
from collections.abc import Mapping
from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterator, List, Optional, Tuple


@lru_cache(maxsize=None)
def _upper_char(ch: str) -> str:
    # Simple one-to-one mapping only; 'ß' stays 'ß' rather than becoming 'SS'
    upper = ch.upper()
    return upper if len(upper) == 1 else ch


def normalize(word: str) -> str:
    """
    Ordinal ignore-case key: each character is upper-cased on its own.
    Used both for grouping and for ordering ties.
    """
    if word.isascii():
        return word.upper()
    return "".join(_upper_char(ch) for ch in word)


@dataclass(frozen=True)
class SortedEntry:
    """Immutable (word, count) pair in output order."""
    word: str
    count: int

    def sort_key(self) -> Tuple[int, str]:
        return (-self.count, normalize(self.word))


class FrequencyTable(Mapping):
    """
    Read-only mapping from word to occurrence count.
    Lookups ignore case; iteration yields the casing stored for each group.
    """

    def __init__(self, counts: Optional[Dict[str, int]] = None):
        # normalized key -> [stored word, count]
        self._entries: Dict[str, List] = {}
        if counts:
            for word, count in counts.items():
                self._add(word, count)

    @classmethod
    def from_partials(cls, partials: List[Dict[str, List]]) -> "FrequencyTable":
        """Sums worker-local maps of normalized key -> [word, count]."""
        table = cls()
        for partial in partials:
            for key, (word, count) in partial.items():
                entry = table._entries.get(key)
                if entry is None:
                    table._entries[key] = [word, count]
                else:
                    entry[1] += count
        return table

    def _add(self, word: str, count: int) -> None:
        if not word or not word.strip():
            raise ValueError("Words must not be empty or whitespace-only")
        if count < 0:
            raise ValueError(f"Negative count for '{word}': {count}")
        key = normalize(word)
        entry = self._entries.get(key)
        if entry is None:
            self._entries[key] = [word, count]
        else:
            entry[1] += count

    def __getitem__(self, word: str) -> int:
        if not isinstance(word, str):
            raise KeyError(word)
        try:
            return self._entries[normalize(word)][1]
        except KeyError:
            raise KeyError(word) from None

    def __iter__(self) -> Iterator[str]:
        return (word for word, _ in self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FrequencyTable({dict(self.items())!r})"

    @property
    def total(self) -> int:
        return sum(count for _, count in self._entries.values())

    def sorted_entries(self) -> List[SortedEntry]:
        entries = [SortedEntry(word, count) for word, count in self._entries.values()]
        entries.sort(key=SortedEntry.sort_key)
        return entries

    def most_common(self, n: Optional[int] = None) -> List[SortedEntry]:
        entries = self.sorted_entries()
        return entries if n is None else entries[:n]
