# src/wordtally/utils/tokenizer.py
import unicodedata
from functools import lru_cache
from typing import Iterator, List


@lru_cache(maxsize=None)
def is_boundary(ch: str) -> bool:
    """Whitespace and Unicode punctuation (categories P*) separate tokens."""
    return ch.isspace() or unicodedata.category(ch).startswith("P")


class Tokenizer:

    @staticmethod
    def iter_tokens(text: str) -> Iterator[str]:
        """Yields maximal runs of non-boundary characters, left to right."""
        token_chars: List[str] = []
        for ch in text:
            if is_boundary(ch):
                if token_chars:
                    yield "".join(token_chars)
                    token_chars.clear()
            else:
                token_chars.append(ch)

        if token_chars:
            yield "".join(token_chars)

    @staticmethod
    def extract(text: str) -> List[str]:
        """Splits text into word tokens. Case is left untouched."""
        return list(Tokenizer.iter_tokens(text))
