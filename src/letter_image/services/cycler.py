from __future__ import annotations


class LetterCycler:
    """
    Hands out the letters of a fixed text one at a time, looping forever.

    The cursor wraps once it is *past* the end of the text, so every cycle has
    one read at index len(text). That read yields an empty letter.
    """

    def __init__(self, text: str) -> None:
        if not text:
            raise ValueError("LetterCycler needs a non-empty text")
        self.text = text
        self._cursor = -1

    @property
    def cursor(self) -> int:
        return self._cursor

    def next(self) -> str:
        self._cursor += 1
        if self._cursor > len(self.text):
            self._cursor = 0
        if self._cursor == len(self.text):
            return ""
        return self.text[self._cursor]
