from __future__ import annotations

import re

# Abbreviations whose trailing period must not end a sentence.
ABBREVIATIONS = ["Dr", "Mr", "Mrs", "Ms", "vs", "etc", "e.g", "i.e", "POD", "HD", "CT", "MRI", "EEG", "LP"]

_ABBR_RE = re.compile(r"(?<![\w.])(" + "|".join(re.escape(a) for a in ABBREVIATIONS) + r")\.")
_BOUNDARY_RE = re.compile(r"(?<=[.!?])\s+")
_PLACEHOLDER = "\u0000"
_TERMINATORS = (".", "!", "?")


class SentenceSplitter:
    """
    Split note text into ordered sentences, keeping each sentence's own casing
    and terminal punctuation so notes can be reassembled later.
    """

    def split(self, text: str) -> list[str]:
        if not text or not text.strip():
            return []
        protected = _ABBR_RE.sub(lambda m: m.group(1) + _PLACEHOLDER, text)
        pieces = _BOUNDARY_RE.split(protected)
        out: list[str] = []
        for piece in pieces:
            sentence = piece.replace(_PLACEHOLDER, ".").strip()
            if sentence:
                out.append(sentence)
        return out


def join_sentences(sentences: list[str] | tuple[str, ...]) -> str:
    """Reassemble sentences; every sentence ends with a terminator."""
    parts = []
    for s in sentences:
        s = s.strip()
        if not s:
            continue
        parts.append(s if s.endswith(_TERMINATORS) else f"{s}.")
    return " ".join(parts)


def split_sentences(text: str) -> list[str]:
    return SentenceSplitter().split(text)
