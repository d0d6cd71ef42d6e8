"""
Text canonicalization for equality and signature comparisons.
"""
from __future__ import annotations

import re

# Header/footer scaffolding that repeats across notes from the same EHR.
# Date: and Time: header lines stay; they carry the temporal markers.
BOILERPLATE_PATTERNS = [
    re.compile(r"\b(?:progress|admission|operative|consultation)\s+note\b:?", re.IGNORECASE),
    re.compile(r"electronically signed by[^\n]*", re.IGNORECASE),
    re.compile(r"^\s*attending:[^\n]*(?:\n|$)", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^\s*resident:[^\n]*(?:\n|$)", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^\s*medical record number:[^\n]*(?:\n|$)", re.IGNORECASE | re.MULTILINE),
    re.compile(r"^\s*mrn:[^\n]*(?:\n|$)", re.IGNORECASE | re.MULTILINE),
]

_PUNCT_RE = re.compile(r"[^\w\s]")
_WS_RE = re.compile(r"\s+")
_SPACES_RE = re.compile(r"[ \t]+")


def remove_boilerplate(text: str) -> str:
    if not text:
        return ""
    cleaned = text
    for pattern in BOILERPLATE_PATTERNS:
        cleaned = pattern.sub("", cleaned)
    return cleaned.strip()


def clean_text(text: str, *, strip_boilerplate: bool = False) -> str:
    """Tidy whitespace but keep case, punctuation and line breaks."""
    if not text:
        return ""
    t = text.replace("\r\n", "\n").replace("\r", "\n")
    if strip_boilerplate:
        t = remove_boilerplate(t)
    t = _SPACES_RE.sub(" ", t)
    t = re.sub(r" *\n *", "\n", t)
    return t.strip()


def normalize_text(text: str) -> str:
    if not text:
        return ""
    s = text.lower()
    s = _PUNCT_RE.sub("", s)
    s = _WS_RE.sub(" ", s)
    return s.strip()


class TextNormalizer:
    """
    Canonical form used for exact-duplicate equality and signatures.
    normalize() is idempotent: normalize(normalize(x)) == normalize(x).
    """

    def __init__(self, remove_boilerplate: bool = True):
        self.remove_boilerplate = remove_boilerplate

    def clean(self, text: str) -> str:
        return clean_text(text, strip_boilerplate=self.remove_boilerplate)

    def normalize(self, text: str) -> str:
        if not text:
            return ""
        if not self.remove_boilerplate:
            return normalize_text(text)
        # Stripping a label can splice a new one together; run to a fixed point.
        current = normalize_text(remove_boilerplate(text))
        while True:
            nxt = normalize_text(remove_boilerplate(current))
            if nxt == current:
                return current
            current = nxt
