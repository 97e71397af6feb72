"""Segmentation stage: split the original text into sentences.

A sentence ends after a run of `.`, `!` or `?` that is followed by whitespace or the end of the
text, so decimal points, e-mail addresses and URLs never split a sentence.
"""

from __future__ import annotations

from src.intent.schema import IntentResult, Segment

SENTENCE_TERMINATORS: frozenset[str] = frozenset(".!?")


def _append_stripped(segments: list[Segment], text: str, start: int, end: int) -> None:
    while start < end and text[start].isspace():
        start += 1
    while end > start and text[end - 1].isspace():
        end -= 1
    if start < end:
        segments.append(Segment(text=text[start:end], start=start, end=end))


def find_segments(text: str) -> list[Segment]:
    """Return the sentence segments of `text` in order. Blank text yields `[]`."""

    segments: list[Segment] = []
    n = len(text)
    segment_start = 0
    i = 0
    while i < n:
        if text[i] not in SENTENCE_TERMINATORS:
            i += 1
            continue

        while i < n and text[i] in SENTENCE_TERMINATORS:
            i += 1
        if i == n or text[i].isspace():
            _append_stripped(segments, text, segment_start, i)
            segment_start = i

    _append_stripped(segments, text, segment_start, n)
    return segments


def segment(result: IntentResult) -> IntentResult:
    """Replace `result.segments` with the sentences of `result.text`."""

    result.segments = find_segments(result.text)
    return result
