"""Entity extractors for emails, phone numbers, URLs and numbers.

Each `find_*` function is a pure scan over the original text and returns entities in the order
they were found. The `extract_*` stages append those entities to an `IntentResult`. Extractors are
independent: overlapping entities of different types are all reported, nothing is deduplicated.

A candidate that fails validation is skipped silently; every scan always moves forward past a
rejected or accepted candidate.
"""

from __future__ import annotations

import math
import re

from src.intent.schema import Entity, EntityType, IntentResult
from src.intent.tokenizer import is_digit

_EMAIL_RE = re.compile(
    r"[A-Za-z0-9._%+\-]+@(?:[A-Za-z0-9\-]+\.)+[A-Za-z]{2,}"
)

_PHONE_DELIMITERS_RE = re.compile(r"[\s,;()<>\[\]{}]+")
_PHONE_SEPARATORS: frozenset[str] = frozenset("-. ()+")
PHONE_MIN_LENGTH = 10
PHONE_MIN_DIGITS = 10
PHONE_MAX_DIGITS = 15

URL_PROTOCOLS: tuple[str, ...] = ("http://", "https://")
_URL_SCHEMES: frozenset[str] = frozenset({"http", "https"})
_URL_STOP_CHARS: frozenset[str] = frozenset("<>()[]{}")
_DOMAIN_LABEL_RE = re.compile(r"[A-Za-z0-9\-]+")


def find_emails(text: str) -> list[Entity]:
    """Find `local@domain.tld` substrings, left to right, non-overlapping.

    Matches may be embedded in larger strings. `re.finditer` always advances past empty matches.
    """

    return [
        Entity(type=EntityType.email, value=m.group(), start=m.start(), end=m.end())
        for m in _EMAIL_RE.finditer(text)
    ]


def _is_phone_candidate(candidate: str) -> bool:
    if len(candidate) < PHONE_MIN_LENGTH:
        return False

    digits = 0
    for ch in candidate:
        if is_digit(ch):
            digits += 1
        elif ch not in _PHONE_SEPARATORS:
            return False

    return PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS


def find_phones(text: str) -> list[Entity]:
    """Find phone-like candidates between delimiter runs.

    Known limitation: the offset of a candidate is recovered with `str.find`, so a candidate string
    that occurs several times in `text` is always reported at its first occurrence.
    """

    entities: list[Entity] = []
    for candidate in _PHONE_DELIMITERS_RE.split(text):
        if not candidate or not _is_phone_candidate(candidate):
            continue

        start = text.find(candidate)
        if start == -1:
            continue
        entities.append(
            Entity(type=EntityType.phone, value=candidate, start=start, end=start + len(candidate))
        )

    return entities


def is_valid_url(url: str) -> bool:
    """Whether `url` is `scheme://host[/...]` with a dotted host of `[A-Za-z0-9-]` labels."""

    parts = url.split("://")
    if len(parts) != 2:
        return False

    scheme, rest = parts
    if scheme not in _URL_SCHEMES or not rest:
        return False

    host = rest.split("/", 1)[0]
    labels = host.split(".")
    if len(labels) < 2:
        return False

    return all(_DOMAIN_LABEL_RE.fullmatch(label) for label in labels)


def _url_end(text: str, i: int) -> int:
    n = len(text)
    while i < n and not (text[i].isspace() or text[i] in _URL_STOP_CHARS):
        i += 1
    return i


def find_urls(text: str) -> list[Entity]:
    """Find `http://` and `https://` URLs.

    Each protocol is scanned in its own pass, so the result lists all `http://` matches before all
    `https://` matches.
    """

    entities: list[Entity] = []
    for protocol in URL_PROTOCOLS:
        search_start = 0
        while search_start < len(text):
            start = text.find(protocol, search_start)
            if start == -1:
                break

            end = _url_end(text, start + len(protocol))
            url = text[start:end]
            if is_valid_url(url):
                entities.append(Entity(type=EntityType.url, value=url, start=start, end=end))

            search_start = end if end > search_start else search_start + 1

    return entities


def _is_decimal_point(text: str, i: int) -> bool:
    return 0 < i < len(text) - 1 and is_digit(text[i - 1]) and is_digit(text[i + 1])


def _is_number(candidate: str) -> bool:
    try:
        return math.isfinite(float(candidate))
    except ValueError:
        return False


def find_numbers(text: str) -> list[Entity]:
    """Find digit runs with at most one decimal point.

    A `.` joins a number only when a digit sits on both sides of it, which tells a decimal point
    apart from a sentence-final period or a list separator.
    """

    entities: list[Entity] = []
    n = len(text)
    i = 0
    while i < n:
        while i < n and not (is_digit(text[i]) or text[i] == "."):
            i += 1
        if i >= n:
            break

        start = i
        has_decimal = False
        while i < n:
            ch = text[i]
            if is_digit(ch):
                i += 1
            elif ch == "." and not has_decimal and _is_decimal_point(text, i):
                has_decimal = True
                i += 1
            else:
                break

        if i == start:
            # A lone "." consumed nothing.
            i += 1
            continue

        candidate = text[start:i]
        if _is_number(candidate):
            entities.append(Entity(type=EntityType.number, value=candidate, start=start, end=i))

    return entities


def extract_emails_only(result: IntentResult) -> IntentResult:
    result.entities.extend(find_emails(result.text))
    return result


def extract_phones_only(result: IntentResult) -> IntentResult:
    result.entities.extend(find_phones(result.text))
    return result


def extract_urls_only(result: IntentResult) -> IntentResult:
    result.entities.extend(find_urls(result.text))
    return result


def extract_numbers_only(result: IntentResult) -> IntentResult:
    result.entities.extend(find_numbers(result.text))
    return result


def extract(result: IntentResult) -> IntentResult:
    """Run every extractor (emails, phones, URLs, numbers) in that order."""

    for stage in (extract_emails_only, extract_phones_only, extract_urls_only, extract_numbers_only):
        result = stage(result)
    return result
