"""Shared service-layer helpers for reading CLI text into values."""

from __future__ import annotations

from collections.abc import Iterable

from datekit.domain.errors import FormatMismatchError
from datekit.domain.formatting import (
    ISO_LOCAL_DATE,
    ISO_LOCAL_DATE_TIME,
    ISO_LOCAL_TIME,
    ISO_OFFSET_DATE_TIME,
    ISO_ZONED_DATE_TIME,
    DateTimeFormatter,
    Temporal,
)

# Tried in order; the first full match wins.
ISO_INPUT_FORMATS: tuple[DateTimeFormatter, ...] = (
    ISO_ZONED_DATE_TIME,
    DateTimeFormatter.of_pattern("yyyy-MM-dd'T'HH:mmXXX'['VV']'"),
    ISO_OFFSET_DATE_TIME,
    DateTimeFormatter.of_pattern("yyyy-MM-dd'T'HH:mmXXX"),
    ISO_LOCAL_DATE_TIME,
    DateTimeFormatter.of_pattern("yyyy-MM-dd'T'HH:mm"),
    ISO_LOCAL_DATE,
    ISO_LOCAL_TIME,
    DateTimeFormatter.of_pattern("HH:mm"),
    DateTimeFormatter.of_pattern("yyyy-MM"),
)


def parse_flexible(text: str, patterns: Iterable[str] = ()) -> Temporal:
    """Parse *text* with the given patterns, then the ISO forms.

    Raises FormatMismatchError naming every pattern tried when none match.
    """
    formatters = [DateTimeFormatter.of_pattern(p) for p in patterns]
    formatters.extend(ISO_INPUT_FORMATS)
    for formatter in formatters:
        try:
            return formatter.parse(text)
        except FormatMismatchError:
            continue
    tried = ", ".join(repr(f.pattern) for f in formatters)
    msg = f"Text {text!r} matches none of the accepted patterns: {tried}"
    raise FormatMismatchError(msg)
