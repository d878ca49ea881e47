"""Given-name extraction from biography templates in wikitext."""

import re
from typing import Iterator, NamedTuple, Optional


DEFAULT_TEMPLATE = "Personendaten"
NAME_KEY = "name"
TRANSLITERATION_MARK = "ʿ"
# Delimiters between multiple given names ("Anna Maria", "Hans-Peter", "J. R. R.").
FIRST_NAME_DELIMITERS = "\t\n\f\r -.'\"" + TRANSLITERATION_MARK
# Stripped from both ends of a field value.
VALUE_FILLER = "\t\n\f\r '\"" + TRANSLITERATION_MARK
# Trimmed from a candidate before it is counted.
CANDIDATE_LEFTOVERS = ".,;:!?\"'()[]{}" + TRANSLITERATION_MARK

NAME_SEPARATOR = re.compile(r"\s*,\s*")
FIRST_NAME_SEPARATOR = re.compile("[" + re.escape(FIRST_NAME_DELIMITERS) + "]+")


class FieldSkip(ValueError):
    """A field that does not yield a candidate. Never fatal."""


class NoSurnameSeparator(FieldSkip):
    pass


class EmptyFirstName(FieldSkip):
    pass


class RawField(NamedTuple):
    key: str
    value: str


def split_name_field(raw_value: str) -> str:
    """Return the first given name of a ``"Last, First[ Second...]"`` value.

    Raises NoSurnameSeparator when there is no comma and EmptyFirstName when
    nothing but delimiters follows it. The token is returned verbatim.
    """
    groups = NAME_SEPARATOR.split(raw_value)
    if len(groups) < 2:
        raise NoSurnameSeparator(raw_value)
    tokens = [tok for tok in FIRST_NAME_SEPARATOR.split(groups[1]) if tok]
    if not tokens:
        raise EmptyFirstName(raw_value)
    return tokens[0]


def parse_field(segment: str) -> Optional[RawField]:
    key, sep, rest = segment.partition("=")
    if not sep:
        return None
    key = key.strip()
    if not key or not key.isascii() or not key.isalpha():
        return None
    # Values end at the line break; following lines belong to the next field.
    value = rest.lstrip(VALUE_FILLER).split("\n", 1)[0].strip(VALUE_FILLER)
    if not value:
        return None
    return RawField(key, value)


def normalize_candidate(token: str) -> Optional[str]:
    cleaned = token.strip(CANDIDATE_LEFTOVERS)
    return cleaned or None


class NameExtractor:
    """Scans record text for ``{{<template>|NAME=...}}`` and yields given names."""

    def __init__(self, template: str = DEFAULT_TEMPLATE) -> None:
        self.template = template
        self.pattern = re.compile(r"\{\{" + re.escape(template) + r"([^}]+)\}\}", re.IGNORECASE)

    def fields(self, record_text: str) -> Iterator[RawField]:
        for match in self.pattern.finditer(record_text):
            for segment in match.group(1).split("|"):
                field = parse_field(segment)
                if field is not None:
                    yield field

    def extract_candidates(self, record_text: str) -> Iterator[str]:
        for field in self.fields(record_text):
            if field.key.lower() != NAME_KEY:
                continue
            try:
                token = split_name_field(field.value)
            except FieldSkip:
                continue
            candidate = normalize_candidate(token)
            if candidate:
                yield candidate


_default_extractor = NameExtractor()


def extract_candidates(record_text: str) -> Iterator[str]:
    return _default_extractor.extract_candidates(record_text)
