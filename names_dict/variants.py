"""Password candidate expansion: case forms x digit suffixes x special characters."""

import re
from typing import Iterable, Iterator, List, Tuple


DEFAULT_DIGITS = 4
SPECIAL_CHARS = "!$@_"
WORD = re.compile(r"\S+")


def title_case(value: str) -> str:
    return WORD.sub(lambda m: m.group().capitalize(), value)


def case_forms(name: str) -> Tuple[str, str, str]:
    return name.lower(), name.upper(), title_case(name)


def digit_suffixes(max_width: int) -> List[str]:
    """``""`` then every number of each width 1..max_width, zero-padded.

    Widths are cumulative: ``7``, ``07`` and ``007`` are all present for 3.
    """
    suffixes = [""]
    for width in range(1, max_width + 1):
        suffixes.extend(f"{i:0{width}d}" for i in range(10 ** width))
    return suffixes


def special_suffixes(chars: Iterable[str]) -> List[str]:
    return [""] + list(chars)


class VariantExpander:
    def __init__(self, digits: int = DEFAULT_DIGITS, special_chars: str = SPECIAL_CHARS) -> None:
        self.digits = digit_suffixes(digits)
        self.specials = special_suffixes(special_chars)

    def __len__(self) -> int:
        """Number of variants produced per name."""
        return 3 * len(self.digits) * len(self.specials)

    def expand(self, name: str) -> Iterator[str]:
        for form in case_forms(name):
            for digits in self.digits:
                stem = form + digits
                for special in self.specials:
                    yield stem + special
