"""Name occurrence counting with a one-shot threshold signal."""

from typing import Dict, List, Tuple


class ThresholdHistogram:
    """Occurrence counter that reports the moment a name reaches the threshold.

    Keys are exact strings unless ``fold_case`` is set, in which case names
    differing only in case share one entry and keep the first spelling seen.
    Counts only ever grow; nothing is evicted.
    """

    def __init__(self, threshold: int = 1, fold_case: bool = False) -> None:
        if threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")
        self.threshold = threshold
        self.fold_case = fold_case
        self.counts: Dict[str, int] = {}
        self.spellings: Dict[str, str] = {}

    def _key(self, name: str) -> str:
        if not self.fold_case:
            return name
        key = name.casefold()
        self.spellings.setdefault(key, name)
        return key

    def observe(self, name: str) -> bool:
        key = self._key(name)
        count = self.counts.get(key, 0) + 1
        self.counts[key] = count
        return count == self.threshold

    def spelling(self, name: str) -> str:
        if not self.fold_case:
            return name
        return self.spellings.get(name.casefold(), name)

    def count(self, name: str) -> int:
        key = name.casefold() if self.fold_case else name
        return self.counts.get(key, 0)

    def most_common(self, limit: int) -> List[Tuple[str, int]]:
        """Names at or above the threshold, most frequent first, first-seen on ties."""
        eligible = [
            (self.spelling(key), count) for key, count in self.counts.items() if count >= self.threshold
        ]
        eligible.sort(key=lambda item: item[1], reverse=True)
        return eligible[:limit] if limit > 0 else eligible

    def __len__(self) -> int:
        return len(self.counts)

    def __contains__(self, name: str) -> bool:
        return self.count(name) > 0
