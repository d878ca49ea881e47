"""Run-wide suppression of repeated wordlist lines."""

from hashlib import blake2b
from typing import Set


class LineDeduper:
    """Remembers an 8-byte digest per written line.

    Memory grows with the number of distinct lines, so it is opt-in. Digest
    collisions would drop a unique line; at 64 bits that is negligible for a
    single dump.
    """

    def __init__(self) -> None:
        self.digests: Set[bytes] = set()

    def admit(self, line: str) -> bool:
        """True the first time ``line`` is seen, False on every repeat."""
        digest = blake2b(line.encode("utf-8"), digest_size=8).digest()
        if digest in self.digests:
            return False
        self.digests.add(digest)
        return True

    def __len__(self) -> int:
        return len(self.digests)
