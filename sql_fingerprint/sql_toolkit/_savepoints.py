"""Deterministic savepoint renaming.

Savepoint names are usually generated (``sa_savepoint_3``, ``s140234_x``)
and change from run to run, so they are replaced by ``s1``, ``s2``, ... in
the order they are first seen.  A namer lives for exactly one top-level
fingerprinting call; never share an instance between calls.
"""

from __future__ import annotations

_QUOTE_CHARS = "\"'`[]"


class SavepointNamer:
    """Map source savepoint identifiers to ``s<N>`` tokens in first-seen order."""

    def __init__(self, prefix: str = "s") -> None:
        self._prefix = prefix
        self._assigned: dict[str, str] = {}

    def name_for(self, source: str) -> str:
        """Return the token for *source*, assigning the next one on first sight.

        Quoting is ignored, so ``"abc"`` and ``abc`` share a token.
        """
        key = source.strip().strip(_QUOTE_CHARS)
        token = self._assigned.get(key)
        if token is None:
            token = f"{self._prefix}{len(self._assigned) + 1}"
            self._assigned[key] = token
        return token

    def __len__(self) -> int:
        return len(self._assigned)
