"""
Variable registry: maps variable names to bit indices.

A variable's index is its position in first-occurrence order. Index *i* is
bit *i* of every assignment word, which is why the registry is capped.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Tuple

from .errors import VariableLimitExceeded

logger = logging.getLogger(__name__)

# Assignments are 32-bit words, one bit per variable.
MAX_VARIABLES = 32


class VariableRegistry:
    """Ordered, capacity-bounded set of variable names."""

    def __init__(self, limit: int = MAX_VARIABLES) -> None:
        if not 0 < limit <= MAX_VARIABLES:
            raise ValueError(f"limit must be in 1..{MAX_VARIABLES}, got {limit}")
        self._limit = limit
        self._names: List[str] = []
        self._index: Dict[str, int] = {}

    @property
    def limit(self) -> int:
        return self._limit

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(self._names)

    def resolve(self, name: str) -> int:
        """
        Return the bit index for ``name``, registering it on first sight.

        Raises:
            VariableLimitExceeded: if ``name`` would be one past the limit.
        """
        index = self._index.get(name)
        if index is not None:
            return index
        if len(self._names) >= self._limit:
            raise VariableLimitExceeded(name, self._limit)
        index = len(self._names)
        self._names.append(name)
        self._index[name] = index
        logger.debug("registered variable %r at bit %d", name, index)
        return index

    def index_of(self, name: str) -> int:
        """Look up an already registered name without registering it."""
        return self._index[name]

    def name_of(self, index: int) -> str:
        return self._names[index]

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __repr__(self) -> str:
        return f"VariableRegistry({self._names!r})"


__all__ = ["MAX_VARIABLES", "VariableRegistry"]
