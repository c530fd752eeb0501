"""
Key Pool - Round-robin rotation over Gemini API keys.

Requests are spread over every configured key in turn. There is no
health tracking: a key that failed is simply used again on its next
turn.
"""
from typing import Iterable, Tuple

from acns.core.exceptions import ConfigurationError


class KeyPool:
    """
    Ordered credentials with a shared cursor.

    Example:
        >>> pool = KeyPool(["k1", "k2"])
        >>> [pool.next() for _ in range(3)]
        ['k1', 'k2', 'k1']
    """

    def __init__(self, keys: Iterable[str]):
        self._keys: Tuple[str, ...] = tuple(keys)
        self._cursor = 0

    def next(self) -> str:
        """
        Return the next key, wrapping at the end of the list.

        Raises:
            ConfigurationError: If no keys are configured
        """
        if not self._keys:
            raise ConfigurationError("No Gemini API keys available")
        key = self._keys[self._cursor % len(self._keys)]
        self._cursor += 1
        return key

    @property
    def is_empty(self) -> bool:
        return not self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        # never print the keys themselves
        return f"KeyPool(size={len(self._keys)})"
