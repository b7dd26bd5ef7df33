"""Process-local integer identity sequences.

Every aggregate type draws its identifiers from its own sequence. Values
start at 1, only ever increase and are never handed out twice, even after
the row that used them is deleted.
"""

import threading
from itertools import count

_lock = threading.Lock()
_sequences: dict[str, count] = {}
_last_issued: dict[str, int] = {}


def next_id(sequence: str) -> int:
    """Return the next identifier of ``sequence``."""
    with _lock:
        counter = _sequences.setdefault(sequence, count(1))
        value = next(counter)
        _last_issued[sequence] = value
        return value


def reserve(sequence: str, value: int) -> None:
    """Make sure ``sequence`` never issues ``value`` or anything below it.

    Used when rows are created with explicit identifiers (seed data).
    """
    with _lock:
        if value > _last_issued.get(sequence, 0):
            _sequences[sequence] = count(value + 1)
            _last_issued[sequence] = value


def reset_sequences() -> None:
    """Forget every sequence. Only meaningful together with a data reset."""
    with _lock:
        _sequences.clear()
        _last_issued.clear()
