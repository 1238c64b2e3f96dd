"""
Per-call state for the value printer.

One PrintContext is created for every top-level print call and threaded
through the recursion. It is never reused or shared between calls.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class PrintContext:
    """
    Tracks:
    - Composite payloads already entered (only when cycle tracking is on)
    - Attributes and list items printed so far, across the whole output
    """
    # Keyed by identity; holding the payload keeps its id from being reused.
    seen: Optional[Dict[int, object]] = None
    attrs_printed: int = 0
    list_items_printed: int = 0

    @classmethod
    def create(cls, track_repeated: bool) -> "PrintContext":
        """A fresh context, with a visited set only if tracking is enabled."""
        return cls(seen={} if track_repeated else None)

    def enter(self, payload: object) -> bool:
        """
        Record that a composite is being printed.

        Returns False if it was already entered during this call. Entries are
        never removed, so shared (diamond) references count as repeats too.
        Always returns True when tracking is disabled.
        """
        if self.seen is None:
            return True
        key = id(payload)
        if key in self.seen:
            return False
        self.seen[key] = payload
        return True
