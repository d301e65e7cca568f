"""
Cursor Stabilization
====================
Chooses where the cursor lands when the row under it is about to disappear.

The rule only looks at the pre-mutation display order:
1. the row after the selected one, if any;
2. otherwise the row before it;
3. otherwise nothing (the table falls back to its default position).

After the refresh, resolve() checks the chosen identity against the rows that
actually survived and, if it vanished as well, walks outward from its old
position to the nearest survivor.
"""
from __future__ import annotations

from datetime import datetime
from typing import Collection, Optional, Sequence


class CursorStabilizer:

    @staticmethod
    def neighbor(order: Sequence[datetime], selected: Optional[datetime]) -> Optional[datetime]:
        if selected is None or selected not in order:
            return None
        idx = order.index(selected)
        if idx + 1 < len(order):
            return order[idx + 1]
        if idx > 0:
            return order[idx - 1]
        return None

    @staticmethod
    def resolve(old_order: Sequence[datetime], surviving: Collection[datetime],
                target: Optional[datetime]) -> Optional[datetime]:
        """Target if it survived, else the closest survivor by old order (following row wins ties)."""
        if target is None:
            return None
        if target in surviving:
            return target
        if target not in old_order:
            return None

        idx = old_order.index(target)
        for distance in range(1, len(old_order)):
            after = idx + distance
            if after < len(old_order) and old_order[after] in surviving:
                return old_order[after]
            before = idx - distance
            if before >= 0 and old_order[before] in surviving:
                return old_order[before]
        return None
