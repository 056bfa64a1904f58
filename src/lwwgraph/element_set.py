"""
Last-Write-Wins Element Set (LWW-Element-Set).

The set keeps two append-only logs of timestamped elements: one of additions
and one of removals. Whether an element is in the set is always resolved from
the two logs: it is in the set if its latest addition is strictly later than
its latest removal. Ties are resolved in favour of the removal.
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .element import LWWElement
from .merge_result import LWWElementSetMergeResult

logger = logging.getLogger(__name__)


def latest_per_element(elements: Iterable[LWWElement]) -> Dict[str, LWWElement]:
    """Index elements by unique value, keeping the latest of each (first one on ties)."""
    latest: Dict[str, LWWElement] = {}
    for element in elements:
        uid = element.unique_value()
        if uid not in latest or element.timestamp > latest[uid].timestamp:
            latest[uid] = element
    return latest


class LWWElementSet:
    """
    LWW-Element-Set CRDT.

    Local updates go through add() and remove(). Changes coming from other
    replicas go through merge(), which absorbs them unconditionally and reports
    which of them actually changed the resolved state of the set.
    """

    def __init__(self):
        self.add_log: List[LWWElement] = []
        self.remove_log: List[LWWElement] = []

    def add(self, element: LWWElement) -> None:
        """Record an addition of the element."""
        self.add_log.append(element)

    def remove(self, element: LWWElement) -> None:
        """Record a removal of the element. The element does not need to be in the set."""
        self.remove_log.append(element)

    def additions(self) -> Tuple[LWWElement, ...]:
        return tuple(self.add_log)

    def removals(self) -> Tuple[LWWElement, ...]:
        return tuple(self.remove_log)

    def exists(self, element: LWWElement) -> bool:
        """Check if the element is currently in the set."""
        latest_add = self._latest_timestamp(self.add_log, element)
        if latest_add is None:
            return False
        latest_rem = self._latest_timestamp(self.remove_log, element)
        if latest_rem is None:
            return True
        return latest_rem < latest_add

    def get_all_elements(self) -> List[LWWElement]:
        """
        Resolve all elements currently in the set.

        Each element is returned once, as its latest addition, in the order the
        element was first added.
        """
        return list(self._resolve().values())

    def merge(self, add_elements: Iterable[LWWElement],
              remove_elements: Iterable[LWWElement]) -> LWWElementSetMergeResult:
        """
        Merge concurrent changes from another replica.

        Every addition and removal is absorbed into the logs. The result only
        reports the effective ones:
        - an addition is effective if the element was not in the set, or if it
          is later than the addition that put the element there;
        - a removal is effective if the element was in the set, or if it is
          later than every removal of the element seen so far;
        - an addition and a removal of the same element received together
          neutralize each other when, combined, they leave the element in or
          out of the set as it was.
        Additions only count while the element ends up in the set, and
        removals only while it ends up out of it.
        """
        add_elements = list(add_elements)
        remove_elements = list(remove_elements)

        # Index current state for comparison
        latest_removals = latest_per_element(self.remove_log)
        current = self._resolve(latest_removals)

        self.add_log.extend(add_elements)
        self.remove_log.extend(remove_elements)
        merged = self._resolve()

        candidate_additions = latest_per_element(add_elements)
        candidate_removals = latest_per_element(remove_elements)

        effective_additions: Dict[str, LWWElement] = {}
        for uid, added in candidate_additions.items():
            if uid not in merged:
                # Superseded by a removal
                continue
            if uid not in current or current[uid].timestamp < added.timestamp:
                effective_additions[uid] = added

        effective_removals: Dict[str, LWWElement] = {}
        for uid, removed in candidate_removals.items():
            if uid in merged:
                # Outlived by a later addition
                continue
            if uid in current:
                effective_removals[uid] = removed
            elif uid in latest_removals and latest_removals[uid].timestamp < removed.timestamp:
                effective_removals[uid] = removed

        for uid in candidate_additions.keys() & candidate_removals.keys():
            if (uid in current) != (uid in merged):
                continue
            if uid in effective_additions or uid in effective_removals:
                logger.debug(f"Neutralized addition and removal of {uid}")
                effective_additions.pop(uid, None)
                effective_removals.pop(uid, None)

        logger.debug(
            f"Merged {len(add_elements)} additions and {len(remove_elements)} removals: "
            f"{len(effective_additions)} effective additions, "
            f"{len(effective_removals)} effective removals"
        )
        return LWWElementSetMergeResult(effective_additions, effective_removals)

    def _resolve(self, latest_removals: Optional[Dict[str, LWWElement]] = None
                 ) -> Dict[str, LWWElement]:
        """Map the unique value of each element in the set to its latest addition."""
        if latest_removals is None:
            latest_removals = latest_per_element(self.remove_log)
        return {
            uid: added
            for uid, added in latest_per_element(self.add_log).items()
            if uid not in latest_removals or latest_removals[uid].timestamp < added.timestamp
        }

    @staticmethod
    def _latest_timestamp(log: List[LWWElement], element: LWWElement) -> Optional[float]:
        timestamps = [logged.timestamp for logged in log if logged.equals(element)]
        return max(timestamps) if timestamps else None

    def __len__(self) -> int:
        return len(self._resolve())

    def __str__(self) -> str:
        elements = ', '.join(element.unique_value() for element in self.get_all_elements())
        return f"LWWElementSet({{{elements}}})"
