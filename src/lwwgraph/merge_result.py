"""
Result of merging remote changes into an LWW-Element-Set.
"""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping

from .element import LWWElement


@dataclass(frozen=True)
class LWWElementSetMergeResult:
    """
    Effective changes of a merge, i.e. the received additions and removals
    that changed which elements are in the set. Both mappings are keyed by
    the unique value of the element.
    """

    effective_additions: Mapping[str, LWWElement] = field(default_factory=dict)
    effective_removals: Mapping[str, LWWElement] = field(default_factory=dict)

    def __post_init__(self):
        # Read-only views over private copies
        object.__setattr__(self, 'effective_additions',
                           MappingProxyType(dict(self.effective_additions)))
        object.__setattr__(self, 'effective_removals',
                           MappingProxyType(dict(self.effective_removals)))

    def is_empty(self) -> bool:
        """Whether the merge left the set unchanged."""
        return not self.effective_additions and not self.effective_removals

    def to_dict(self) -> Dict[str, Any]:
        return {
            'effective_additions': {
                uid: element.to_dict() for uid, element in self.effective_additions.items()
            },
            'effective_removals': {
                uid: element.to_dict() for uid, element in self.effective_removals.items()
            }
        }

    def __str__(self) -> str:
        return (f"LWWElementSetMergeResult(+{list(self.effective_additions)}, "
                f"-{list(self.effective_removals)})")
