from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from salary_explorer.core.selection import SelectionPredicate
from salary_explorer.core.transform import ViewTransform


@dataclass
class ExplorerState:
    """
    Serializable snapshot of the interactive state, kept in a dcc.Store
    between callbacks.

    Fields:

    - predicate: the active brush selection (pass-all when nothing is brushed)
    - transforms: zoom/pan per view id; views missing here are at identity
    """

    predicate: SelectionPredicate = field(default_factory=SelectionPredicate.pass_all)
    transforms: Dict[str, ViewTransform] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "predicate": self.predicate.to_dict(),
            "transforms": {
                view_id: list(t.as_tuple()) for view_id, t in self.transforms.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> ExplorerState:
        data = data or {}
        transforms = {
            view_id: ViewTransform(k=float(k), tx=float(tx), ty=float(ty))
            for view_id, (k, tx, ty) in (data.get("transforms") or {}).items()
        }
        return cls(
            predicate=SelectionPredicate.from_dict(data.get("predicate")),
            transforms=transforms,
        )
