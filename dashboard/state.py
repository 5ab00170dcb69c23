from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass
class MutationState:
    """What a form action hands back to the page that submitted it."""

    errors: Optional[Dict[str, List[str]]] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"message": self.message}
        if self.errors is not None:
            data["errors"] = self.errors
        return data