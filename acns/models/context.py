"""
Live context snapshot passed from the data layer to the prompt builder.

A field set to None means that part of the snapshot is unavailable
(for example after a failed fetch) and is left out of the prompt.
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class LiveContext:
    settings: Optional[Dict[str, Any]] = None
    services: Optional[List[Dict[str, Any]]] = None
    recent_blogs: Optional[List[Dict[str, Any]]] = None
    active_jobs: Optional[List[Dict[str, Any]]] = None
    products: Optional[List[Dict[str, Any]]] = None

    @classmethod
    def empty(cls) -> "LiveContext":
        return cls()

    @property
    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.settings,
                self.services,
                self.recent_blogs,
                self.active_jobs,
                self.products,
            )
        )
