"""Search limits shared by all solvers."""

from __future__ import annotations
import json
import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional


DEFAULT_PROPAGATION_PASSES = 1000


@dataclass
class SearchLimits:
    """
    Bounds on a single solve.

    Attributes:
        max_nodes: Maximum search nodes before giving up (None = unbounded).
        time_limit_seconds: Wall-clock budget (None = unbounded).
        max_propagation_passes: Safety cap on propagation passes per call.
    """
    max_nodes: Optional[int] = None
    time_limit_seconds: Optional[float] = None
    max_propagation_passes: int = DEFAULT_PROPAGATION_PASSES

    def __post_init__(self):
        for name, kinds in (
            ("max_nodes", (int,)),
            ("time_limit_seconds", (int, float)),
            ("max_propagation_passes", (int,)),
        ):
            value = getattr(self, name)
            if value is None and name != "max_propagation_passes":
                continue
            if isinstance(value, bool) or not isinstance(value, kinds):
                raise ValueError(f"{name} must be a number, got {value!r}")
        if self.max_nodes is not None and self.max_nodes <= 0:
            raise ValueError(f"max_nodes must be positive, got {self.max_nodes}")
        if self.time_limit_seconds is not None and self.time_limit_seconds <= 0:
            raise ValueError(f"time_limit_seconds must be positive, got {self.time_limit_seconds}")
        if self.max_propagation_passes <= 0:
            raise ValueError(
                f"max_propagation_passes must be positive, got {self.max_propagation_passes}"
            )

    def replace(self, **overrides: Any) -> SearchLimits:
        """Copy with the non-None overrides applied."""
        values = asdict(self)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SearchLimits(**values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SearchLimits:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown search limit keys: {sorted(unknown)}")
        return cls(**dict(data))


def load_limits(path: str) -> SearchLimits:
    """Read SearchLimits from a JSON file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Limits file not found: {path}")
    with open(path, "r") as f:
        return SearchLimits.from_dict(json.load(f))
