"""State owned by the dependency graph engine."""

from __future__ import annotations

from dataclasses import dataclass, field

from make_explorer.models import ReverseIndex, Rule


@dataclass
class GraphState:
    rules: dict[str, Rule] = field(default_factory=dict)
    reverse: ReverseIndex = field(default_factory=dict)
    history: list[str] = field(default_factory=list)  # inspected roots since the last cleanup
    inspections: int = 0  # inspect calls over the engine lifetime
