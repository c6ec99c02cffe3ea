"""Unused-target detector: rules not reached by any inspection since the last cleanup."""

from __future__ import annotations

from make_explorer.analysis.graph_models import GraphState
from make_explorer.errors import NoInspectionHistoryError
from make_explorer.models import Rule

PHONY_TARGET = ".PHONY"


def unused_targets(state: GraphState) -> list[str]:
    """Return targets whose visited marker is unset, in definition order.

    Raises NoInspectionHistoryError when nothing has ever been inspected.
    After a cleanup every target is reported until the next inspection.
    """
    if not state.inspections:
        raise NoInspectionHistoryError()
    return [name for name, rule in state.rules.items() if not rule.visited]


def phony_targets(rules: dict[str, Rule]) -> set[str]:
    phony = rules.get(PHONY_TARGET)
    if phony is None:
        return set()
    return set(phony.prerequisites)


def is_phony(rules: dict[str, Rule], target: str) -> bool:
    return target in phony_targets(rules)
