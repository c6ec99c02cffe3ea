"""Dependency graph engine: cycle-safe inspection trees and reverse lookups over parsed rules."""

from __future__ import annotations

import logging

from make_explorer.analysis.graph_models import GraphState
from make_explorer.analysis.unused import is_phony, unused_targets
from make_explorer.errors import UnknownTargetError
from make_explorer.models import ParseResult, Rule, TreeLine, Variable

logger = logging.getLogger(__name__)


class DependencyGraphEngine:
    """Query a completed ParseResult.

    The engine only ever mutates the ``visited`` marker of each rule and its
    own inspection history; the parsed tables are otherwise read-only.
    """

    def __init__(self, result: ParseResult):
        self.result = result
        self.state = GraphState(rules=result.rules, reverse=result.reverse_index)

    @property
    def history(self) -> list[str]:
        return list(self.state.history)

    def inspect(self, target: str) -> list[TreeLine]:
        """Depth-first, pre-order dependency tree rooted at ``target``.

        A known prerequisite is descended into the first time it is reached
        and shown as an already-visited leaf afterwards. Each child is shown
        at most once under a given parent. Prerequisites without a rule are
        omitted. Every node is marked before it is descended into, so the
        walk terminates on cyclic graphs.
        """
        rules = self.state.rules
        root = rules.get(target)
        if root is None:
            raise UnknownTargetError(target)

        lines = [TreeLine(target, 0)]
        # (remaining prerequisites, children already shown, depth of children)
        stack = [(iter(root.prerequisites), set(), 1)]
        while stack:
            tokens, shown, depth = stack[-1]
            token = next(tokens, None)
            if token is None:
                stack.pop()
                continue

            rule = rules.get(token)
            if rule is None or token in shown:
                continue
            shown.add(token)

            if rule.visited:
                lines.append(TreeLine(token, depth, already_visited=True))
                continue

            rule.visited = True
            lines.append(TreeLine(token, depth))
            stack.append((iter(rule.prerequisites), set(), depth + 1))

        root.visited = True
        self.state.history.append(target)
        self.state.inspections += 1
        logger.debug("inspected %s: %d node(s)", target, len(lines))
        return lines

    def unused(self) -> list[str]:
        return unused_targets(self.state)

    def used_by(self, name: str) -> dict[str, int]:
        """Targets that list ``name`` as a prerequisite, with occurrence counts."""
        return dict(self.state.reverse.get(name, {}))

    def dump(self, target: str) -> Rule:
        rule = self.state.rules.get(target)
        if rule is None:
            raise UnknownTargetError(target)
        return rule

    def is_phony(self, target: str) -> bool:
        return is_phony(self.state.rules, target)

    def variable(self, name: str) -> Variable | None:
        return self.result.variables.get(name)

    def cleanup(self) -> None:
        """Clear every visited marker and the inspection history."""
        for rule in self.state.rules.values():
            rule.visited = False
        self.state.history.clear()
