"""Dependency graph queries over a parsed build file."""

from make_explorer.analysis.dependency_graph import DependencyGraphEngine
from make_explorer.analysis.graph_models import GraphState
from make_explorer.analysis.unused import is_phony, phony_targets, unused_targets

__all__ = [
    "DependencyGraphEngine",
    "GraphState",
    "is_phony",
    "phony_targets",
    "unused_targets",
]
