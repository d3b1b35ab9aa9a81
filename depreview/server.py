"""Registry wiring for the dependency review toolset."""

from __future__ import annotations

from depreview.dependency_review import get_dependency_review_compare
from depreview.github_client import GetClientFn
from depreview.tools import ToolRegistry
from depreview.translations import TranslationFn, null_translation


def build_registry(
    get_client: GetClientFn,
    t: TranslationFn = null_translation,
) -> ToolRegistry:
    """Build a registry holding every tool in the dependency review toolset."""
    registry = ToolRegistry()
    registry.register(*get_dependency_review_compare(get_client, t))
    return registry
