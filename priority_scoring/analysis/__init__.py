"""Analysis modules for what-if scenario comparison."""

from .what_if import ScenarioAnalyzer, compare_scenarios, container_shift, create_analyzer

__all__ = ["ScenarioAnalyzer", "compare_scenarios", "container_shift", "create_analyzer"]
