"""Scenario generation pipeline.

- emotions: primary emotion, trigger and intensity for a run
- decisions: one decision at a time from the emotional state
- positions: running open-position state between decisions
- pnl: deterministic fold of decisions into realized P&L
- display: learner-facing adjustments applied after the fold
- scenario: orchestrator tying the layers together
"""

from .decisions import DecisionGenerator, normalize_action
from .display import apply_display_adjustments
from .emotions import EmotionalStateGenerator
from .pnl import FoldResult, fold_decisions
from .positions import PositionBook
from .scenario import (
    ScenarioOrchestrator,
    generate_custom_scenario,
    generate_random_scenario,
    validate_custom_inputs,
)

__all__ = [
    "DecisionGenerator",
    "EmotionalStateGenerator",
    "FoldResult",
    "PositionBook",
    "ScenarioOrchestrator",
    "apply_display_adjustments",
    "fold_decisions",
    "generate_custom_scenario",
    "generate_random_scenario",
    "normalize_action",
    "validate_custom_inputs",
]
