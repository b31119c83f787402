"""
Progress tracking module.

Pure step-completion toggling and the progress figures derived from a plan.
"""
from .tracker import (
    FlatStep,
    PlanSummary,
    Progress,
    adjacent_step,
    day_progress,
    first_incomplete_step,
    flatten_steps,
    plan_progress,
    plan_summary,
    toggle_step,
)

__all__ = [
    "FlatStep",
    "PlanSummary",
    "Progress",
    "adjacent_step",
    "day_progress",
    "first_incomplete_step",
    "flatten_steps",
    "plan_progress",
    "plan_summary",
    "toggle_step",
]
