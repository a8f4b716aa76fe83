"""Dependency and run-state enumerations."""

from __future__ import annotations

from enum import Enum


class DependencyKind(Enum):
    """Why one instance node must be created after another."""

    CONTAINMENT = "containment"
    REFERENCE = "reference"
    ANCESTOR = "ancestor"


class RunState(Enum):
    """Lifecycle of an orchestrator run."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
