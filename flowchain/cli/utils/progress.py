"""Stage-by-stage progress output for multi-step commands."""

import time
from contextlib import contextmanager
from typing import Dict, Iterator, List

import click


class ProgressTracker:
    """Echo numbered stage headers and how long each stage took.

    Usage::

        tracker = ProgressTracker(["Load", "Write"])
        with tracker.stage() as notes:
            ...
            notes.append("2 projects loaded")

    Attributes:
        stages: Stage names in execution order
        completed: Number of stages that finished
        durations: Seconds spent per finished stage, keyed by stage name
    """

    def __init__(self, stages: List[str]):
        if not stages:
            raise ValueError("ProgressTracker needs at least one stage")
        self.stages = stages
        self.completed = 0
        self.durations: Dict[str, float] = {}

    @property
    def total_stages(self) -> int:
        return len(self.stages)

    def header(self) -> str:
        if self.is_complete():
            return f"[{self.total_stages}/{self.total_stages}] Complete"
        return f"[{self.completed + 1}/{self.total_stages}] {self.stages[self.completed]}"

    def is_complete(self) -> bool:
        return self.completed >= self.total_stages

    @contextmanager
    def stage(self) -> Iterator[List[str]]:
        """Run the next stage.

        Detail lines appended to the yielded list are echoed under the
        header once the stage finishes. A failing stage is not counted.

        Raises:
            RuntimeError: If every stage already ran
        """
        if self.is_complete():
            raise RuntimeError("All stages already completed")

        name = self.stages[self.completed]
        click.echo(self.header())
        notes: List[str] = []
        started = time.perf_counter()
        yield notes
        elapsed = time.perf_counter() - started

        for note in notes:
            click.echo(f"  {note}")
        self.durations[name] = elapsed
        self.completed += 1

    def summary(self) -> str:
        """One line with the total time of the finished stages."""
        total = sum(self.durations.values())
        return f"{self.completed}/{self.total_stages} stages in {total:.2f}s"
