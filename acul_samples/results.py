"""
Per-item outcomes and batch reports.

Fetch, build, deploy and cleanup all process a list of screens one at a
time. Expected per-screen failures are recorded as ItemResult values rather
than raised, and the command exits non-zero only after the whole batch has
been summarised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ItemStatus(str, Enum):
    """Outcome of processing one screen."""

    OK = "ok"
    # Build only: compile failed, a no-op module was written instead
    PLACEHOLDER = "placeholder"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class ItemResult:
    screen_id: str
    status: ItemStatus
    reason: str | None = None
    artifact: str | None = None

    @classmethod
    def ok(cls, screen_id: str, artifact: str | None = None) -> ItemResult:
        return cls(screen_id, ItemStatus.OK, artifact=artifact)

    @classmethod
    def failed(cls, screen_id: str, reason: str) -> ItemResult:
        return cls(screen_id, ItemStatus.FAILED, reason=reason)


@dataclass
class BatchReport:
    """Ordered collection of item results for one command run."""

    items: list[ItemResult] = field(default_factory=list)

    def add(self, result: ItemResult) -> ItemResult:
        self.items.append(result)
        return result

    def count(self, status: ItemStatus) -> int:
        return sum(1 for item in self.items if item.status == status)

    @property
    def succeeded(self) -> int:
        return self.count(ItemStatus.OK) + self.count(ItemStatus.PLACEHOLDER)

    @property
    def failed(self) -> int:
        return self.count(ItemStatus.FAILED)

    @property
    def skipped(self) -> int:
        return self.count(ItemStatus.SKIPPED)

    @property
    def total(self) -> int:
        return len(self.items)

    @property
    def failures(self) -> list[ItemResult]:
        return [item for item in self.items if item.status == ItemStatus.FAILED]

    @property
    def exit_code(self) -> int:
        return 1 if self.failed else 0

    def summary(self) -> dict[str, int]:
        return {"succeeded": self.succeeded, "failed": self.failed, "total": self.total}

    def summary_lines(self, title: str) -> list[str]:
        """Tabulated summary printed at the end of every command."""
        rows = [
            ("Succeeded", self.succeeded),
            ("Failed", self.failed),
        ]
        if self.skipped:
            rows.append(("Skipped", self.skipped))
        placeholders = self.count(ItemStatus.PLACEHOLDER)
        if placeholders:
            rows.append(("Placeholders", placeholders))
        rows.append(("Total", self.total))

        lines = ["=" * 50, title, "=" * 50]
        lines.extend(f"  {label + ':':<14}{value}" for label, value in rows)
        for item in self.failures:
            lines.append(f"  x {item.screen_id}: {item.reason}")
        lines.append("=" * 50)
        return lines
