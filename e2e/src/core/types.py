from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, List, Union


@dataclass(frozen=True)
class Navigate:
    url: str
    kind = "navigate"

    def describe(self) -> str:
        return f"navigate {self.url}"


@dataclass(frozen=True)
class Fill:
    locator: str
    value: str
    kind = "fill"

    def describe(self) -> str:
        return f"fill {self.locator} = {self.value!r}"


@dataclass(frozen=True)
class Click:
    locator: str
    kind = "click"

    def describe(self) -> str:
        return f"click {self.locator}"


@dataclass(frozen=True)
class AssertText:
    locator: str
    expected: str
    kind = "assert_text"

    def describe(self) -> str:
        return f"assert text of {self.locator} contains {self.expected!r}"


@dataclass(frozen=True)
class AssertTitle:
    # regex, searched (not fully matched) against the page title
    pattern: str
    kind = "assert_title"

    def describe(self) -> str:
        return f"assert title matches /{self.pattern}/"


Step = Union[Navigate, Fill, Click, AssertText, AssertTitle]


@dataclass(frozen=True)
class Scenario:
    id: str
    name: str
    steps: Tuple[Step, ...]
    tags: Tuple[str, ...] = ()


class CaseStatus(str, Enum):
    NOT_RUN = "not_run"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


@dataclass
class TestResult:
    scenario_id: str
    name: str
    status: CaseStatus = CaseStatus.NOT_RUN
    failed_index: Optional[int] = None
    failed_step: Optional[Step] = None
    error_kind: Optional[str] = None
    message: Optional[str] = None
    expected: Optional[str] = None
    actual: Optional[str] = None
    trace: List[str] = field(default_factory=list)
    duration_sec: float = 0.0
    artifacts: List[str] = field(default_factory=list)

    # keep pytest from collecting this as a test class
    __test__ = False

    @property
    def passed(self) -> bool:
        return self.status == CaseStatus.PASSED

    def describe(self) -> str:
        if self.status != CaseStatus.FAILED:
            return f"{self.name}: {self.status.value}"
        if self.failed_index is None:
            head = f"{self.name}: failed outside its steps ({self.error_kind})"
        else:
            step = self.failed_step.describe() if self.failed_step is not None else "?"
            head = f"{self.name}: failed at step {self.failed_index} ({self.error_kind}) {step}"
        lines = [head, f"  {self.message}"]
        if self.expected is not None or self.actual is not None:
            lines.append(f"  expected: {self.expected!r}")
            lines.append(f"  actual:   {self.actual!r}")
        return "\n".join(lines)
