# e2e/src/flows/suite.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, ContextManager, Dict, List, Optional

from src.core.session import BrowserSession
from src.core.types import Scenario, TestResult
from src.flows.runner import TestCase

logger = logging.getLogger(__name__)

SessionFactory = Callable[[TestCase], ContextManager[BrowserSession]]


@dataclass
class SuiteReport:
    label: str
    results: List[TestResult] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def failures(self) -> List[TestResult]:
        return [r for r in self.results if not r.passed]

    def format(self) -> str:
        lines = [f"{self.label}: {self.passed} passed, {self.failed} failed ({self.total} total)"]
        for r in self.results:
            if r.passed:
                lines.append(f"  PASS {r.name} ({r.duration_sec:.1f}s)")
            else:
                lines.append("  FAIL " + r.describe().replace("\n", "\n  "))
        return "\n".join(lines)


class Suite:
    """Named, ordered set of test cases run one after another."""

    def __init__(self, label: str) -> None:
        self.label = label
        self._cases: Dict[str, TestCase] = {}

    def add(self, scenario: Scenario, name: Optional[str] = None) -> TestCase:
        case = TestCase(scenario, name=name)
        if case.name in self._cases:
            raise ValueError(f"Duplicate test case name in suite '{self.label}': {case.name}")
        self._cases[case.name] = case
        return case

    @property
    def cases(self) -> List[TestCase]:
        return list(self._cases.values())

    def __len__(self) -> int:
        return len(self._cases)

    def run(self, session_factory: SessionFactory, **run_kwargs: Any) -> SuiteReport:
        """
        session_factory(case) must yield a fresh session per case;
        run_kwargs go to TestCase.run.
        """
        report = SuiteReport(label=self.label)
        logger.info("suite '%s': %d cases", self.label, len(self._cases))
        for case in self._cases.values():
            try:
                with session_factory(case) as session:
                    case.run(session, **run_kwargs)
            except Exception as e:
                # a broken session fails this case only; the rest still run
                logger.exception("suite '%s': case '%s' aborted", self.label, case.name)
                case.abort(e)
            report.results.append(case.result)
        logger.info("suite '%s': %d passed, %d failed", self.label, report.passed, report.failed)
        return report
