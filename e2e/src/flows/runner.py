# e2e/src/flows/runner.py
from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from src.core.artifacts import Artifacts
from src.core.errors import StepError
from src.core.session import BrowserSession
from src.core.types import CaseStatus, Scenario, TestResult
from src.flows.executor import StepExecutor

logger = logging.getLogger(__name__)


class TestCase:
    """
    One scenario, run once: NOT_RUN -> RUNNING -> PASSED / FAILED.
    The first failing step ends the run; later steps are never executed.
    """

    __test__ = False

    def __init__(self, scenario: Scenario, name: Optional[str] = None) -> None:
        self.scenario = scenario
        self.name = name or scenario.name
        self.result = TestResult(scenario_id=scenario.id, name=self.name)

    @property
    def status(self) -> CaseStatus:
        return self.result.status

    def run(
        self,
        session: BrowserSession,
        timeout_ms: int = 30000,
        nav_timeout_ms: Optional[int] = None,
        artifacts_base_dir: Optional[Path] = None,
        tracing_stop: Optional[Callable[[str], None]] = None,
        poll_interval_sec: float = 0.2,
    ) -> TestResult:
        """
        tracing_stop is called with the trace.zip path once the scenario ends,
        pass or fail.
        """
        if self.result.status != CaseStatus.NOT_RUN:
            raise RuntimeError(f"Test case already ran: {self.name} ({self.result.status.value})")

        res = self.result
        res.status = CaseStatus.RUNNING
        artifacts = Artifacts(base_dir=artifacts_base_dir, scenario_id=self.scenario.id) if artifacts_base_dir else None
        executor = StepExecutor(session, timeout_ms=timeout_ms, nav_timeout_ms=nav_timeout_ms, poll_interval_sec=poll_interval_sec)

        logger.info("[%s] start (%d steps)", self.scenario.id, len(self.scenario.steps))
        started = time.time()
        try:
            for i, step in enumerate(self.scenario.steps):
                line = f"[{self.scenario.id}] step {i}: {step.describe()}"
                res.trace.append(line)
                logger.info(line)
                try:
                    executor.execute(step)
                except StepError as e:
                    logger.warning("[%s] step %d failed (%s): %s", self.scenario.id, i, e.kind, e.message)
                    self._fail(i, step, e.kind, e.message, e.expected, e.actual)
                except Exception as e:
                    # outside the step taxonomy (browser crash, bad step object): still just this case
                    logger.exception("[%s] step %d raised %s", self.scenario.id, i, type(e).__name__)
                    self._fail(i, step, "error", f"{type(e).__name__}: {e}")
                else:
                    continue
                if artifacts is not None:
                    res.artifacts.extend(artifacts.save_debug(session, f"failed_step_{i}"))
                return res
            res.status = CaseStatus.PASSED
            logger.info("[%s] passed", self.scenario.id)
            return res
        finally:
            res.duration_sec = time.time() - started
            if tracing_stop is not None and artifacts is not None:
                trace_path = str(artifacts.path("trace.zip"))
                tracing_stop(trace_path)
                res.artifacts.append(trace_path)

    def _fail(self, index, step, kind, message, expected=None, actual=None) -> None:
        res = self.result
        res.status = CaseStatus.FAILED
        res.failed_index = index
        res.failed_step = step
        res.error_kind = kind
        res.message = message
        res.expected = expected
        res.actual = actual

    def abort(self, error: BaseException) -> TestResult:
        """Fails the case for an error outside its steps (session setup or teardown)."""
        res = self.result
        if res.status in (CaseStatus.NOT_RUN, CaseStatus.RUNNING):
            res.status = CaseStatus.FAILED
            res.error_kind = "session"
            res.message = f"{type(error).__name__}: {error}"
        return res


def run_scenario(sc: Scenario, session: BrowserSession, **kwargs) -> TestResult:
    return TestCase(sc).run(session, **kwargs)
