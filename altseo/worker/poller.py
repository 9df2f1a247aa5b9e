import time
from collections.abc import Callable

from altseo.bulk.controller import BulkJobController
from altseo.bulk.models import StepResult, StepStatus
from altseo.logging.logger import Log


class BulkPoller:
    """Poll loop: step -> report -> sleep, until the job finishes."""

    def __init__(
        self,
        controller: BulkJobController,
        poll_interval_seconds: float,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._controller = controller
        self._poll_interval = poll_interval_seconds
        self._sleep = sleep

    def run(self, kind: str, max_steps: int | None = None) -> StepResult | None:
        """Step the job until complete or stopped.

        If max_steps is set, give up after that many steps (for testing).
        Returns the last step result, None when interrupted before any step.
        """
        Log.info(f"Starting bulk {kind} run")
        last: StepResult | None = None
        steps = 0
        try:
            while max_steps is None or steps < max_steps:
                last = self._controller.step(kind)
                steps += 1
                self._report(kind, last)
                if last.finished:
                    break
                self._sleep(self._poll_interval)
        except KeyboardInterrupt:
            Log.info(f"Interrupted, requesting stop of bulk {kind} job")
            self._controller.request_stop(kind)
        return last

    @staticmethod
    def _report(kind: str, result: StepResult) -> None:
        if result.status is StepStatus.ERROR:
            Log.error(f"[{kind}] {result.message}")
        elif result.status is StepStatus.BUSY:
            Log.debug(f"[{kind}] {result.message}, waiting")
        else:
            Log.info(f"[{kind}] {result.percentage}% {result.message}")
