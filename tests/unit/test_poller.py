from unittest.mock import MagicMock

from altseo.bulk.models import StepResult, StepStatus
from altseo.worker.poller import BulkPoller


def _progress(percentage: int) -> StepResult:
    return StepResult(StepStatus.PROGRESS, percentage, "Processing document")


def _make_poller(*results: StepResult) -> tuple[BulkPoller, MagicMock, MagicMock]:
    controller = MagicMock()
    controller.step.side_effect = list(results)
    sleep = MagicMock()
    return BulkPoller(controller, poll_interval_seconds=2.0, sleep=sleep), controller, sleep


class TestBulkPoller:
    def test_steps_until_complete(self) -> None:
        complete = StepResult(StepStatus.COMPLETE, 100, "Processing complete")
        poller, controller, sleep = _make_poller(_progress(0), _progress(50), complete)

        result = poller.run("keywords")

        assert result == complete
        assert controller.step.call_count == 3
        assert sleep.call_count == 2
        sleep.assert_called_with(2.0)

    def test_stops_on_stopped(self) -> None:
        stopped = StepResult(StepStatus.STOPPED, -1, "Process was stopped")
        poller, controller, _sleep = _make_poller(_progress(0), stopped)

        result = poller.run("alt")

        assert result is stopped
        controller.step.assert_called_with("alt")

    def test_keeps_polling_through_busy_and_errors(self) -> None:
        poller, controller, _sleep = _make_poller(
            StepResult(StepStatus.BUSY, 0, "Another process is already running"),
            StepResult(StepStatus.ERROR, 0, "Error processing: boom"),
            StepResult(StepStatus.COMPLETE, 100, "Processing complete"),
        )

        result = poller.run("keywords")

        assert result is not None and result.finished
        assert controller.step.call_count == 3

    def test_max_steps(self) -> None:
        poller, controller, _sleep = _make_poller(_progress(0), _progress(10), _progress(20))

        result = poller.run("keywords", max_steps=2)

        assert result == _progress(10)
        assert controller.step.call_count == 2

    def test_interrupt_requests_stop(self) -> None:
        poller, controller, sleep = _make_poller(_progress(0))
        sleep.side_effect = KeyboardInterrupt

        result = poller.run("keywords")

        controller.request_stop.assert_called_once_with("keywords")
        assert result == _progress(0)
