from PySide6.QtTest import QTest

from drillblock.config import REGENERATE_DEBOUNCE_MS
from drillblock.controller.scheduler import RegenerationScheduler


def _counting(scheduler):
    calls = []
    scheduler.triggered.connect(lambda: calls.append(1))
    return calls


def test_default_interval(qapp):
    assert RegenerationScheduler().interval == REGENERATE_DEBOUNCE_MS


def test_burst_collapses_into_one_trigger(qapp):
    scheduler = RegenerationScheduler(interval_ms=50)
    calls = _counting(scheduler)

    for _ in range(5):
        scheduler.schedule()
        QTest.qWait(10)
    assert calls == []
    assert scheduler.is_pending()

    QTest.qWait(200)
    assert len(calls) == 1
    assert not scheduler.is_pending()


def test_cancel(qapp):
    scheduler = RegenerationScheduler(interval_ms=30)
    calls = _counting(scheduler)

    scheduler.schedule()
    scheduler.cancel()
    QTest.qWait(100)
    assert calls == []


def test_flush_runs_pending_now(qapp):
    scheduler = RegenerationScheduler(interval_ms=10_000)
    calls = _counting(scheduler)

    scheduler.flush()
    assert calls == []

    scheduler.schedule()
    scheduler.flush()
    assert len(calls) == 1
    assert not scheduler.is_pending()
