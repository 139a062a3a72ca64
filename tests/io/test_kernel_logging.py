import io
import json
import logging

import pytest

from rr_sim.app.events import LoadDocument, LoadRejected, Tick, TrainDerailed
from rr_sim.io.kernel_logging import KernelLogging, _default_json_logger
from rr_sim.io.recorder import JsonlSink, MemorySink, Recorder
from rr_sim.sim.clock import SimClock


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    logger = logging.getLogger("rr_sim.test_kernel_logging")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    h = _ListHandler()
    logger.addHandler(h)
    yield logger, h
    logger.removeHandler(h)


def test_business_events_log_at_info_and_reach_the_recorder(captured):
    logger, h = captured
    sink = MemorySink()
    hooks = KernelLogging(
        run_id="r1",
        clock=SimClock.utc_epoch(2024, 1, 1),
        logger=logger,
        recorder=Recorder(sink),
    )
    ev = TrainDerailed(t=2.0, train="A", edge=(0, 1), pos=74.0)
    hooks.dispatch_start(ev, seq=1, qsize=0, handlers=0)

    (rec,) = h.records
    assert rec.levelname == "INFO"
    assert rec.getMessage() == "TrainDerailed"
    assert rec.extra["run_id"] == "r1"
    assert rec.extra["train"] == "A"
    assert rec.extra["wall"] == "2024-01-01T00:00:02+00:00"
    assert sink.events == [ev]


def test_routine_commands_stay_quiet_unless_debugging(captured):
    logger, h = captured
    quiet = KernelLogging(logger=logger)
    quiet.dispatch_start(Tick(t=0.0, delta_ms=16.0), seq=1, qsize=0, handlers=1)
    assert h.records == []

    loud = KernelLogging(logger=logger, debug=True)
    loud.dispatch_start(Tick(t=0.0, delta_ms=16.0), seq=1, qsize=0, handlers=1)
    assert [r.levelname for r in h.records] == ["DEBUG"]


def test_error_carries_reason_and_exception(captured):
    logger, h = captured
    hooks = KernelLogging(logger=logger)
    hooks.error(LoadRejected(t=0.0, reason="bad doc"), reason="handler_failed", exc=KeyError("x"))
    (rec,) = h.records
    assert rec.levelname == "ERROR"
    assert rec.extra["reason"] == "handler_failed"
    assert rec.extra["event_reason"] == "bad doc"
    assert rec.extra["error"].startswith("KeyError")


def test_payloads_are_not_logged(captured):
    logger, h = captured
    hooks = KernelLogging(logger=logger, debug=True)
    hooks.dispatch_start(LoadDocument(t=0.0, payload={"huge": "doc"}), seq=1, qsize=0, handlers=1)
    assert "data" not in h.records[0].extra


def test_json_formatter(capsys):
    log = _default_json_logger("rrsim_test_json_formatter", level="INFO")
    log.info("hello", extra={"extra": {"run_id": "x", "edge": (0, 1)}})
    line = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert line == {
        "level": "INFO",
        "msg": "hello",
        "logger": "rrsim_test_json_formatter",
        "run_id": "x",
        "edge": [0, 1],
    }


def test_jsonl_sink():
    buf = io.StringIO()
    Recorder(JsonlSink(buf)).emit(TrainDerailed(t=1.0, train="A", edge=(0, 1), pos=3.0))
    row = json.loads(buf.getvalue())
    assert row == {"event": "TrainDerailed", "t": 1.0, "train": "A", "edge": [0, 1], "pos": 3.0}
