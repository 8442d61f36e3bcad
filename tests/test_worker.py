from __future__ import annotations

import math
import threading
import time
from typing import Iterable, List

from bldcmon.core.channels import Channel
from bldcmon.core.models import Command, Disable, Enable, SetAngle, SetTorque, StatusSample
from bldcmon.core.worker import DeviceWorker, start_worker
from bldcmon.link.base import LinkError
from bldcmon.link.simulated import SimulatedLink


class RecordingLink:
    """Device link that remembers commands and echoes elapsed time."""

    def __init__(self, fail_on: Iterable[type] = ()) -> None:
        self.applied: List[Command] = []
        self.fail_on = tuple(fail_on)
        self.closed = False

    def apply(self, command: Command) -> None:
        if isinstance(command, self.fail_on):
            raise LinkError(f"cannot apply {command!r}")
        self.applied.append(command)

    def read_status(self, elapsed_s: float) -> StatusSample:
        return StatusSample(timestamp=elapsed_s, angle=0.0, velocity=0.0, torque=0.0)

    def close(self) -> None:
        self.closed = True


class ScriptedClock:
    def __init__(self, times: Iterable[float]) -> None:
        self._times = iter(times)

    def __call__(self) -> float:
        return next(self._times)


def _make_worker(link, clock) -> tuple[DeviceWorker, Channel[Command], Channel[StatusSample]]:
    commands: Channel[Command] = Channel("commands")
    status: Channel[StatusSample] = Channel("status")
    worker = DeviceWorker(link, commands, status, sample_period_s=0.001, clock=clock)
    return worker, commands, status


def test_step_applies_pending_commands_in_order_then_emits() -> None:
    link = RecordingLink()
    worker, commands, status = _make_worker(link, ScriptedClock([10.0, 10.0, 10.001]))
    sent = [SetAngle(float(i)) for i in range(20)] + [Enable(), Disable()]
    for command in sent:
        commands.send(command)

    first = worker.step()

    assert link.applied == sent
    assert first is not None and first.timestamp == 0.0
    assert status.drain() == [first]

    second = worker.step()
    assert second is not None
    assert math.isclose(second.timestamp, 0.001, abs_tol=1e-9)
    assert worker.applied == len(sent)
    assert worker.emitted == 2


def test_step_without_commands_still_emits() -> None:
    link = RecordingLink()
    worker, _, status = _make_worker(link, ScriptedClock([0.0, 0.0, 0.5, 1.0]))

    for _ in range(3):
        worker.step()

    assert [s.timestamp for s in status.drain()] == [0.0, 0.5, 1.0]
    assert link.applied == []


def test_timestamps_strictly_increase_when_clock_stalls() -> None:
    link = RecordingLink()
    worker, _, status = _make_worker(link, lambda: 42.0)

    for _ in range(5):
        worker.step()

    stamps = [s.timestamp for s in status.drain()]
    assert len(stamps) == 5
    assert all(a < b for a, b in zip(stamps, stamps[1:]))


def test_failed_command_is_logged_and_loop_continues(caplog) -> None:
    link = RecordingLink(fail_on=(SetTorque,))
    worker, commands, status = _make_worker(link, ScriptedClock([0.0, 0.0, 0.001]))
    commands.send(SetAngle(1.0))
    commands.send(SetTorque(5.0))
    commands.send(Enable())

    with caplog.at_level("ERROR", logger="bldcmon.core.worker"):
        sample = worker.step()

    assert sample is not None
    assert link.applied == [SetAngle(1.0), Enable()]
    assert worker.failed_commands == 1
    assert "SetTorque" in caplog.text

    commands.send(Disable())
    worker.step()
    assert link.applied[-1] == Disable()
    assert len(status.drain()) == 2


def test_status_read_failure_skips_the_tick() -> None:
    class BrokenStatusLink(RecordingLink):
        def read_status(self, elapsed_s: float) -> StatusSample:
            raise LinkError("sensor offline")

    worker, _, status = _make_worker(BrokenStatusLink(), ScriptedClock([0.0, 0.0]))

    assert worker.step() is None
    assert len(status) == 0


def test_closed_status_channel_drops_samples_silently() -> None:
    link = RecordingLink()
    worker, commands, status = _make_worker(link, ScriptedClock([0.0, 0.0, 0.001]))
    status.close()
    commands.send(Enable())

    assert worker.step() is not None
    assert worker.step() is not None
    assert worker.emitted == 0
    assert link.applied == [Enable()]


def test_run_stops_on_event_and_releases_link() -> None:
    link = RecordingLink()
    worker, commands, _ = _make_worker(link, time.monotonic)
    stop = threading.Event()
    thread = threading.Thread(target=worker.run, args=(stop,), daemon=True)
    thread.start()
    time.sleep(0.02)
    stop.set()
    thread.join(1.0)

    assert not thread.is_alive()
    assert link.closed
    assert commands.closed
    assert worker.emitted > 0


def _wait_for(predicate, timeout: float = 2.0) -> bool:
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.005)
    return predicate()


def test_background_worker_applies_commands_in_order() -> None:
    link = SimulatedLink()
    commands: Channel[Command] = Channel("commands")
    sent = [SetAngle(float(i)) for i in range(100)]
    for command in sent:
        commands.send(command)

    handle = start_worker(link, sample_period_s=0.001, commands=commands)
    try:
        assert _wait_for(lambda: len(link.applied) == len(sent))
    finally:
        handle.stop(join=True, timeout=1.0)

    assert list(link.applied) == sent
    assert not handle.is_alive()
    assert link.closed


def test_background_worker_emits_monotonic_timestamps() -> None:
    handle = start_worker(SimulatedLink(), sample_period_s=0.001)
    collected: List[StatusSample] = []
    try:
        assert _wait_for(lambda: collected.extend(handle.status.drain()) or len(collected) >= 50)
    finally:
        handle.stop(join=True, timeout=1.0)
    collected.extend(handle.status.drain())

    stamps = [s.timestamp for s in collected]
    assert all(a < b for a, b in zip(stamps, stamps[1:]))
    assert handle.commands.closed
    assert handle.commands.try_send(Enable()) is False
