"""Shared fixtures: an in-memory stand-in for the OpenAI threads API.

The fake records every call so tests can assert on what reached the
"remote" service, and plays back scripted run statuses and replies.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from docrank.models.assistant_client import AssistantConfig
from docrank.models.runner import AssistantRunner


def text_message(role: str, value: str, created_at: int = 0):
    return SimpleNamespace(
        role=role,
        created_at=created_at,
        content=[SimpleNamespace(type="text", text=SimpleNamespace(value=value))],
    )


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds


class FakeThreads:
    """Scripted replacement for `client.beta.threads`.

    `script` holds one (statuses, reply) entry per run. runs.retrieve returns
    `statuses` in order and keeps repeating the last one. A status may be a
    (status, error_message) tuple. `reply` is appended as an assistant
    message the first time the run reports completed; an Exception reply is
    raised from runs.create instead.
    """

    def __init__(self, script=None):
        self.script = list(script or [])
        self.calls: list[tuple] = []
        self.messages_by_thread: dict[str, list] = {}
        self.run_records: dict[str, dict] = {}
        self._ticks = 0
        self.messages = SimpleNamespace(create=self._create_message, list=self._list_messages)
        self.runs = SimpleNamespace(create=self._create_run, retrieve=self._retrieve_run)

    def _tick(self) -> int:
        self._ticks += 1
        return self._ticks

    def create(self):
        thread_id = f"thread_{len(self.messages_by_thread) + 1}"
        self.messages_by_thread[thread_id] = []
        self.calls.append(("threads.create", thread_id))
        return SimpleNamespace(id=thread_id)

    def _create_message(self, thread_id, role, content):
        self.calls.append(("messages.create", thread_id, role, content))
        self.messages_by_thread[thread_id].append(text_message(role, content, self._tick()))

    def _create_run(self, thread_id, assistant_id):
        self.calls.append(("runs.create", thread_id, assistant_id))
        statuses, reply = self.script.pop(0) if self.script else (["completed"], "")
        if isinstance(reply, Exception):
            raise reply
        run_id = f"run_{len(self.run_records) + 1}"
        self.run_records[run_id] = {"statuses": list(statuses), "reply": reply, "done": False}
        return SimpleNamespace(id=run_id)

    def _retrieve_run(self, run_id, thread_id):
        self.calls.append(("runs.retrieve", thread_id, run_id))
        record = self.run_records[run_id]
        statuses = record["statuses"]
        status = statuses.pop(0) if len(statuses) > 1 else statuses[0]

        last_error = None
        if isinstance(status, tuple):
            status, message = status
            last_error = SimpleNamespace(message=message)

        if status == "completed" and not record["done"]:
            record["done"] = True
            if record["reply"] is not None:
                self.messages_by_thread[thread_id].append(
                    text_message("assistant", record["reply"], self._tick())
                )
        return SimpleNamespace(id=run_id, status=status, last_error=last_error)

    def _list_messages(self, thread_id, order="desc"):
        self.calls.append(("messages.list", thread_id, order))
        data = list(self.messages_by_thread[thread_id])
        if order == "desc":
            data.reverse()
        return SimpleNamespace(data=data)

    def call_names(self) -> list[str]:
        return [c[0] for c in self.calls]


class FakeClient:
    def __init__(self, threads: FakeThreads):
        self.beta = SimpleNamespace(threads=threads)


@pytest.fixture
def config() -> AssistantConfig:
    return AssistantConfig(api_key="sk-test", assistant_id="asst_test", poll_interval=1.0, run_timeout=60.0)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_runner(config, clock):
    """Build (runner, fake_threads) from a run script."""

    def _make(script=None, cfg: AssistantConfig | None = None):
        fake = FakeThreads(script)
        runner = AssistantRunner(FakeClient(fake), cfg or config, sleep=clock.sleep, clock=clock)
        return runner, fake

    return _make
