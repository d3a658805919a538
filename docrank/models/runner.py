from enum import Enum
from typing import Any, Callable, Optional
import time

from loguru import logger

from docrank.errors import NoAssistantResponse, RunFailed, RunTimedOut
from docrank.models.assistant_client import AssistantConfig, MAX_DOCUMENT_CHARS


# Prompt sent with every document
ANALYSIS_PROMPT = (
    "Please analyze this document and provide a ranking from 1-10 "
    "(10 being highest quality) and a brief summary (max 100 words). "
    "Document name: {name}. Content: {content}"
)


class RunState(str, Enum):
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


def build_prompt(name: str, content: str, max_chars: int = MAX_DOCUMENT_CHARS) -> str:
    return ANALYSIS_PROMPT.format(name=name, content=(content or "")[:max_chars])


def _first_text(message: Any) -> Optional[str]:
    for block in getattr(message, "content", None) or []:
        if getattr(block, "type", None) == "text":
            return block.text.value
    return None


def _latest_assistant_message(messages: Any) -> Any:
    # Pick by created_at so the result does not depend on list order
    data = list(getattr(messages, "data", messages) or [])
    candidates = [
        (getattr(m, "created_at", 0) or 0, -i, m)
        for i, m in enumerate(data)
        if getattr(m, "role", None) == "assistant"
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda c: (c[0], c[1]))[2]


class AssistantRunner:
    """Drives one assistant run per document on a caller-owned thread.

    `client` is anything exposing the OpenAI `beta.threads` surface
    (create, messages.create/list, runs.create/retrieve). `sleep` and
    `clock` are injectable so the polling loop can be driven without
    real waiting.
    """

    def __init__(
        self,
        client: Any,
        config: AssistantConfig,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.client = client
        self.config = config
        self.sleep = sleep
        self.clock = clock

    @property
    def threads(self):
        return self.client.beta.threads

    def create_thread(self) -> str:
        thread = self.threads.create()
        logger.info("Created conversation thread {}", thread.id)
        return thread.id

    def submit(self, thread_id: str, name: str, content: str) -> str:
        self.threads.messages.create(
            thread_id=thread_id,
            role="user",
            content=build_prompt(name, content, self.config.max_chars),
        )
        run = self.threads.runs.create(
            thread_id=thread_id,
            assistant_id=self.config.assistant_id,
        )
        logger.debug("Started run {} for {}", run.id, name)
        return run.id

    # Poll until completed / failed, or until the time budget runs out.
    # Any other status (cancelled, expired, requires_action...) keeps polling.
    def wait(self, thread_id: str, run_id: str) -> RunState:
        state = RunState.SUBMITTED
        failure = None
        deadline = self.clock() + self.config.run_timeout

        while state in (RunState.SUBMITTED, RunState.POLLING):
            run = self.threads.runs.retrieve(run_id=run_id, thread_id=thread_id)
            status = run.status
            logger.debug("Run {} status: {}", run_id, status)

            if status == "completed":
                state = RunState.COMPLETED
            elif status == "failed":
                last_error = getattr(run, "last_error", None)
                failure = getattr(last_error, "message", None) or "Unknown error"
                state = RunState.FAILED
            elif self.clock() >= deadline:
                state = RunState.TIMED_OUT
            else:
                state = RunState.POLLING
                self.sleep(self.config.poll_interval)

        if state is RunState.FAILED:
            raise RunFailed(f"Assistant run failed: {failure}")
        if state is RunState.TIMED_OUT:
            raise RunTimedOut("Assistant run timed out")
        return state

    def latest_reply(self, thread_id: str) -> str:
        messages = self.threads.messages.list(thread_id=thread_id, order="desc")
        message = _latest_assistant_message(messages)
        if message is None:
            raise NoAssistantResponse("No response from assistant")

        text = _first_text(message)
        if text is None:
            raise NoAssistantResponse("Assistant response contained no text")
        return text

    def run(self, thread_id: str, document: Any) -> str:
        content = document.read_text(self.config.max_chars)
        run_id = self.submit(thread_id, document.name, content)
        self.wait(thread_id, run_id)
        return self.latest_reply(thread_id)
