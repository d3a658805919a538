from dataclasses import dataclass
import os
from openai import OpenAI
from dotenv import load_dotenv

from docrank.errors import InvalidConfig

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
ENV_PATH = os.path.join(ROOT_DIR, ".env")

load_dotenv(ENV_PATH)


# Documents are cut to this many characters before they are sent
MAX_DOCUMENT_CHARS = 15000

DEFAULT_POLL_INTERVAL = 1.0
DEFAULT_RUN_TIMEOUT = 60.0



@dataclass
class AssistantConfig:
    api_key: str | None = None
    assistant_id: str | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL  # seconds between status checks
    run_timeout: float = DEFAULT_RUN_TIMEOUT      # per-document budget, from poll-loop entry
    max_chars: int = MAX_DOCUMENT_CHARS


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise InvalidConfig(f"{name} must be a number of seconds, got {raw!r}") from None
    if value < 0:
        raise InvalidConfig(f"{name} must not be negative, got {raw!r}")
    return value


# Build config from environment (.env already loaded above)
def load_config() -> AssistantConfig:
    return AssistantConfig(
        api_key=os.getenv("OPENAI_API_KEY"),
        assistant_id=os.getenv("OPENAI_ASSISTANT_ID") or None,
        poll_interval=_float_env("DOCRANK_POLL_INTERVAL", DEFAULT_POLL_INTERVAL),
        run_timeout=_float_env("DOCRANK_RUN_TIMEOUT", DEFAULT_RUN_TIMEOUT),
    )


def create_client(cfg: AssistantConfig) -> OpenAI:
    return OpenAI(api_key=cfg.api_key)
