from typing import Any, Callable, Dict, List, Optional, Tuple
import json
import re

from loguru import logger

from docrank.errors import ExtractionParseFailure


NO_SUMMARY = "No summary provided"
PARSE_FAILURE = "Failed to parse assistant response"

FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")
BARE_JSON_RE = re.compile(r'\{[\s\S]*"ranking"[\s\S]*"summary"[\s\S]*\}')

RANKING_RE = re.compile(r"ranking:?\s*(\d+)", re.IGNORECASE)
OUT_OF_TEN_RE = re.compile(r"(\d+)\s*/\s*10")
SUMMARY_RE = re.compile(r"summary:?\s*([\s\S]+?)(?:\n\n|\Z)", re.IGNORECASE)

Match = Optional[Tuple[int, str]]


def _to_ranking(value: Any) -> int:
    if isinstance(value, bool) or value is None:
        return 0
    try:
        ranking = int(value)
    except (TypeError, ValueError):
        return 0
    return max(0, min(10, ranking))


# Parse a JSON region; any decode error is terminal for the whole reply
def _parse_json_region(text: str) -> Tuple[int, str]:
    try:
        parsed = json.loads(text)
    except ValueError as e:
        raise ExtractionParseFailure(str(e)) from e

    # null has no fields to read; arrays and scalars just lack them
    if parsed is None:
        raise ExtractionParseFailure("JSON region is null")
    if not isinstance(parsed, dict):
        parsed = {}

    summary = parsed.get("summary") or ""
    if not isinstance(summary, str):
        summary = str(summary)

    return _to_ranking(parsed.get("ranking") or 0), summary


def _from_fenced_json(text: str) -> Match:
    m = FENCED_JSON_RE.search(text)
    if not m:
        return None
    return _parse_json_region(m.group(1))


def _from_bare_json(text: str) -> Match:
    m = BARE_JSON_RE.search(text)
    if not m:
        return None
    return _parse_json_region(m.group(0))


# Last resort: loose "ranking: N" / "N/10" and "summary: ..." fields
def _from_fields(text: str) -> Match:
    ranking = 0
    m = RANKING_RE.search(text) or OUT_OF_TEN_RE.search(text)
    if m:
        ranking = _to_ranking(m.group(1))

    m = SUMMARY_RE.search(text)
    summary = m.group(1).strip() if m else text.strip()
    return ranking, summary


STRATEGIES: List[Callable[[str], Match]] = [
    _from_fenced_json,
    _from_bare_json,
    _from_fields,
]


def extract_result(raw_text: str) -> Tuple[int, str]:
    """Turn a free-text assistant reply into (ranking, summary).

    Strategies run in order and the first one that finds a region wins.
    If a JSON region is found but does not decode, the reply is reported as
    unparseable; the field regexes are only used when no JSON-looking region
    exists at all. Never raises.
    """
    text = raw_text or ""
    ranking, summary = 0, ""

    try:
        for strategy in STRATEGIES:
            found = strategy(text)
            if found is not None:
                ranking, summary = found
                break
    except ExtractionParseFailure as e:
        logger.warning("Error parsing assistant response: {}", e)
        ranking, summary = 0, PARSE_FAILURE

    return ranking or 0, summary or NO_SUMMARY


def extract(raw_text: str) -> Dict[str, Any]:
    ranking, summary = extract_result(raw_text)
    return {"ranking": ranking, "summary": summary}
