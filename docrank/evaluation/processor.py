from typing import Any, Callable, List, Optional, Sequence

from loguru import logger

from docrank.errors import MissingAssistantConfig, NoDocuments
from docrank.evaluation.results import DocumentResult, error_result
from docrank.models.assistant_client import AssistantConfig, create_client, load_config
from docrank.models.extractor import extract_result
from docrank.models.runner import AssistantRunner
from docrank.utils.document_reader import Document


# on_status(index, file_name, status, message) with status in processing / completed / error.
# index is the position in the batch, so uploads sharing a name stay distinct.
StatusCallback = Callable[[int, str, str, Optional[str]], None]


def _notify(on_status: StatusCallback | None, index: int, name: str, status: str, message: str | None = None):
    if on_status:
        on_status(index, name, status, message)


# One document: read (once, up to max_chars), ask the assistant, extract fields
def process_document(runner: AssistantRunner, thread_id: str, item: Any) -> DocumentResult:

    document = Document(name=item.name, content=item.read_text(runner.config.max_chars))
    reply = runner.run(thread_id, document)
    ranking, summary = extract_result(reply)
    return DocumentResult(file_name=item.name, ranking=ranking, summary=summary)


#Batch entry point
def process_all(
    documents: Sequence[Any],
    runner: AssistantRunner | None = None,
    config: AssistantConfig | None = None,
    on_status: StatusCallback | None = None,
) -> List[DocumentResult]:
    """Rank and summarise every document on one shared assistant thread.

    `documents` are objects with a `name` and a `read_text()` method
    (`Document` or `UploadedFile`). Raises NoDocuments / MissingAssistantConfig
    before touching the remote service; after that, every document yields
    exactly one result and per-document failures become "Error: ..." results.
    """

    if not documents:
        raise NoDocuments("No documents provided")

    if runner is not None:
        config = runner.config
    elif config is None:
        config = load_config()

    if not config.assistant_id:
        raise MissingAssistantConfig("OPENAI_ASSISTANT_ID environment variable is not set")

    if runner is None:
        runner = AssistantRunner(create_client(config), config)

    logger.info("Processing {} document(s)", len(documents))

    # One thread for the whole batch, reused sequentially
    thread_id = runner.create_thread()

    results: List[DocumentResult] = []
    for index, item in enumerate(documents):
        _notify(on_status, index, item.name, "processing")
        try:
            result = process_document(runner, thread_id, item)
        except Exception as e:
            logger.error("Error processing file {}: {}", item.name, e)
            result = error_result(item.name, str(e))
            _notify(on_status, index, item.name, "error", result.summary)
        else:
            logger.info("Ranked {}: {}", item.name, result.ranking)
            _notify(on_status, index, item.name, "completed")
        results.append(result)

    return results
