import os
import json
from typing import Any, Iterable, List
from pathlib import Path

from loguru import logger

from docrank.errors import UnsupportedDocument
from docrank.utils.document_reader import (
    DOCX_MIME,
    PDF_MIME,
    TEXT_MIME,
    UploadedFile,
    guess_mime_type,
)


ALLOWED_MIME_TYPES = (PDF_MIME, TEXT_MIME, DOCX_MIME)
MAX_UPLOAD_BYTES = 10 * 1024 * 1024   # 10MB per file


def validate_upload(upload: UploadedFile) -> UploadedFile:
    mime_type = upload.mime_type or guess_mime_type(upload.name)

    if mime_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedDocument(f"Unsupported file type for {upload.name}: {mime_type or 'unknown'}")

    if upload.size > MAX_UPLOAD_BYTES:
        raise UnsupportedDocument(
            f"{upload.name} is {upload.size / 1024 / 1024:.2f} MB (max 10MB)"
        )

    upload.mime_type = mime_type
    return upload


# Keep only uploads the processor should see
def filter_supported(uploads: Iterable[UploadedFile]) -> List[UploadedFile]:

    accepted = []
    for upload in uploads:
        try:
            accepted.append(validate_upload(upload))
        except UnsupportedDocument as e:
            logger.warning("Skipping upload: {}", e)
    return accepted


# Loading documents from disk
def load_upload(path: str) -> UploadedFile:

    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    return UploadedFile(
        name=path.name,
        data=path.read_bytes(),
        mime_type=guess_mime_type(path.name),
    )


# Final Results JSON
def write_json(path: str, data: Any):

    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)
