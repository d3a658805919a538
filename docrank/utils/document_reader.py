from dataclasses import dataclass
from typing import List
import io
import os

import fitz  # PyMuPDF
from docx import Document as DocxDocument

from docrank.models.assistant_client import MAX_DOCUMENT_CHARS


PDF_MIME = "application/pdf"
TEXT_MIME = "text/plain"
DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

MIME_BY_SUFFIX = {
    ".pdf": PDF_MIME,
    ".txt": TEXT_MIME,
    ".docx": DOCX_MIME,
}


def guess_mime_type(name: str) -> str | None:
    suffix = os.path.splitext(name)[1].lower()
    return MIME_BY_SUFFIX.get(suffix)


# clean lines by stripping whitespace and removing empties
def _clean_lines(lines: List[str]) -> List[str]:

    cleaned = []
    for line in lines:
        line = line.strip()
        if not line:
            continue
        cleaned.append(line)
    return cleaned


def pdf_bytes_to_text(data: bytes) -> str:
    pages = []
    with fitz.open(stream=data, filetype="pdf") as doc:
        for page in doc:
            lines = _clean_lines(page.get_text("text").split("\n"))
            if lines:
                pages.append("\n".join(lines))
    return "\n\n".join(pages)


def docx_bytes_to_text(data: bytes) -> str:
    doc = DocxDocument(io.BytesIO(data))
    return "\n".join(_clean_lines([p.text for p in doc.paragraphs]))


def bytes_to_text(data: bytes, mime_type: str | None = None, name: str = "") -> str:
    mime_type = mime_type or guess_mime_type(name)

    if mime_type == PDF_MIME:
        return pdf_bytes_to_text(data)
    if mime_type == DOCX_MIME:
        return docx_bytes_to_text(data)

    # Plain text and anything else the caller let through
    return data.decode("utf-8", errors="replace")


@dataclass
class Document:
    name: str
    content: str

    def read_text(self, max_chars: int = MAX_DOCUMENT_CHARS) -> str:
        return (self.content or "")[:max_chars]


@dataclass
class UploadedFile:
    name: str
    data: bytes
    mime_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)

    def read_text(self, max_chars: int = MAX_DOCUMENT_CHARS) -> str:
        return bytes_to_text(self.data, self.mime_type, self.name)[:max_chars]
