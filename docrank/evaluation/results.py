from dataclasses import dataclass
from typing import Any, Dict, List


ERROR_PREFIX = "Error"

SORT_FIELDS = ("ranking", "fileName")


@dataclass
class DocumentResult:
    file_name: str
    ranking: int
    summary: str

    # ranking 0 + "Error..." summary is how a failed document is encoded
    @property
    def is_error(self) -> bool:
        return self.ranking == 0 and self.summary.startswith(ERROR_PREFIX)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "ranking": self.ranking,
            "summary": self.summary,
        }


def error_result(file_name: str, message: str) -> DocumentResult:
    return DocumentResult(file_name, 0, f"{ERROR_PREFIX}: {message or 'Unknown error'}")


# Sort for display (table default: ranking, highest first)
def sort_results(
    results: List[DocumentResult],
    field: str = "ranking",
    descending: bool = True,
) -> List[DocumentResult]:

    if field not in SORT_FIELDS:
        raise ValueError(f"Cannot sort by {field!r}; expected one of {SORT_FIELDS}")

    if field == "fileName":
        key = lambda r: r.file_name.casefold()
    else:
        key = lambda r: r.ranking

    return sorted(results, key=key, reverse=descending)


# Per-file status shown next to each upload
def status_of(result: DocumentResult) -> Dict[str, Any]:
    if result.is_error:
        return {"status": "error", "message": result.summary}
    return {"status": "completed", "message": None}


def summarize_results(results: List[DocumentResult]) -> Dict[str, Any]:
    ok = [r for r in results if not r.is_error]
    mean = sum(r.ranking for r in ok) / len(ok) if ok else 0.0
    return {
        "documents": len(results),
        "errors": len(results) - len(ok),
        "mean_ranking": round(mean, 2),
    }
