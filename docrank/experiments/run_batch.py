import sys
from typing import List

from docrank.errors import DocRankError
from docrank.evaluation.processor import process_all
from docrank.evaluation.results import sort_results, summarize_results
from docrank.utils.io import filter_supported, load_upload, write_json


USAGE = "usage: docrank-run FILE [FILE ...] [--out results.json]"


def _parse_args(argv: List[str]):
    paths, out_path = [], None
    i = 0
    while i < len(argv):
        if argv[i] == "--out":
            if i + 1 >= len(argv):
                raise SystemExit(USAGE)
            out_path = argv[i + 1]
            i += 2
            continue
        paths.append(argv[i])
        i += 1
    return paths, out_path


def main(argv: List[str] | None = None) -> int:
    #parse args
    paths, out_path = _parse_args(sys.argv[1:] if argv is None else argv)

    loaded = []
    for p in paths:
        try:
            loaded.append(load_upload(p))
        except FileNotFoundError as e:
            print(f"Error: {e}")

    uploads = filter_supported(loaded)
    print(f"\nDocuments selected: {len(uploads)} of {len(paths)}")

    def show_status(index, name, status, message):
        print(f"  [{status}] {name}" + (f": {message}" if message else ""))

    try:
        results = process_all(uploads, on_status=show_status)
    except DocRankError as e:
        print(f"Error: {e}")
        return 1

    #print final results
    stats = summarize_results(results)
    print("\n===== RESULTS =====")
    print(f"Documents: {stats['documents']}  Errors: {stats['errors']}  Mean ranking: {stats['mean_ranking']}")
    for r in sort_results(results):
        print(f"\n[{r.ranking:>2}] {r.file_name}\n{r.summary}")

    if out_path:
        write_json(out_path, [r.to_dict() for r in results])
        print("\nResults saved to:", out_path)

    return 0


if __name__ == "__main__":
    sys.exit(main())
