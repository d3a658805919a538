# Top-level package for docrank.

# Uploads documents to an OpenAI assistant and collects, per document,
# a 1-10 quality ranking and a short summary.

# Subpackages:
#     models/        → assistant client config, run orchestration, reply extraction
#     utils/         → document text extraction, upload validation, IO helpers
#     evaluation/    → batch processing and result helpers
#     experiments/   → command-line runner
#     visualization/ → Streamlit upload page
