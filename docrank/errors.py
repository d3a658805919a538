# Error taxonomy.
#
# Batch-fatal errors (MissingAssistantConfig, NoDocuments) propagate to the
# caller. Everything else is per-document and gets folded into a sentinel
# DocumentResult by the processor.


class DocRankError(Exception):
    pass


# Batch-fatal
class MissingAssistantConfig(DocRankError):
    pass


class NoDocuments(DocRankError):
    pass


class InvalidConfig(DocRankError):
    pass


# Per-document
class RunFailed(DocRankError):
    pass


class RunTimedOut(DocRankError):
    pass


class NoAssistantResponse(DocRankError):
    pass


class ExtractionParseFailure(DocRankError):
    pass


class UnsupportedDocument(DocRankError):
    pass
