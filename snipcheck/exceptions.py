"""
SnipCheck exceptions

Only a malformed document aborts a run. Per-block failures are reported
through FailureKind, never raised.
"""


class SnipCheckError(Exception):
    """Base class for SnipCheck errors"""
    pass


class MalformedDocumentError(SnipCheckError):
    """A fenced code block was opened but never closed"""

    def __init__(self, offset: int, line: int, language: str = ""):
        self.offset = offset
        self.line = line
        self.language = language
        tag = f" ({language})" if language else ""
        super().__init__(
            f"Unterminated code fence{tag} opened at offset {offset} (line {line})"
        )
