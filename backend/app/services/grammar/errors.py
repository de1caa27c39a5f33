"""
Grammar service error types.
"""


class GrammarServiceError(Exception):
    """Base exception for the prompt/response layer."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class MalformedResponseError(GrammarServiceError):
    """The AI answered, but not with the JSON shape we asked for."""
    pass


class InvalidGrammarRequestError(GrammarServiceError):
    """The caller's input cannot be turned into a prompt."""
    pass
