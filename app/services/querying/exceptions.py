class QueryContextException(ValueError):
    """
    Raised when a query is issued without enough context to determine the
    resource to request, or with a URI of the wrong kind. This signals a
    programming error and must not be retried.
    """
    pass


class QueryFailedException(Exception):
    """
    Raised when an upstream service returned a non-success response, or a body
    which could not be deserialized into the expected model.
    """
    def __init__(self, url: str, body: str, message: str) -> None:
        super().__init__(message)
        self.url = url
        self.body = body
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} (url: {self.url}, response: {self.body})"
