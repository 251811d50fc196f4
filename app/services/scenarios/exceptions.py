class AbortedNotifyingException(Exception):
    """
    Raised when a notification must intentionally not be sent, for example
    because the case type is not whitelisted. This is not an error.
    """
    pass


class ScenarioNotImplementedException(Exception):
    """Raised when an event does not match any supported scenario"""

    def __init__(self, message: str = "The notification event is not implemented") -> None:
        super().__init__(message)


class ProcessingFailedException(Exception):
    """Raised when the data of a scenario was gathered but could not be processed"""
    pass
