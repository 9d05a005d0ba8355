class ResultsError(Exception):
    """Base class for problems with upstream election results."""


class FetchError(ResultsError):
    """The results endpoint could not be reached or answered with a non-2xx status."""

    def __init__(self, territory_key: str, reason: str):
        super().__init__(f"{territory_key}: {reason}")
        self.territory_key = territory_key
        self.reason = reason


class MalformedPayloadError(ResultsError):
    """The results endpoint answered, but not with the expected JSON shape."""
