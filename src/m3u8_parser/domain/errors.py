class ParseError(Exception):
    """Base class for failures that prevent a playlist from being produced."""


class FetchError(ParseError):
    """The playlist URI could not be retrieved."""

    def __init__(self, uri: str, reason: str):
        super().__init__(f"Failed to fetch playlist {uri}: {reason}")
        self.uri = uri
        self.reason = reason


class DecodeError(ParseError):
    """The fetched bytes are not valid text in the expected encoding."""

    def __init__(self, encoding: str, reason: str):
        super().__init__(f"Playlist is not valid {encoding} text: {reason}")
        self.encoding = encoding
        self.reason = reason
