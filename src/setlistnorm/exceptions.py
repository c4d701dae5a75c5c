class SetlistError(Exception):
    """Base exception for setlistnorm."""


class InputDecodeError(SetlistError):
    """Raised when setlist input bytes cannot be decoded as text."""

    def __init__(self, source: str, encoding: str):
        self.source = source
        self.encoding = encoding
        super().__init__(f"Could not decode {source} as {encoding}")
