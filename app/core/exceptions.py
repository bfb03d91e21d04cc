class MoodcastError(Exception):
    """Base class for errors raised while running a conversation turn."""


class TransportError(MoodcastError):
    """Network or HTTP failure talking to an external API."""


class ParseError(MoodcastError):
    """Malformed JSON from Gemini or the podcast directory."""


class UpstreamError(MoodcastError):
    """Gemini reported a failure or did not answer in time."""
