"""
Error taxonomy shared by the gateway, the generators and the surfaces.
"""

from typing import Optional, Sequence


class IdeaMinerError(Exception):
    """Base class for every error raised by idea_miner"""


class RemoteAPIError(IdeaMinerError):
    """An upstream service (YouTube or the LLM) reported an error.

    The upstream message is kept verbatim so it can be shown to the user.
    """

    def __init__(self, message: str, reasons: Sequence[str] = (), status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.reasons = tuple(reasons)
        self.status = status


class MissingCredentialError(IdeaMinerError):
    """A required API key is absent, raised before any request is made"""

    def __init__(self, credential: str, message: Optional[str] = None):
        super().__init__(message or f"{credential} is missing. Please set it in Settings.")
        self.credential = credential


class MalformedResponseError(IdeaMinerError):
    """A response could not be decoded into the expected shape"""
