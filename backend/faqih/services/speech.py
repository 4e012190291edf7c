"""Voice-to-text capability seam.

Speech capture happens on the client (browser speech recognition). The
server only needs to know whether a capability exists so the voice button
can be hidden, and treats any delivered transcript as ordinary typed text.
"""

import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

TranscriptHandler = Callable[[str], None]
ErrorHandler = Callable[[str], None]


class SpeechCapability(Protocol):
    available: bool

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def on_transcript(self, handler: TranscriptHandler) -> None: ...

    def on_error(self, handler: ErrorHandler) -> None: ...


class UnavailableSpeech:
    """Capability for platforms without speech recognition: every call is a no-op."""

    available = False

    def start(self) -> None:
        logger.debug("Speech recognition unavailable; start() ignored")

    def stop(self) -> None:
        pass

    def on_transcript(self, handler: TranscriptHandler) -> None:
        pass

    def on_error(self, handler: ErrorHandler) -> None:
        pass


def get_speech_capability() -> SpeechCapability:
    return UnavailableSpeech()
