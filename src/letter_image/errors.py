"""
Error taxonomy for the letter-image pipeline.

Everything the pipeline can fail with derives from LetterImageError, so the
orchestrator can recover at one boundary without catching unrelated bugs.
"""
from __future__ import annotations


class LetterImageError(Exception):
    """Base class for every recoverable pipeline failure."""


class SelectorInvalid(LetterImageError):
    """The routing signal did not hold a usable number."""


class ImageDecodeFailed(LetterImageError):
    """The bytes could not be decoded into a bitmap."""


class FileReadFailed(LetterImageError):
    """The image file or URL could not be read."""


class NoFileProvided(LetterImageError):
    """The file picker fired without a file."""


class PipelineFailed(LetterImageError):
    """A run ended on the error screen."""


class RunSuperseded(LetterImageError):
    """A newer run started while this one was suspended."""
