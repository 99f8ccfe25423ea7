class ShredderError(Exception):
    """Base exception for all inspection and redaction errors."""


class UnsupportedFileTypeError(ShredderError):
    """Raised when a file classifies as unsupported but reaches the engine."""


class DecodeError(ShredderError):
    """Raised when a format decoder cannot parse the input buffer."""


class EncodeError(ShredderError):
    """Raised when the sanitized output cannot be serialized."""


class ConversionWarning(ShredderError):
    """Raised by the HEIC converter; the pipeline folds it into a TranscodeResult."""


class SessionStateError(ShredderError):
    """Raised when a session operation is invoked in the wrong stage."""
