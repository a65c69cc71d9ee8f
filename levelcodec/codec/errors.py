"""Exceptions raised at the codec boundaries.

Encoding is strict: malformed dense input raises immediately. Decoding is
lenient about geometry (out-of-range chunks are clipped) but still refuses
payloads it cannot identify.
"""
from __future__ import annotations


class LevelCodecError(ValueError):
    code = "codec_error"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_dict(self):
        return {"error": self.message, "code": self.code}


class MalformedLevelError(LevelCodecError):
    """Input violates the dense or wire shape contract (ragged rows, wrong JSON types)."""

    code = "malformed"


class UnsupportedFormatError(LevelCodecError):
    """Stored payload carries a format tag or chunk size this codec does not read."""

    code = "unsupported_format"


class LevelTooLargeError(LevelCodecError):
    """Declared level size exceeds the cell budget the caller allows for decoding."""

    code = "too_large"


__all__ = ["LevelCodecError", "MalformedLevelError", "UnsupportedFormatError", "LevelTooLargeError"]
