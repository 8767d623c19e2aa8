"""Rid errors with context for tracking."""

from rid.clock import format_timestamp


class RidError(Exception):
    """Base error with timestamp and context for tracking."""

    def __init__(self, message, context=None, cause=None):
        super().__init__(message)
        self.timestamp = format_timestamp()
        self.context = context or {}
        self.cause = cause


class ParseError(RidError, ValueError):
    """Text is not a valid rid."""

    reason = "invalid rid"

    def __init__(self, message=None, text=None, **kwargs):
        context = kwargs.pop("context", {})
        if text is not None:
            context["text"] = text
        super().__init__(message or self.reason, context=context, **kwargs)

    @property
    def text(self):
        return self.context.get("text")


class StructureError(ParseError):
    """Text does not split into resource, index and unique parts."""

    reason = "invalid rid"

    def __init__(self, message=None, segments=None, **kwargs):
        context = kwargs.pop("context", {})
        if segments is not None:
            context["segments"] = segments
        super().__init__(message, context=context, **kwargs)


class IndexFormatError(ParseError):
    """Index part is not hex, or points to the future."""

    reason = "invalid index"

    def __init__(self, message=None, index=None, **kwargs):
        context = kwargs.pop("context", {})
        if index is not None:
            context["index"] = index
        super().__init__(message, context=context, **kwargs)


class UniquenessFormatError(ParseError):
    """Unique part is not base64url of a UUID string."""

    reason = "invalid unique identifier"

    def __init__(self, message=None, unique=None, **kwargs):
        context = kwargs.pop("context", {})
        if unique is not None:
            context["unique"] = unique
        super().__init__(message, context=context, **kwargs)


class DeserializationError(RidError, ValueError):
    """Embedded rid could not be read back from a document."""


class InvalidLiteralError(RidError):
    """A rid literal that was trusted to be valid is not."""
