"""
Rid - Resource IDentifier.

Sortable, URL-friendly, globally unique IDs that carry the resource type.
Format: <resource>.<index>.<unique>
  resource: caller-supplied type name, must not contain "."
  index:    creation time, nanoseconds since Unix epoch, lowercase hex
  unique:   base64url (unpadded) of a random v4 UUID's canonical string
"""

import base64
import binascii
import json
import re
import uuid

from pydantic_core import core_schema

from rid.clock import now_nanos, random_bytes, to_datetime
from rid.errors import (
    DeserializationError,
    IndexFormatError,
    InvalidLiteralError,
    ParseError,
    StructureError,
    UniquenessFormatError,
)
from rid.logging import get_logger

SEPARATOR = "."

_HEX = re.compile(r"[0-9a-fA-F]+")
_BASE64URL = re.compile(r"[A-Za-z0-9_-]*={0,2}")
_UUID = re.compile(r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}")
_MAX_INDEX = 2**63 - 1

# Tolerated clock skew in nanoseconds when checking for future indexes.
_skew_ns = 0


def configure(skew_ns=0):
    """Set the default future-index tolerance from config."""
    global _skew_ns
    if skew_ns < 0:
        raise ValueError("skew_ns must be >= 0")
    _skew_ns = skew_ns


def _encode_unique(raw):
    token = str(uuid.UUID(bytes=raw, version=4))
    return base64.urlsafe_b64encode(token.encode("ascii")).decode("ascii").rstrip("=")


def _decode_unique(unique):
    if not _BASE64URL.fullmatch(unique):
        raise UniquenessFormatError(unique=unique)
    stripped = unique.rstrip("=")
    try:
        decoded = base64.urlsafe_b64decode(stripped + "=" * (-len(stripped) % 4))
        token = decoded.decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise UniquenessFormatError(unique=unique, cause=e) from e
    if not _UUID.fullmatch(token):
        raise UniquenessFormatError(unique=unique)
    return uuid.UUID(token)


def _decode_index(index):
    if not _HEX.fullmatch(index):
        raise IndexFormatError(index=index)
    nanos = int(index, 16)
    if nanos > _MAX_INDEX:
        raise IndexFormatError(index=index)
    return nanos


class Rid:
    """An immutable resource identifier.

    Build rids with Rid.new, Rid.parse or Rid.must. Calling Rid(...) directly
    is the raw constructor: fields are stored as given and never checked, so
    the result is only a valid rid if the caller already validated them.
    """

    __slots__ = ("resource", "index", "unique")

    def __init__(self, resource, index, unique):
        # Raw constructor, no validation.
        object.__setattr__(self, "resource", resource)
        object.__setattr__(self, "index", index)
        object.__setattr__(self, "unique", unique)

    def __setattr__(self, name, value):
        raise AttributeError(f"Rid is immutable, cannot set {name!r}")

    def __delattr__(self, name):
        raise AttributeError(f"Rid is immutable, cannot delete {name!r}")

    @classmethod
    def new(cls, resource, clock=None, entropy=None):
        """Create a fresh rid for the given resource name."""
        if not isinstance(resource, str):
            raise TypeError(f"resource must be str, not {type(resource).__name__}")
        clock = clock or now_nanos
        entropy = entropy or random_bytes
        index = format(clock(), "x")
        return cls(resource, index, _encode_unique(entropy(16)))

    @classmethod
    def parse(cls, text, clock=None, skew_ns=None):
        """Parse a rid from its canonical string form.

        Raises StructureError, IndexFormatError or UniquenessFormatError.
        Decoding is validation only: the returned rid keeps the original text
        of every part.
        """
        if not isinstance(text, str):
            raise TypeError(f"rid must be str, not {type(text).__name__}")
        try:
            parts = text.split(SEPARATOR)
            if len(parts) != 3:
                raise StructureError(segments=len(parts))

            resource, index, unique = parts
            nanos = _decode_index(index)
            now = (clock or now_nanos)()
            if nanos > now + (_skew_ns if skew_ns is None else skew_ns):
                # The index is in the future.
                raise IndexFormatError(index=index, context={"now": now})

            _decode_unique(unique)
        except ParseError as e:
            e.context.setdefault("text", text)
            get_logger().debug("Rid rejected", error=e, **e.context)
            raise
        return cls(resource, index, unique)

    @classmethod
    def must(cls, text):
        """Parse a trusted rid literal, e.g. a compiled-in constant.

        Any failure means the program itself is wrong, so it is raised as
        InvalidLiteralError rather than a ParseError that input validation
        might catch. Never use on untrusted input.
        """
        try:
            return cls.parse(text)
        except ParseError as e:
            get_logger().error("Invalid rid literal", error=e, text=text)
            raise InvalidLiteralError(f"invalid rid literal {text!r}: {e}", context={"text": text}, cause=e) from e

    @property
    def nanos(self):
        """Creation time as nanoseconds since Unix epoch."""
        return int(self.index, 16)

    @property
    def created_at(self):
        return to_datetime(self.nanos)

    def _key(self):
        return (self.resource, self.index, self.unique)

    def _sort_key(self):
        return (self.resource, self.nanos, self.unique)

    def __str__(self):
        return self.resource + SEPARATOR + self.index + SEPARATOR + self.unique

    def __repr__(self):
        return f"Rid({str(self)!r})"

    def __eq__(self, other):
        if not isinstance(other, Rid):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __lt__(self, other):
        if not isinstance(other, Rid):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other):
        if not isinstance(other, Rid):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other):
        if not isinstance(other, Rid):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other):
        if not isinstance(other, Rid):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __reduce__(self):
        return (Rid, self._key())

    def to_json(self):
        """Serialize as a quoted JSON string."""
        return json.dumps(str(self))

    @classmethod
    def from_json(cls, data):
        """Read a rid back from its JSON string form."""
        try:
            text = json.loads(data)
            if not isinstance(text, str):
                raise TypeError(f"expected JSON string, got {type(text).__name__}")
            return cls.parse(text)
        except (ValueError, TypeError) as e:
            # ParseError and JSONDecodeError are both ValueErrors
            raise DeserializationError(f"cannot deserialize rid: {e}", context={"data": data}, cause=e) from e

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type, handler):
        from_str = core_schema.no_info_after_validator_function(cls.parse, core_schema.str_schema())
        return core_schema.json_or_python_schema(
            json_schema=from_str,
            python_schema=core_schema.union_schema([core_schema.is_instance_schema(cls), from_str]),
            serialization=core_schema.plain_serializer_function_ser_schema(str, when_used="json"),
        )


class RidJSONEncoder(json.JSONEncoder):
    """JSON encoder that writes rids in their canonical string form."""

    def default(self, o):
        if isinstance(o, Rid):
            return str(o)
        return super().default(o)


def new(resource, clock=None, entropy=None):
    return Rid.new(resource, clock=clock, entropy=entropy)


def parse(text, clock=None, skew_ns=None):
    return Rid.parse(text, clock=clock, skew_ns=skew_ns)


def must(text):
    return Rid.must(text)
