"""
Tolerant scalar converters for Tumblr payloads.

The platform is loose about scalar encodings: booleans arrive as ``"true"``
strings, integers as empty strings, enums as snake_case tokens. Each
converter here is a bidirectional codec (``decode`` for the wire value,
``encode`` for writing it back), and is also exposed as a pydantic
``Annotated`` type so models can declare the wire shape per field.
"""

import logging
from datetime import datetime, timezone
from enum import Enum, Flag
from types import MappingProxyType
from typing import Annotated, Any, Generic, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BeforeValidator, PlainSerializer

from .exceptions import DecodingError

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class BoolConverter:
    """Reads ``"true"/"false"`` (any case), ``0/1`` or native booleans."""

    TRUE_TOKENS = frozenset({"true", "1", "yes"})
    FALSE_TOKENS = frozenset({"false", "0", "no", ""})

    @classmethod
    def decode(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if value is None:
            return False
        if isinstance(value, int):
            if value in (0, 1):
                return bool(value)
            raise DecodingError("Invalid boolean value", details=repr(value))
        if isinstance(value, str):
            token = value.strip().lower()
            if token in cls.TRUE_TOKENS:
                return True
            if token in cls.FALSE_TOKENS:
                return False
        raise DecodingError("Invalid boolean value", details=repr(value))

    @staticmethod
    def encode(value: bool, as_string: bool = False) -> Union[bool, str]:
        if as_string:
            return "true" if value else "false"
        return bool(value)


class LongConverter:
    """Reads integers that may arrive as numeric strings or empty strings."""

    @staticmethod
    def decode(value: Any) -> int:
        if value is None:
            return 0
        if isinstance(value, bool):
            raise DecodingError("Invalid integer value", details=repr(value))
        if isinstance(value, int):
            return value
        if isinstance(value, float):
            if value.is_integer():
                return int(value)
            raise DecodingError("Invalid integer value", details=repr(value))
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return 0
            try:
                return int(text)
            except ValueError:
                raise DecodingError("Invalid integer value", details=repr(value))
        raise DecodingError("Invalid integer value", details=repr(value))

    @staticmethod
    def encode(value: int) -> str:
        return str(value).lower()


class TimestampConverter:
    """Converts Unix epoch seconds to aware UTC datetimes and back."""

    @staticmethod
    def decode(value: Any) -> datetime:
        if isinstance(value, datetime):
            if value.tzinfo is None:
                return value.replace(tzinfo=timezone.utc)
            return value.astimezone(timezone.utc)
        if isinstance(value, bool) or value is None:
            raise DecodingError("Invalid timestamp value", details=repr(value))
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise DecodingError("Invalid timestamp value", details="empty string")
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            raise DecodingError("Invalid timestamp value", details=repr(value))
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise DecodingError("Invalid timestamp value", details=repr(value))

    @staticmethod
    def encode(value: datetime) -> int:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())


class EnumStringConverter(Generic[E]):
    """
    Maps enum members to their documented wire tokens through an explicit
    lookup table.

    The table is declared once per enum at import time and frozen. Every
    single-valued member must carry an entry; composite flag members (such
    as ``ALL``) are encoded through their set bits. For ``Flag`` enums,
    ``encode_flags``/``decode_flags`` convert to and from a token array in
    table declaration order.
    """

    def __init__(self, enum_type: Type[E], table: Mapping[E, str]):
        missing = [
            member.name
            for member in enum_type.__members__.values()
            if member not in table and not self._is_composite(member)
        ]
        if missing:
            raise ValueError(
                f"{enum_type.__name__} members without wire token: {', '.join(missing)}"
            )

        self.enum_type = enum_type
        self._to_wire: Mapping[E, str] = MappingProxyType(dict(table))
        self._from_wire: Mapping[str, E] = MappingProxyType(
            {token: member for member, token in table.items()}
        )

    @staticmethod
    def _is_composite(member: Enum) -> bool:
        if not isinstance(member, Flag):
            return False
        value = member.value
        return value == 0 or (value & (value - 1)) != 0

    @property
    def tokens(self) -> List[str]:
        """All wire tokens in declaration order."""
        return list(self._to_wire.values())

    def encode(self, value: E) -> str:
        try:
            return self._to_wire[value]
        except KeyError:
            raise ValueError(f"No wire token for {value!r}")

    def decode(self, token: Any) -> E:
        if isinstance(token, self.enum_type):
            return token
        if not isinstance(token, str):
            raise DecodingError(
                f"Invalid {self.enum_type.__name__} token", details=repr(token)
            )
        member = self._from_wire.get(token.strip().lower())
        if member is None:
            raise DecodingError(
                f"Unknown {self.enum_type.__name__} token", details=repr(token)
            )
        return member

    def decode_or_none(self, token: Any) -> Optional[E]:
        """Lenient decode: unknown or missing tokens become None."""
        if token is None or token == "":
            return None
        try:
            return self.decode(token)
        except DecodingError:
            logger.debug(f"Ignoring unknown {self.enum_type.__name__} token {token!r}")
            return None

    def encode_or_none(self, value: Optional[E]) -> Optional[str]:
        return None if value is None else self.encode(value)

    def encode_flags(self, value: E) -> List[str]:
        return [token for member, token in self._to_wire.items() if member in value]

    def decode_flags(self, tokens: Iterable[str], strict: bool = True) -> E:
        result = self.enum_type(0)
        for token in tokens:
            if strict:
                result |= self.decode(token)
            else:
                member = self.decode_or_none(token)
                if member is not None:
                    result |= member
        return result

    def decode_flag_or_empty(self, token: Any) -> E:
        """Lenient single-token decode for flag enums: unknown becomes the empty flag."""
        if isinstance(token, list):
            return self.decode_flags(token, strict=False)
        member = self.decode_or_none(token)
        return self.enum_type(0) if member is None else member

    def encode_flag_token(self, value: E) -> Union[str, List[str], None]:
        if value in self._to_wire:
            return self._to_wire[value]
        if not value:
            return None
        return self.encode_flags(value)


def _optional_timestamp(value: Any) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return TimestampConverter.decode(value)


def _optional_timestamp_encode(value: Optional[datetime]) -> Optional[int]:
    return None if value is None else TimestampConverter.encode(value)


# Pydantic field types carrying the converters
TumblrBool = Annotated[
    bool,
    BeforeValidator(BoolConverter.decode),
    PlainSerializer(BoolConverter.encode, return_type=bool),
]

TumblrBoolString = Annotated[
    bool,
    BeforeValidator(BoolConverter.decode),
    PlainSerializer(lambda value: BoolConverter.encode(value, as_string=True), return_type=str),
]

TumblrLong = Annotated[
    int,
    BeforeValidator(LongConverter.decode),
    PlainSerializer(LongConverter.encode, return_type=str),
]

Timestamp = Annotated[
    Optional[datetime],
    BeforeValidator(_optional_timestamp),
    PlainSerializer(_optional_timestamp_encode, return_type=Optional[int]),
]


__all__ = [
    "BoolConverter",
    "LongConverter",
    "TimestampConverter",
    "EnumStringConverter",
    "TumblrBool",
    "TumblrBoolString",
    "TumblrLong",
    "Timestamp",
]
