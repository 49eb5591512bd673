"""Built-in primitive element casters.

=========  ==============================  ===================
name       accepts                         fails with kind
=========  ==============================  ===================
Mixed      anything, unchanged             –
Number     int, float, numeric strings     ``number``
String     str and scalar values           ``string``
Boolean    truthiness, "true"/"false"/…    –
Date       datetime, date, ms, ISO-8601    ``date``
Identifier UUID, hex string, 16 bytes      ``identifier``
Buffer     bytes-like, str, list of ints   ``buffer``
=========  ==============================  ===================

``None`` is kept by every caster.
"""

from __future__ import annotations

import math
import re
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

import regex

from ..core import MISSING, SchemaType, is_sequence
from ..errors import CastError
from ..handler_groups import COMPARISON_HANDLERS, NUMBER_HANDLERS, SET_HANDLERS, STRING_HANDLERS
from ..handlers.scalar import keep


class MixedCaster(SchemaType):
    """Untyped values — stored and queried exactly as given."""

    type_name = "Mixed"

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        return value

    def cast_for_query(self, conditional: Any, value: Any = MISSING) -> Any:
        if value is MISSING:
            return conditional
        return keep(self, value)


class NumberCaster(SchemaType):
    """Numbers.  Numeric strings are parsed as ``int`` first, then ``float``."""

    type_name = "Number"
    conditional_handlers = NUMBER_HANDLERS

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        if value is None:
            return None
        if isinstance(value, bool):
            return int(value)
        if isinstance(value, (int, float)):
            if isinstance(value, float) and math.isnan(value):
                raise CastError("number", value, self.path)
            return value
        if isinstance(value, str):
            text = value.strip()
            if not text:
                return None
            try:
                return int(text)
            except ValueError:
                pass
            try:
                number = float(text)
            except ValueError:
                raise CastError("number", value, self.path) from None
            if math.isnan(number):
                raise CastError("number", value, self.path)
            return number
        if isinstance(value, Decimal) or hasattr(value, "__float__"):
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise CastError("number", value, self.path) from None
            if not math.isnan(number):
                return number
        raise CastError("number", value, self.path)


class StringCaster(SchemaType):
    """Strings.  Scalars are stringified; containers and bytes are rejected."""

    type_name = "String"
    conditional_handlers = STRING_HANDLERS

    def cast_for_query(self, conditional: Any, value: Any = MISSING) -> Any:
        if value is MISSING and isinstance(conditional, (re.Pattern, regex.Pattern)):
            return conditional
        return super().cast_for_query(conditional, value)

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (int, float, Decimal, uuid.UUID)):
            return str(value)
        raise CastError("string", value, self.path)


class BooleanCaster(SchemaType):
    type_name = "Boolean"
    conditional_handlers = {"$ne": COMPARISON_HANDLERS["$ne"], "$in": SET_HANDLERS["$in"], "$nin": SET_HANDLERS["$nin"]}

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        if value is None:
            return None
        if value in ("0", "false"):
            return False
        if value in ("1", "true"):
            return True
        return bool(value)


class DateCaster(SchemaType):
    """Datetimes.  Numbers are milliseconds since the epoch (UTC)."""

    type_name = "Date"
    conditional_handlers = {**COMPARISON_HANDLERS, **SET_HANDLERS}

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return self._from_millis(value)
        if isinstance(value, str):
            text = value.strip()
            try:
                return self._from_millis(float(text))
            except ValueError:
                pass
            try:
                return datetime.fromisoformat(text.replace("Z", "+00:00"))
            except ValueError:
                raise CastError("date", value, self.path) from None
        raise CastError("date", value, self.path)

    def _from_millis(self, millis: float) -> datetime:
        try:
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise CastError("date", millis, self.path) from None


class IdentifierCaster(SchemaType):
    """Identifiers (``uuid.UUID``).  Used with the ``ref`` option for references."""

    type_name = "Identifier"
    conditional_handlers = {**COMPARISON_HANDLERS, **SET_HANDLERS}

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        if value is None or isinstance(value, uuid.UUID):
            return value
        try:
            if isinstance(value, str):
                return uuid.UUID(value)
            if isinstance(value, (bytes, bytearray)):
                return uuid.UUID(bytes=bytes(value))
        except ValueError:
            raise CastError("identifier", value, self.path) from None
        raise CastError("identifier", value, self.path)


class BufferCaster(SchemaType):
    type_name = "Buffer"
    conditional_handlers = {**COMPARISON_HANDLERS, **SET_HANDLERS}

    def cast(self, value: Any, doc: Any = None, init: bool = False) -> Any:
        if value is None or isinstance(value, bytes):
            return value
        if isinstance(value, (bytearray, memoryview)):
            return bytes(value)
        if isinstance(value, str):
            return value.encode("utf-8")
        if is_sequence(value):
            try:
                return bytes(value)
            except (TypeError, ValueError):
                raise CastError("buffer", value, self.path) from None
        raise CastError("buffer", value, self.path)
