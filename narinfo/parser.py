import enum
import typing as t

from narinfo.ids import StorePathId, DerivationId
from narinfo.errors import (
    EmptyValue,
    InvalidIdentifier,
    InvalidInteger,
    LineCorruptNoColon,
    LineUnknownKey,
    UnexpectedSpace,
)


U64_MAX = 2**64 - 1
DIGITS = "0123456789"

# Written by some tools in place of a real deriver.
UNKNOWN_DERIVER = "unknown-deriver"


class Field(str, enum.Enum):
    STORE_PATH = "StorePath"
    URL = "URL"
    COMPRESSION = "Compression"
    FILE_HASH = "FileHash"
    FILE_SIZE = "FileSize"
    NAR_HASH = "NarHash"
    NAR_SIZE = "NarSize"
    REFERENCES = "References"
    DERIVER = "Deriver"
    SIG = "Sig"


class Datum(t.NamedTuple):
    field: Field
    value: t.Any


def _nonempty(key: str, value: str) -> str:
    if not value:
        raise EmptyValue(key)
    return value


def _token(key: str, value: str) -> str:
    _nonempty(key, value)
    for offset, char in enumerate(value):
        if char.isspace():
            raise UnexpectedSpace(key, offset)
    return value


def _u64(key: str, value: str) -> int:
    if not value:
        raise InvalidInteger(key, value, "empty value")
    for offset, char in enumerate(value):
        if char not in DIGITS:
            raise InvalidInteger(key, value, f"invalid digit {char!r} at offset {offset}")
    number = int(value, 10)
    if number > U64_MAX:
        raise InvalidInteger(key, value, "value exceeds the unsigned 64-bit range")
    return number


def _references(key: str, value: str) -> t.Tuple[StorePathId, ...]:
    refs = []
    for token in value.split():
        try:
            refs.append(StorePathId(token))
        except InvalidIdentifier as e:
            e.key = key
            raise
    return tuple(refs)


def _deriver(key: str, value: str) -> t.Optional[DerivationId]:
    _token(key, value)
    if value == UNKNOWN_DERIVER:
        return None
    try:
        return DerivationId(value)
    except InvalidIdentifier as e:
        e.key = key
        raise


def _verbatim(key: str, value: str) -> str:
    return value


_DECODERS: t.Dict[Field, t.Callable[[str, str], t.Any]] = {
    Field.STORE_PATH: _nonempty,
    Field.URL: _nonempty,
    Field.COMPRESSION: _token,
    Field.FILE_HASH: _token,
    Field.FILE_SIZE: _u64,
    Field.NAR_HASH: _token,
    Field.NAR_SIZE: _u64,
    Field.REFERENCES: _references,
    Field.DERIVER: _deriver,
    Field.SIG: _verbatim,
}

_FIELDS = {field.value: field for field in Field}


def parse_line(line: str) -> Datum:
    """
    Decode one `Key: Value` line of a narinfo document.

    Only the first colon separates key and value, so values such as
    signatures may contain further colons. The key must match exactly,
    the value is stripped before decoding.
    """
    key, sep, value = line.partition(":")
    if not sep:
        raise LineCorruptNoColon(line)

    field = _FIELDS.get(key)
    if field is None:
        raise LineUnknownKey(key)

    return Datum(field, _DECODERS[field](key, value.strip()))
