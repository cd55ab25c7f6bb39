"""
Identifiers for the hash-name part of a store path.

    xmxgxig6zxrixicc7905ssgb4yc3lysa-bash-interactive-4.4-p23
    a6xizp18g0sch9z7493p3irq632kzlym-bash-interactive-4.4-p23.drv

StorePathId and DerivationId are separate types so that one can never be
passed where the other is expected. They only share the validation routine.
"""
import re
import typing as t
import dataclasses

from narinfo.errors import InvalidIdentifier


HASH_LENGTH = 32
HASH_ALPHABET = frozenset("0123456789abcdfghijklmnpqrsvwxyz")
DERIVATION_SUFFIX = ".drv"

_NAME = re.compile(r"[A-Za-z0-9+\-._?=]+")


def validate_identifier(text: str, suffix: t.Optional[str] = None) -> None:
    if not text:
        raise InvalidIdentifier(text, "identifier is empty")

    for offset, char in enumerate(text):
        if char.isspace():
            raise InvalidIdentifier(text, f"whitespace at offset {offset}")

    hsh = text[:HASH_LENGTH]
    if len(hsh) != HASH_LENGTH or not HASH_ALPHABET.issuperset(hsh):
        raise InvalidIdentifier(text, f"expected a {HASH_LENGTH} character base-32 hash")

    if text[HASH_LENGTH:HASH_LENGTH+1] != "-":
        raise InvalidIdentifier(text, "expected '-' after the hash")

    name = text[HASH_LENGTH+1:]
    if not name:
        raise InvalidIdentifier(text, "name is empty")
    if name.startswith(".") or _NAME.fullmatch(name) is None:
        raise InvalidIdentifier(text, f"invalid name {name!r}")

    if suffix is not None and not name.endswith(suffix):
        raise InvalidIdentifier(text, f"name does not end in {suffix!r}")


@dataclasses.dataclass(frozen=True)
class StorePathId:
    value: str

    def __post_init__(self):
        validate_identifier(self.value)

    @property
    def hash_part(self) -> str:
        return self.value[:HASH_LENGTH]

    @property
    def name(self) -> str:
        return self.value[HASH_LENGTH+1:]

    def __str__(self) -> str:
        return self.value


@dataclasses.dataclass(frozen=True)
class DerivationId:
    value: str

    def __post_init__(self):
        validate_identifier(self.value, DERIVATION_SUFFIX)

    @property
    def hash_part(self) -> str:
        return self.value[:HASH_LENGTH]

    @property
    def name(self) -> str:
        return self.value[HASH_LENGTH+1:]

    def __str__(self) -> str:
        return self.value
