import os
import typing as t
from pathlib import PurePosixPath

from narinfo.ids import StorePathId, DerivationId
from narinfo.parser import Field, parse_line
from narinfo.errors import NarInfoError, DocumentEmpty, DuplicateField, MissingField


TRUTHY = ("1", "true", "yes", "on")


class ParserOptions(t.NamedTuple):
    # Allow the Deriver line to be left out (or be `unknown-deriver`).
    deriver_required: bool = True
    # Concatenate repeated References lines instead of rejecting them.
    additive_references: bool = False

    @classmethod
    def from_env(cls, environ: t.Optional[t.Mapping[str, str]] = None) -> "ParserOptions":
        if environ is None:
            environ = os.environ

        def flag(name: str) -> bool:
            return environ.get(name, "").strip().lower() in TRUTHY

        return cls(
            deriver_required=not flag("NARINFO_OPTIONAL_DERIVER"),
            additive_references=flag("NARINFO_ADDITIVE_REFERENCES"),
        )


class NarInfo(t.NamedTuple):
    storepath: str
    url: str
    compression: str
    file_hash: str
    file_size: int
    nar_hash: str
    nar_size: int
    references: t.Tuple[StorePathId, ...]
    deriver: t.Optional[DerivationId]
    signature: str

    @property
    def path(self) -> PurePosixPath:
        return PurePosixPath(self.storepath)

    @property
    def store_path_id(self) -> StorePathId:
        return StorePathId(self.path.name)

    def as_dict(self) -> t.Dict[str, t.Any]:
        return {
            "storepath": self.storepath,
            "url": self.url,
            "compression": self.compression,
            "file_hash": self.file_hash,
            "file_size": self.file_size,
            "nar_hash": self.nar_hash,
            "nar_size": self.nar_size,
            "references": [str(ref) for ref in self.references],
            "deriver": None if self.deriver is None else str(self.deriver),
            "signature": self.signature,
        }

    @classmethod
    def parse(cls, data: str, options: ParserOptions = ParserOptions()) -> "NarInfo":
        return parse_narinfo(data, options)


REQUIRED = (
    Field.STORE_PATH,
    Field.URL,
    Field.COMPRESSION,
    Field.FILE_HASH,
    Field.FILE_SIZE,
    Field.NAR_HASH,
    Field.NAR_SIZE,
    Field.DERIVER,
    Field.SIG,
)


def split_lines(document: str) -> t.List[str]:
    lines = document.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def parse_narinfo(document: str, options: ParserOptions = ParserOptions()) -> NarInfo:
    """
    Assemble a NarInfo from a whole document.

    Stops at the first malformed line, tagging the error with its 1-based
    line number. Every field except References has to be given exactly
    once; all missing fields are reported together in one MissingField.
    """
    if not document.strip():
        raise DocumentEmpty()

    seen: t.Dict[Field, int] = {}
    values: t.Dict[Field, t.Any] = {}

    for lineno, line in enumerate(split_lines(document), start=1):
        try:
            datum = parse_line(line)
        except NarInfoError as e:
            e.line_number = lineno
            raise

        if datum.field in seen:
            if datum.field is Field.REFERENCES and options.additive_references:
                values[datum.field] += datum.value
                continue
            raise DuplicateField(datum.field.value, seen[datum.field], lineno)

        seen[datum.field] = lineno
        values[datum.field] = datum.value

    missing = []
    for field in REQUIRED:
        if field is Field.DERIVER:
            # `unknown-deriver` decodes to None.
            if options.deriver_required and values.get(field) is None:
                missing.append(field.value)
        elif field not in values:
            missing.append(field.value)

    if missing:
        raise MissingField(missing)

    return NarInfo(
        storepath=values[Field.STORE_PATH],
        url=values[Field.URL],
        compression=values[Field.COMPRESSION],
        file_hash=values[Field.FILE_HASH],
        file_size=values[Field.FILE_SIZE],
        nar_hash=values[Field.NAR_HASH],
        nar_size=values[Field.NAR_SIZE],
        references=values.get(Field.REFERENCES, ()),
        deriver=values.get(Field.DERIVER),
        signature=values[Field.SIG],
    )
