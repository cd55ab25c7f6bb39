import typing as t


class NarInfoError(Exception):
    """
    Base class of every narinfo parse failure.

    line_number is filled in by the record assembler when a specific
    line of the document is at fault.
    """

    def __init__(self, message: str, key: t.Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.key = key
        self.line_number: t.Optional[int] = None

    @property
    def kind(self) -> str:
        return type(self).__name__

    def details(self) -> t.Dict[str, t.Any]:
        return {}

    def as_dict(self) -> t.Dict[str, t.Any]:
        return {
            "kind": self.kind,
            "line": self.line_number,
            "key": self.key,
            "message": self.message,
            **self.details(),
        }

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"line {self.line_number}: {self.message}"


class LineCorruptNoColon(NarInfoError):
    def __init__(self, line: str):
        super().__init__(f"no ':' separator in {line!r}")
        self.line = line

    def details(self):
        return {"text": self.line}


class LineUnknownKey(NarInfoError):
    def __init__(self, key: str):
        super().__init__(f"unknown key {key!r}", key)


class EmptyValue(NarInfoError):
    def __init__(self, key: str):
        super().__init__(f"{key}: value is empty", key)


class UnexpectedSpace(NarInfoError):
    def __init__(self, key: str, offset: int):
        super().__init__(f"{key}: unexpected whitespace at offset {offset}", key)
        self.offset = offset

    def details(self):
        return {"offset": self.offset}


class InvalidInteger(NarInfoError):
    def __init__(self, key: str, raw_text: str, diagnostic: str):
        super().__init__(f"{key}: invalid integer {raw_text!r} ({diagnostic})", key)
        self.raw_text = raw_text
        self.diagnostic = diagnostic

    def details(self):
        return {"text": self.raw_text, "diagnostic": self.diagnostic}


class InvalidIdentifier(NarInfoError):
    def __init__(self, text: str, reason: str, key: t.Optional[str] = None):
        super().__init__(f"invalid identifier {text!r}: {reason}", key)
        self.text = text
        self.reason = reason

    def details(self):
        return {"text": self.text, "reason": self.reason}


class DuplicateField(NarInfoError):
    def __init__(self, key: str, first_line: int, second_line: int):
        super().__init__(f"{key} given on line {first_line} and again on line {second_line}", key)
        self.first_line = first_line
        self.second_line = second_line
        self.line_number = second_line

    def __str__(self) -> str:
        return self.message

    def details(self):
        return {"first_line": self.first_line, "second_line": self.second_line}


class MissingField(NarInfoError):
    def __init__(self, keys: t.Sequence[str]):
        super().__init__(f"missing required field(s): {', '.join(keys)}")
        self.keys = list(keys)

    def details(self):
        return {"keys": self.keys}


class DocumentEmpty(NarInfoError):
    def __init__(self):
        super().__init__("document is empty")
