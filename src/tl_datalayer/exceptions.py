"""tl_datalayer exception types."""

from __future__ import annotations


class DataLayerError(Exception):
    """Base error of the tl_datalayer library.

    Data layer pushes and target syncs degrade softly and never raise this;
    it is reserved for settings loading.
    """

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class DataLayerErrorCodes:
    """Error codes carried by DataLayerError."""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
