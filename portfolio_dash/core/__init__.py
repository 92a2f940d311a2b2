from .logger import logger
from .exceptions import (
    PortfolioDashException,
    CsvParseError,
    EmptyFileError,
    NoValidRowsError,
    CsvFormatError,
    UnsupportedFileTypeError,
    FileTooLargeError,
    MissingColumnsError,
    SchemaValidationError,
    StorageNotFoundError,
)

__all__ = [
    "logger",
    "PortfolioDashException",
    "CsvParseError",
    "EmptyFileError",
    "NoValidRowsError",
    "CsvFormatError",
    "UnsupportedFileTypeError",
    "FileTooLargeError",
    "MissingColumnsError",
    "SchemaValidationError",
    "StorageNotFoundError",
]
