from typing import Any, Dict, List, Optional


class PortfolioDashException(Exception):
    """Base exception for the ingestion pipeline and storage"""

    pass


class CsvParseError(PortfolioDashException):
    """The uploaded text could not be turned into holding rows"""

    pass


class EmptyFileError(CsvParseError):
    """No non-blank lines in the file"""

    def __init__(self, message: str = "CSV file is empty"):
        super().__init__(message)


class NoValidRowsError(CsvParseError):
    """Every data line was filtered out"""

    def __init__(self, message: str = "No valid data rows found in CSV file"):
        super().__init__(message)


class CsvFormatError(PortfolioDashException):
    """Pre-flight check on the uploaded file failed"""

    pass


class UnsupportedFileTypeError(CsvFormatError):
    def __init__(self, message: str = "File must be a CSV file"):
        super().__init__(message)


class FileTooLargeError(CsvFormatError):
    def __init__(self, message: str = "File size must be less than 10MB"):
        super().__init__(message)


class MissingColumnsError(CsvFormatError):
    def __init__(self, message: str = "CSV file does not appear to contain the required columns"):
        super().__init__(message)


class SchemaValidationError(PortfolioDashException):
    """Parsed rows or built holdings do not match the expected schema"""

    def __init__(self, message: str = "Invalid CSV format", errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []


class StorageNotFoundError(PortfolioDashException):
    """Lookup by id found nothing"""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
