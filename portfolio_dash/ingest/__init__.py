from .classifier import classify_instrument, instrument_display_name
from .csv_parser import parse_csv, validate_csv_format, check_upload_file

__all__ = [
    "classify_instrument",
    "instrument_display_name",
    "parse_csv",
    "validate_csv_format",
    "check_upload_file",
]
