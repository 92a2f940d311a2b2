from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import JSONResponse

from ..config import settings
from ..core.exceptions import (
    CsvFormatError,
    CsvParseError,
    FileTooLargeError,
    SchemaValidationError,
)
from ..core.logger import logger
from ..dependencies.portfolio_dependencies import get_portfolio_service
from ..ingest.csv_parser import check_upload_file, validate_csv_format
from ..services.portfolio_service import PortfolioService

router = APIRouter()


async def _read_upload(upload: UploadFile) -> bytes:
    return await upload.read(settings.MAX_UPLOAD_SIZE + 1)


def _format_error_response(e: CsvFormatError) -> JSONResponse:
    status_code = 413 if isinstance(e, FileTooLargeError) else 400
    return JSONResponse({"message": str(e)}, status_code=status_code)


@router.get("/api/portfolio")
async def get_portfolio(
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
):
    try:
        data = portfolio_service.get_portfolio_data()
        return JSONResponse(data.model_dump(by_alias=True, mode="json"))
    except Exception as e:
        logger.error(f"Error fetching portfolio: {e}")
        return JSONResponse({"message": "Failed to fetch portfolio"}, status_code=500)


@router.get("/api/portfolio/stats")
async def get_portfolio_stats(
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
):
    try:
        summary = portfolio_service.get_portfolio_summary()
        return JSONResponse(summary.model_dump(by_alias=True, mode="json"))
    except Exception as e:
        logger.error(f"Error getting portfolio stats: {e}")
        return JSONResponse({"message": "Failed to fetch portfolio stats"}, status_code=500)


@router.post("/api/upload-csv")
async def upload_csv(
    csv_file: Optional[UploadFile] = File(None, alias="csvFile"),
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
):
    if csv_file is None:
        return JSONResponse({"message": "No file uploaded"}, status_code=400)

    try:
        raw = await _read_upload(csv_file)
        check_upload_file(csv_file.filename, csv_file.content_type, len(raw))

        result = portfolio_service.upload_csv(raw.decode("utf-8-sig", errors="replace"))
        return JSONResponse(result.model_dump(by_alias=True))

    except CsvFormatError as e:
        logger.warning(f"Rejected upload {csv_file.filename}: {e}")
        return _format_error_response(e)
    except CsvParseError as e:
        logger.warning(f"Could not parse {csv_file.filename}: {e}")
        return JSONResponse({"message": str(e)}, status_code=400)
    except SchemaValidationError as e:
        return JSONResponse({"message": e.message, "errors": e.errors}, status_code=400)
    except Exception as e:
        logger.error(f"Error processing CSV: {e}")
        return JSONResponse({
            "message": "Failed to process CSV file",
            "error": str(e) or "Unknown error"
        }, status_code=500)


@router.post("/api/validate-csv")
async def validate_csv(
    csv_file: Optional[UploadFile] = File(None, alias="csvFile"),
):
    """Pre-flight check of an export without storing anything"""
    if csv_file is None:
        return JSONResponse({"message": "No file uploaded"}, status_code=400)

    try:
        raw = await _read_upload(csv_file)
        validate_csv_format(
            csv_file.filename or "",
            len(raw),
            raw.decode("utf-8-sig", errors="replace"),
        )
        return JSONResponse({"valid": True, "message": "CSV file looks valid"})
    except CsvFormatError as e:
        return _format_error_response(e)
