"""
Upload API Endpoint

Accepts a spreadsheet, checks type and size, and returns the extracted
labels, values and title for a follow-up chat request.
"""

from typing import Optional
from fastapi import APIRouter, File, HTTPException, UploadFile, status
import logging

from ..config import get_config
from ..exceptions import ParseError, UploadRejectedError
from ..parsers import ExcelParser, validate_upload
from ..utils.error_handling import handle_error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])

excel_parser = ExcelParser()


@router.post("/upload")
async def upload_excel(file: Optional[UploadFile] = File(default=None)):
    """Parse an uploaded .xlsx/.xls file into chart data."""
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Geen bestand geüpload"
        )

    max_bytes = get_config().max_upload_bytes
    try:
        if file.size is not None:
            validate_upload(file.filename, file.size, max_bytes)
        # one byte past the limit is enough to reject
        contents = await file.read(max_bytes + 1)
        validate_upload(file.filename, len(contents), max_bytes)
    except UploadRejectedError as e:
        logger.warning(f"Upload rejected: {file.filename}: {e}")
        raise handle_error(e)

    try:
        data = excel_parser.parse_excel_buffer(contents)
    except ParseError as e:
        logger.warning(f"Upload could not be parsed: {file.filename}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Fout bij het verwerken van het Excel-bestand",
                "details": e.details or str(e),
            }
        )

    return {
        "success": True,
        "data": data.to_dict(),
        "message": "Excel-bestand succesvol verwerkt",
    }
