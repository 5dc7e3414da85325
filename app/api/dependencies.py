"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

import csv
import io
import json
import re
from typing import Any

from fastapi import File, Header, HTTPException, Request, UploadFile, status
from pydantic import ValidationError

from app.config import get_record_import_settings
from app.domain.record_import import RawRow
from app.schemas.record_import import ImportRequest
from app.services.record_import_service import ImportTransportError

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}

_MARKUP_PATTERN = re.compile(r"<!DOCTYPE[^>]*>|<[^>]*>", re.IGNORECASE)


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def get_actor_id(x_actor_id: str | None = Header(default=None)) -> int:
    """
    Resolve the acting user from the X-Actor-Id header.

    Falls back to IMPORT_DEFAULT_ACTOR_ID when configured; otherwise the
    request is rejected.
    """

    if x_actor_id is not None and x_actor_id.strip():
        try:
            actor_id = int(x_actor_id.strip())
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="X-Actor-Id must be an integer.",
            ) from exc
        if actor_id <= 0:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="X-Actor-Id must be positive.",
            )
        return actor_id

    default_actor_id = get_record_import_settings().default_actor_id
    if default_actor_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Actor-Id header.",
        )
    return default_actor_id


def parse_import_body(body: bytes) -> list[RawRow]:
    """
    Parse a raw JSON import body into rows.

    Stray markup around the payload is removed first, and a payload that was
    JSON-encoded twice is decoded once more.

    Raises:
        ImportTransportError: body is not a JSON object with a non-empty
            ``items`` list of flat objects.
    """

    try:
        text = body.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ImportTransportError("Request body must be UTF-8 encoded.") from exc

    text = _MARKUP_PATTERN.sub("", text).strip()
    if not text:
        raise ImportTransportError("Request body is empty.")

    try:
        payload: Any = json.loads(text)
        if isinstance(payload, str):
            payload = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise ImportTransportError(f"Invalid JSON body: {exc.msg}") from exc

    if not isinstance(payload, dict):
        raise ImportTransportError("Request body must be a JSON object with an 'items' list.")

    try:
        request = ImportRequest.model_validate(payload)
    except ValidationError as exc:
        raise ImportTransportError(_describe_validation_error(exc)) from exc

    return list(request.items)


async def get_import_rows(request: Request) -> list[RawRow]:
    """
    Read and parse the JSON import body, mapping transport errors to HTTP 400.
    """

    body = await request.body()
    try:
        return parse_import_body(body)
    except ImportTransportError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


def read_csv_rows(upload_file: UploadFile) -> list[RawRow]:
    """
    Read an uploaded CSV into raw rows keyed by header label.

    Raises:
        ImportTransportError: file is not UTF-8, has no header, or no data rows.
    """

    raw_file = upload_file.file
    raw_file.seek(0)
    text_stream: io.TextIOWrapper | None = None

    try:
        text_stream = io.TextIOWrapper(raw_file, encoding="utf-8-sig", newline="")
        reader = csv.DictReader(text_stream)
        if not reader.fieldnames:
            raise ImportTransportError("CSV header row is missing.")
        rows: list[RawRow] = [
            {key: value for key, value in row.items() if key is not None}
            for row in reader
        ]
    except UnicodeDecodeError as exc:
        raise ImportTransportError("CSV must be UTF-8 encoded.") from exc
    except csv.Error as exc:
        raise ImportTransportError(f"Invalid CSV format: {exc}") from exc
    finally:
        if text_stream is not None:
            try:
                text_stream.detach()
            except ValueError:
                pass

    if not rows:
        raise ImportTransportError("CSV contains no data rows.")
    return rows


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if location:
        return f"Invalid import body at {location}: {first.get('msg')}"
    return f"Invalid import body: {first.get('msg')}"
