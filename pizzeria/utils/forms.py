# pizzeria/utils/forms.py
"""
Normalises multipart and JSON request bodies into one payload model.

Admin forms post `multipart/form-data` (so an image can ride along) with every
field as a string and array fields JSON-encoded; API clients post JSON. Routes
only ever see the validated pydantic model plus the optional uploaded file.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Type

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError
from starlette.datastructures import UploadFile

log = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
_ABSENT = ("", "undefined")


@dataclass
class ParsedPayload:
    payload: BaseModel
    upload: Optional[UploadFile] = None


def _decode_array(raw: str) -> Any:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        # Tolerate plain CSV ("Small,Large")
        return [part.strip() for part in raw.split(",") if part.strip()]
    if value is None:
        return []
    return value


def normalize_form_fields(
    fields: Iterable,
    array_fields: Iterable[str] = (),
) -> Dict[str, Any]:
    """Turn raw form (key, string) pairs into JSON-like values."""
    array_fields = set(array_fields)
    data: Dict[str, Any] = {}
    for key, value in fields:
        if not isinstance(value, str):
            continue
        if value in _ABSENT:
            continue
        if value == "null":
            data[key] = None
        elif key in array_fields:
            data[key] = _decode_array(value)
        else:
            data[key] = value
    return data


def _validate(model: Type[BaseModel], data: Dict[str, Any]) -> BaseModel:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(errors=e.errors())


async def parse_request_payload(
    request: Request,
    model: Type[BaseModel],
    array_fields: Iterable[str] = (),
    file_field: str = "image",
) -> ParsedPayload:
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        upload = form.get(file_field)
        if not isinstance(upload, UploadFile) or not upload.filename:
            upload = None
        data = normalize_form_fields(form.multi_items(), array_fields)
        return ParsedPayload(payload=_validate(model, data), upload=upload)

    try:
        data = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise RequestValidationError(
            errors=[{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON body", "input": None}]
        )
    if not isinstance(data, dict):
        raise RequestValidationError(
            errors=[{"type": "dict_type", "loc": ("body",), "msg": "Expected a JSON object", "input": data}]
        )
    return ParsedPayload(payload=_validate(model, data))


def payload_parser(model: Type[BaseModel], array_fields: Iterable[str] = (), file_field: str = "image"):
    """Dependency factory: `parsed: ParsedPayload = Depends(payload_parser(MenuItemCreate, ...))`"""
    array_fields = tuple(array_fields)

    async def _dep(request: Request) -> ParsedPayload:
        return await parse_request_payload(request, model, array_fields, file_field)

    return _dep
