"""FastAPI adapter – records, search, options and health routers."""
from __future__ import annotations

import json
from typing import Any, Awaitable, Callable, Mapping

from fastapi import APIRouter, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from metadata_editor.adapters.fastapi.deps import (
    ClockDep,
    OptionsDep,
    RecordServiceDep,
    SearchEngineDep,
    error_responses,
)
from metadata_editor.application.search import SearchOptions, SortField
from metadata_editor.kernel.errors import ValidationError
from metadata_editor.observability.logging import get_logger

logger = get_logger(__name__)

ReadinessCheck = Callable[[], Awaitable[bool]]

RESERVED_SEARCH_PARAMS = frozenset({"limit", "skip", "sort"})


async def _json_object(request: Request) -> dict[str, Any]:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Request body must be valid JSON") from None
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body


def _int_param(params: Mapping[str, str], name: str, default: int) -> int:
    raw = params.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{name} must be an integer", detail={name: raw}) from None


def parse_search_options(params: Mapping[str, str]) -> SearchOptions:
    """Build :class:`SearchOptions` from the reserved ``limit``/``skip``/``sort`` params."""
    defaults = SearchOptions()
    try:
        return SearchOptions(
            limit=_int_param(params, "limit", defaults.limit),
            skip=_int_param(params, "skip", defaults.skip),
            sort=SortField.parse(params.get("sort", "")),
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from None


def FastAPIRecordsRouter(prefix: str = "/api/metadata", tags: list[str] | None = None) -> APIRouter:
    """CRUD routes over metadata records plus the form field definitions."""
    router = APIRouter(prefix=prefix, tags=tags or ["records"])

    @router.get("")
    async def list_records(service: RecordServiceDep) -> Any:
        return jsonable_encoder(await service.list_records())

    # declared before "/{record_id}" so "fields" is not taken for an id
    @router.get("/fields")
    async def field_definitions(service: RecordServiceDep) -> Any:
        return service.field_definitions()

    @router.get("/{record_id}", responses=error_responses(400, 404))
    async def get_record(record_id: str, service: RecordServiceDep) -> Any:
        return jsonable_encoder(await service.get_record(record_id))

    @router.post("", status_code=201, responses=error_responses(400, 409))
    async def create_record(request: Request, service: RecordServiceDep) -> Any:
        record = await service.create_record(await _json_object(request))
        return JSONResponse(status_code=201, content=jsonable_encoder(record))

    @router.put("/{record_id}", responses=error_responses(400, 404))
    async def update_record(record_id: str, request: Request, service: RecordServiceDep) -> Any:
        record, changed = await service.update_record(record_id, await _json_object(request))
        if not changed:
            return Response(status_code=304)
        return jsonable_encoder(record)

    @router.delete("/{record_id}", status_code=204, responses=error_responses(400, 404))
    async def delete_record(record_id: str, service: RecordServiceDep) -> Response:
        await service.delete_record(record_id)
        return Response(status_code=204)

    return router


def FastAPISearchRouter(prefix: str = "/api/search", tags: list[str] | None = None) -> APIRouter:
    """Field-driven search.

    Every query parameter other than ``limit``, ``skip`` and ``sort`` is a
    search field; the response is the search envelope with status 200 on
    success, 400 for input errors and 500 for internal errors.
    """
    router = APIRouter(prefix=prefix, tags=tags or ["search"])

    @router.get("/fields")
    async def searchable_fields(engine: SearchEngineDep) -> Any:
        return engine.searchable_fields()

    @router.get("", responses=error_responses(400, 500))
    async def search(request: Request, engine: SearchEngineDep) -> JSONResponse:
        query = request.query_params
        options = parse_search_options(query)
        params = {k: v for k, v in query.items() if k not in RESERVED_SEARCH_PARAMS}

        result = await engine.search(params, options)
        if result.success:
            status = 200
        elif result.is_internal_failure:
            status = 500
        else:
            status = 400
        return JSONResponse(status_code=status, content=jsonable_encoder(result.to_dict()))

    return router


def FastAPIOptionsRouter(tags: list[str] | None = None) -> APIRouter:
    router = APIRouter(tags=tags or ["options"])

    @router.post("/api/reload-options")
    async def reload_options(options: OptionsDep, clock: ClockDep) -> dict[str, str]:
        options.reload()
        return {"message": "Options reloaded", "timestamp": clock.now().isoformat()}

    return router


def FastAPIHealthRouter(
    path: str = "/health",
    readiness_checks: list[ReadinessCheck] | None = None,
    tags: list[str] | None = None,
) -> APIRouter:
    """Return a liveness + readiness health-check router.

    Parameters
    ----------
    path:
        Liveness is served at ``{path}``, readiness at ``{path}/ready``.
    readiness_checks:
        Optional list of async callables returning ``bool``.  All checks
        must return ``True`` for the readiness endpoint to return 200;
        otherwise it returns 503.
    """
    router = APIRouter(tags=tags or ["ops"])
    checks = readiness_checks or []

    @router.get(path)
    async def liveness(clock: ClockDep) -> dict[str, str]:
        return {"status": "OK", "timestamp": clock.now().isoformat()}

    @router.get(f"{path}/ready")
    async def readiness() -> JSONResponse:
        results: dict[str, bool] = {}
        for check in checks:
            name = getattr(check, "__name__", repr(check))
            try:
                ok = await check()
            except Exception as exc:  # noqa: BLE001
                logger.warning("health.check_failed", check=name, error=str(exc))
                ok = False
            results[name] = ok

        all_ok = all(results.values())
        return JSONResponse(
            status_code=200 if all_ok else 503,
            content={"status": "OK" if all_ok else "degraded", "checks": results},
        )

    return router


__all__ = [
    "RESERVED_SEARCH_PARAMS",
    "FastAPIHealthRouter",
    "FastAPIOptionsRouter",
    "FastAPIRecordsRouter",
    "FastAPISearchRouter",
    "ReadinessCheck",
    "parse_search_options",
]
