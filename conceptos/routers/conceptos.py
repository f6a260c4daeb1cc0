from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from conceptos.core.errors import ConceptError, ValidationError
from conceptos.core.utils import read_json_body
from conceptos.services.concept_service import ConceptService

router = APIRouter(prefix="/api/conceptos", tags=["conceptos"])


def _get_concept_service(request: Request) -> ConceptService:
    svc = getattr(getattr(request.app, "state", None), "concept_service", None)
    if not svc:
        raise RuntimeError("ConceptService no configurado")
    return svc


def _error_response(err: ConceptError, summary: Optional[str] = None) -> JSONResponse:
    # validation failures on create/update keep the original {error, mensaje} shape
    if summary and isinstance(err, ValidationError):
        body = {"error": summary, "mensaje": err.message, **err.context}
    else:
        body = err.to_dict()
    return JSONResponse(body, status_code=err.status_code)


@router.get("")
def list_conceptos(request: Request):
    svc = _get_concept_service(request)
    return [c.to_response() for c in svc.get_all()]


@router.post("", status_code=201)
async def create_concepto(request: Request):
    svc = _get_concept_service(request)
    data = await read_json_body(request)
    result = await run_in_threadpool(svc.create, data)
    if not result.is_success:
        return _error_response(result.error, "Error al crear concepto")
    return result.value.to_response()


@router.delete("")
def delete_all_conceptos(request: Request):
    svc = _get_concept_service(request)
    removed = svc.delete_all().value
    return {"mensaje": "Todos los conceptos eliminados", "cantidad": removed}


@router.get("/buscar")
def search_conceptos(request: Request, q: Optional[str] = None):
    svc = _get_concept_service(request)
    result = svc.search(q)
    if not result.is_success:
        return _error_response(result.error)
    return [c.to_response() for c in result.value]


@router.get("/stats")
def conceptos_stats(request: Request):
    return _get_concept_service(request).stats()


@router.get("/{concept_id:int}")
def get_concepto(concept_id: int, request: Request):
    svc = _get_concept_service(request)
    result = svc.get_by_id(concept_id)
    if not result.is_success:
        return _error_response(result.error)
    return result.value.to_response()


@router.put("/{concept_id:int}")
async def update_concepto(concept_id: int, request: Request):
    svc = _get_concept_service(request)
    data = await read_json_body(request)
    result = await run_in_threadpool(svc.update, concept_id, data)
    if not result.is_success:
        return _error_response(result.error, "Error al actualizar concepto")
    return result.value.to_response()


@router.delete("/{concept_id:int}")
def delete_concepto(concept_id: int, request: Request):
    svc = _get_concept_service(request)
    result = svc.delete_one(concept_id)
    if not result.is_success:
        return _error_response(result.error)
    return {"mensaje": "Concepto eliminado", "id": concept_id}
