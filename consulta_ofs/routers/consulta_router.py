from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from consulta_ofs.clients.ofs_api import OfsApiClient, get_api_client
from consulta_ofs.constants import MSG_SUPERSEDED, XLSX_MEDIA_TYPE
from consulta_ofs.errors import ConsultaError, ErrorKind
from consulta_ofs.resources import EQUIPAMENTOS, MATERIAIS, Resource
from consulta_ofs.schemas.filters import FilterState
from consulta_ofs.schemas.results import QueryResult
from consulta_ofs.services.export_xlsx import export_current_filters
from consulta_ofs.services.filter_service import filter_state_from_form
from consulta_ofs.services.query_service import load_last_updated, run_query
from consulta_ofs.session import SessionRegistry, attach_session_cookie, get_registry, resolve_session_id
from consulta_ofs.templates_ctx import templates

router = APIRouter(prefix="", tags=["consulta"])


def _form_values(
    data_inicial: str | None = Query(None),
    data_final: str | None = Query(None),
    equipamento: str | None = Query(None),
    nota: str | None = Query(None),
    selecao: list[str] = Query([]),
) -> dict:
    return {
        "data_inicial": data_inicial,
        "data_final": data_final,
        "equipamento": equipamento,
        "nota": nota,
        "selecao": selecao,
    }


def _render_page(
    request: Request,
    resource: Resource,
    filters: FilterState,
    session_id: str,
    is_new_session: bool,
    result: QueryResult | None = None,
    last_updated: str | None = None,
    notice: str | None = None,
    busy: bool = False,
    status_code: int = 200,
):
    response = templates.TemplateResponse(
        request,
        "consulta.html",
        {
            "resource": resource,
            "filters": {
                "data_inicial": filters.data_inicial.isoformat() if filters.data_inicial else "",
                "data_final": filters.data_final.isoformat() if filters.data_final else "",
                "equipamento": filters.equipamento,
                "nota": filters.nota,
                "selecao": list(filters.selecao),
            },
            "result": result,
            "last_updated": last_updated,
            "notice": notice,
            "busy": busy,
        },
        status_code=status_code,
    )
    if is_new_session:
        attach_session_cookie(response, session_id)
    return response


async def _page(
    request: Request,
    resource: Resource,
    form: dict,
    filtrar: bool,
    client: OfsApiClient,
    registry: SessionRegistry,
):
    session_id, is_new = resolve_session_id(request)
    page_session = registry.get(session_id, resource.name)
    filters = filter_state_from_form(**form, resource=resource)

    result = None
    notice = None
    last_updated = None
    if filtrar:
        try:
            result = await run_query(client, page_session, filters, resource)
            if result is None:
                notice = MSG_SUPERSEDED
        except ConsultaError as e:
            notice = e.message
        if result is not None:
            last_updated = result.last_updated
    else:
        last_updated = await load_last_updated(client, resource)

    return _render_page(
        request,
        resource,
        filters,
        session_id,
        is_new,
        result=result,
        last_updated=last_updated,
        notice=notice,
        busy=page_session.is_busy(),
    )


async def _export(
    request: Request,
    resource: Resource,
    form: dict,
    client: OfsApiClient,
):
    filters = filter_state_from_form(**form, resource=resource)
    try:
        buf = await export_current_filters(client, filters, resource)
    except ConsultaError as e:
        session_id, is_new = resolve_session_id(request)
        return _render_page(
            request,
            resource,
            filters,
            session_id,
            is_new,
            notice=e.message,
            status_code=400 if e.kind == ErrorKind.validation else 502,
        )
    return StreamingResponse(
        buf,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={resource.export_filename}"},
    )


@router.get("/", name="equipamentos", include_in_schema=False)
async def equipamentos_page(
    request: Request,
    form: dict = Depends(_form_values),
    filtrar: bool = Query(False),
    client: OfsApiClient = Depends(get_api_client),
    registry: SessionRegistry = Depends(get_registry),
):
    return await _page(request, EQUIPAMENTOS, form, filtrar, client, registry)


@router.get("/export.xlsx", name="equipamentos_export", include_in_schema=False)
async def equipamentos_export(
    request: Request,
    form: dict = Depends(_form_values),
    client: OfsApiClient = Depends(get_api_client),
):
    return await _export(request, EQUIPAMENTOS, form, client)


@router.get("/materiais", name="materiais", include_in_schema=False)
async def materiais_page(
    request: Request,
    form: dict = Depends(_form_values),
    filtrar: bool = Query(False),
    client: OfsApiClient = Depends(get_api_client),
    registry: SessionRegistry = Depends(get_registry),
):
    return await _page(request, MATERIAIS, form, filtrar, client, registry)


@router.get("/materiais/export.xlsx", name="materiais_export", include_in_schema=False)
async def materiais_export(
    request: Request,
    form: dict = Depends(_form_values),
    client: OfsApiClient = Depends(get_api_client),
):
    return await _export(request, MATERIAIS, form, client)
