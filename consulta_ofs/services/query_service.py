"""
Execução de uma consulta: validação dos filtros, requisição principal (linhas),
requisições secundárias (contagem, última atualização) e marcação da sequência
na sessão da página.
"""
import asyncio
import logging

from consulta_ofs.clients.ofs_api import OfsApiClient
from consulta_ofs.constants import MSG_BUSY
from consulta_ofs.errors import ConsultaError, ErrorKind
from consulta_ofs.resources import Resource
from consulta_ofs.schemas.filters import FilterState, QueryParams
from consulta_ofs.schemas.results import QueryResult
from consulta_ofs.services.filter_service import build_query_params, ensure_can_query
from consulta_ofs.services.shaping import format_date, to_display_row
from consulta_ofs.session import PageSession

logger = logging.getLogger(__name__)


def _as_secondary(e: ConsultaError) -> ConsultaError:
    return ConsultaError(ErrorKind.secondary, e.message, status_code=e.status_code, detail=e.detail)


async def _count_or_unknown(client: OfsApiClient, resource: Resource, params: QueryParams) -> int | None:
    try:
        return await client.fetch_count(resource.api_path, params)
    except ConsultaError as e:
        logger.warning("secondary_failed request=count resource=%s error=%r", resource.name, _as_secondary(e))
        return None


async def load_last_updated(client: OfsApiClient, resource: Resource) -> str | None:
    """Data do registro mais recente (dd/mm/aaaa) ou None se indisponível. Independe dos filtros."""
    if not resource.has_last_updated:
        return None
    try:
        value = await client.fetch_last_updated(resource.api_path)
    except ConsultaError as e:
        logger.warning("secondary_failed request=ultima_data resource=%s error=%r", resource.name, _as_secondary(e))
        return None
    return format_date(value) if value else None


async def run_query(
    client: OfsApiClient,
    session: PageSession,
    filters: FilterState,
    resource: Resource,
) -> QueryResult | None:
    """
    Executa a consulta para os filtros dados.
    Levanta ConsultaError (validation) sem nenhuma requisição se não há filtro
    ou se outra consulta da mesma página ainda está em andamento; levanta
    ConsultaError (transport/server) se a requisição principal falha.
    Falhas da contagem e da última atualização não interrompem a consulta.
    Retorna None se, ao terminar, já existe uma consulta mais recente.
    """
    ensure_can_query(filters, resource)
    if session.is_busy():
        raise ConsultaError(ErrorKind.validation, MSG_BUSY)

    # Parâmetros fixados aqui; alterações posteriores nos filtros não afetam esta consulta
    params = build_query_params(filters, resource)
    seq = session.begin()
    logger.info("query_started resource=%s seq=%s params=%s", resource.name, seq, params.to_query())

    try:
        raw_rows = await client.fetch_rows(resource.api_path, params)
        rows = [to_display_row(r, resource) for r in raw_rows]
        total_count, last_updated = await asyncio.gather(
            _count_or_unknown(client, resource, params),
            load_last_updated(client, resource),
        )
        result = QueryResult(
            rows=rows,
            total_count=total_count,
            count_unknown=total_count is None,
            last_updated=last_updated,
            sequence=seq,
        )
    except ConsultaError as e:
        logger.warning("query_failed resource=%s seq=%s kind=%s status=%s", resource.name, seq, e.kind.value, e.status_code)
        raise
    finally:
        current = session.finish(seq)

    if not current:
        return None
    logger.info(
        "query_finished resource=%s seq=%s rows=%s total_count=%s",
        resource.name, seq, len(result.rows), result.total_count,
    )
    return result
