"""
Cliente do API OFS (remoto). Faz as requisições GET e converte toda falha
em ConsultaError: sem resposta/timeout -> transport, status não-2xx ou corpo
inválido -> server. Quem chama não inspeciona exceções do httpx.
"""
import logging
from typing import Any

import httpx
from fastapi import Request

from consulta_ofs.config import OFS_API_TIMEOUT, OFS_API_URL
from consulta_ofs.constants import MSG_CONNECTION, MSG_GENERIC_LOAD, MSG_INVALID_RESPONSE, MSG_SERVER
from consulta_ofs.errors import ConsultaError, ErrorKind
from consulta_ofs.schemas.filters import QueryParams

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def make_http_client(
    base_url: str = OFS_API_URL,
    timeout: float = OFS_API_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        headers=DEFAULT_HEADERS,
        transport=transport,
    )


def _server_detail(response: httpx.Response) -> str | None:
    """Mensagem de erro enviada pelo servidor (campo message/detail do JSON), se houver."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


class OfsApiClient:
    def __init__(self, http: httpx.AsyncClient):
        self._http = http

    async def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        try:
            response = await self._http.get(path, params=params)
        except httpx.TimeoutException as e:
            logger.warning("ofs_api_timeout path=%s params=%s", path, params)
            raise ConsultaError(ErrorKind.transport, MSG_CONNECTION.format(detail="tempo limite excedido"), detail=str(e)) from e
        except httpx.RequestError as e:
            logger.warning("ofs_api_unreachable path=%s params=%s error=%s", path, params, e)
            raise ConsultaError(ErrorKind.transport, MSG_CONNECTION.format(detail=str(e) or type(e).__name__), detail=str(e)) from e

        if response.status_code >= 400:
            detail = _server_detail(response)
            logger.warning("ofs_api_error path=%s status=%s detail=%s", path, response.status_code, detail)
            raise ConsultaError(
                ErrorKind.server,
                MSG_SERVER.format(status=response.status_code, detail=detail or MSG_GENERIC_LOAD),
                status_code=response.status_code,
                detail=detail,
            )
        try:
            return response.json()
        except ValueError as e:
            logger.warning("ofs_api_invalid_json path=%s status=%s", path, response.status_code)
            raise ConsultaError(ErrorKind.server, MSG_INVALID_RESPONSE, status_code=response.status_code) from e

    async def _get_list(self, path: str, params: QueryParams) -> list[dict]:
        data = await self._get(path, params.to_query())
        if not isinstance(data, list):
            raise ConsultaError(ErrorKind.server, MSG_INVALID_RESPONSE)
        return data

    async def fetch_rows(self, resource_path: str, params: QueryParams) -> list[dict]:
        """GET /api/{recurso}: registros para a tabela."""
        return await self._get_list(resource_path, params)

    async def fetch_export_rows(self, resource_path: str, params: QueryParams) -> list[dict]:
        """GET /api/{recurso}/export: registros brutos para a planilha."""
        return await self._get_list(f"{resource_path}/export", params)

    async def fetch_count(self, resource_path: str, params: QueryParams) -> int:
        """GET /api/{recurso}/count -> {"count": n}."""
        data = await self._get(f"{resource_path}/count", params.to_query())
        count = data.get("count") if isinstance(data, dict) else None
        if isinstance(count, bool) or not isinstance(count, int):
            raise ConsultaError(ErrorKind.server, MSG_INVALID_RESPONSE)
        return count

    async def fetch_last_updated(self, resource_path: str) -> str | None:
        """GET /api/{recurso}/ultima-data -> {"ultimaData": "yyyy-mm-dd" | null}. Não depende dos filtros."""
        data = await self._get(f"{resource_path}/ultima-data")
        if not isinstance(data, dict):
            raise ConsultaError(ErrorKind.server, MSG_INVALID_RESPONSE)
        value = data.get("ultimaData")
        return value if isinstance(value, str) and value else None


async def get_api_client(request: Request) -> OfsApiClient:
    """Cliente do API sobre o httpx.AsyncClient criado no lifespan da aplicação."""
    return OfsApiClient(request.app.state.http)
