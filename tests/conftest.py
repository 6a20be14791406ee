"""
Fixtures comuns: API OFS falso (httpx.MockTransport), cliente do API sobre ele,
cliente HTTP da aplicação com o cliente do API e o registro de sessões substituídos.
"""
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from consulta_ofs.clients.ofs_api import OfsApiClient, get_api_client, make_http_client
from consulta_ofs.main import app
from consulta_ofs.session import SessionRegistry, get_registry

OFS_TEST_URL = "http://ofs.test"

MATERIAL_ROWS = [
    {
        "Data": "2024-01-05",
        "Nota": "4001",
        "Descrição": "Troca de medidor",
        "Texto Breve": "TROCA MEDIDOR",
        "Acao": "Substituição",
        "Status do Usuário": "CONC",
        "Tipo de nota": "OS",
        "Instalação": "300100",
        "Zona": "Norte",
        "Lote": "L1",
        "Descricao": "MEDIDOR MONOFASICO",
        "Quantidade": 1,
        "Serial": "SN-1",
        "Base Operacional": "Base A",
    },
    {"Data": "2024-01-31T00:00:00Z", "Nota": "4002", "Quantidade": 2.5, "Serial": ""},
    {"Nota": "4003", "Acao": "Retirada"},
]

EQUIPAMENTO_ROWS = [
    {
        "Instalação": "500200",
        "Nota": "9001",
        "Cliente": "Maria",
        "Texto breve para o code": "SUBST EQUIP",
        "Alavanca": "Perdas",
        "Data Conclusão": "2024-03-05",
        "Equipamento Removido": "EQ-1",
        "Equipamento Instalado": "EQ-2",
    },
]


class FakeOfsApi:
    """
    API OFS em memória. `fail` mapeia caminho -> status HTTP, "timeout" ou "connect".
    `on_request` (opcional) é chamado a cada requisição antes da resposta.
    """

    def __init__(self):
        self.rows = {"equipamentos": list(EQUIPAMENTO_ROWS), "materiais": list(MATERIAL_ROWS)}
        self.export_rows: dict[str, list] = {}
        self.counts: dict[str, int] = {}
        self.ultima_data: str | None = "2024-03-05"
        self.fail: dict[str, int | str] = {}
        self.requests: list[httpx.Request] = []
        self.on_request: Callable[[httpx.Request], None] | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        path = request.url.path
        failure = self.fail.get(path)
        if failure == "timeout":
            raise httpx.ReadTimeout("timed out", request=request)
        if failure == "connect":
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(failure, int):
            return httpx.Response(failure, json={"message": "falha interna"})

        parts = path.strip("/").split("/")
        resource = parts[1]
        suffix = parts[2] if len(parts) > 2 else None
        rows = self.rows[resource]
        if suffix is None:
            return httpx.Response(200, json=rows)
        if suffix == "count":
            return httpx.Response(200, json={"count": self.counts.get(resource, len(rows))})
        if suffix == "export":
            return httpx.Response(200, json=self.export_rows.get(resource, rows))
        if suffix == "ultima-data" and resource == "equipamentos":
            return httpx.Response(200, json={"ultimaData": self.ultima_data})
        return httpx.Response(404, json={"message": "rota inexistente"})

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def params_for(self, path: str) -> dict[str, str]:
        for r in self.requests:
            if r.url.path == path:
                return dict(r.url.params)
        raise AssertionError(f"nenhuma requisição para {path}")


@pytest.fixture
def fake_api() -> FakeOfsApi:
    return FakeOfsApi()


@pytest_asyncio.fixture
async def api_client(fake_api: FakeOfsApi) -> AsyncGenerator[OfsApiClient, None]:
    async with make_http_client(base_url=OFS_TEST_URL, transport=httpx.MockTransport(fake_api.handler)) as http:
        yield OfsApiClient(http)


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry(max_entries=10)


@pytest_asyncio.fixture
async def client(api_client: OfsApiClient, registry: SessionRegistry) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP da aplicação; o API OFS é o FakeOfsApi."""
    app.dependency_overrides[get_api_client] = lambda: api_client
    app.dependency_overrides[get_registry] = lambda: registry
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_api_client, None)
        app.dependency_overrides.pop(get_registry, None)
