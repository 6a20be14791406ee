"""
Testes unitários: exportação para Excel (uma aba, cabeçalho, uma linha por registro).
"""
from datetime import date

import pytest
from openpyxl import load_workbook

from consulta_ofs.errors import ConsultaError, ErrorKind
from consulta_ofs.resources import EQUIPAMENTOS, MATERIAIS
from consulta_ofs.schemas.filters import FilterState
from consulta_ofs.services.export_xlsx import build_export_xlsx, export_current_filters

JANEIRO = FilterState(data_inicial=date(2024, 1, 1), data_final=date(2024, 1, 31))


def _sheet_values(buf):
    wb = load_workbook(buf)
    assert len(wb.sheetnames) == 1
    ws = wb.active
    return ws.title, [list(r) for r in ws.iter_rows(values_only=True)]


def test_build_export_xlsx_header_only_when_no_rows():
    title, values = _sheet_values(build_export_xlsx(["A", "B"], [], "Aba"))
    assert title == "Aba"
    assert values == [["A", "B"]]


@pytest.mark.asyncio
async def test_export_materiais_maps_rows(api_client, fake_api):
    buf = await export_current_filters(api_client, JANEIRO, MATERIAIS)
    title, values = _sheet_values(buf)
    assert title == "Materiais"
    assert values[0] == MATERIAIS.export_headers
    assert len(values) == 1 + 3
    first = dict(zip(values[0], values[1]))
    assert first["Data"] == "05/01/2024"
    assert first["Texto"] == "TROCA MEDIDOR"
    assert first["Quantidade"] == 1
    assert dict(zip(values[0], values[3]))["Serial"] == "-"
    assert fake_api.paths() == ["/api/materiais/export"]
    assert fake_api.params_for("/api/materiais/export") == {"dataInicial": "2024-01-01", "dataFinal": "2024-01-31"}


@pytest.mark.asyncio
async def test_export_with_zero_rows_has_header_only(api_client, fake_api):
    fake_api.export_rows["equipamentos"] = []
    _, values = _sheet_values(await export_current_filters(api_client, JANEIRO, EQUIPAMENTOS))
    assert values == [EQUIPAMENTOS.export_headers]


@pytest.mark.asyncio
async def test_export_requires_a_filter(api_client, fake_api):
    with pytest.raises(ConsultaError) as exc:
        await export_current_filters(api_client, FilterState(), EQUIPAMENTOS)
    assert exc.value.kind == ErrorKind.validation
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_export_failure_raises_single_error(api_client, fake_api):
    fake_api.fail["/api/materiais/export"] = 503
    with pytest.raises(ConsultaError) as exc:
        await export_current_filters(api_client, JANEIRO, MATERIAIS)
    assert exc.value.kind == ErrorKind.server
    assert exc.value.message == "Erro ao exportar Excel: Erro 503: falha interna"
