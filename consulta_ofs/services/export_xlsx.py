"""
Exportação para Excel: refaz os parâmetros a partir dos filtros atuais, busca
os registros no endpoint de exportação e grava uma planilha com uma única aba.
"""
import logging
from io import BytesIO
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter

from consulta_ofs.clients.ofs_api import OfsApiClient
from consulta_ofs.constants import MSG_GENERIC_EXPORT
from consulta_ofs.errors import ConsultaError
from consulta_ofs.resources import Resource
from consulta_ofs.schemas.filters import FilterState
from consulta_ofs.services.filter_service import build_query_params, ensure_can_query
from consulta_ofs.services.shaping import to_export_row

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="DDDDDD", end_color="DDDDDD", fill_type="solid")
COLUMN_WIDTH = 18


def _excel_value(value: Any) -> Any:
    if isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def build_export_xlsx(headers: list[str], rows: list[dict[str, Any]], sheet_name: str) -> BytesIO:
    """Planilha com linha de cabeçalho em negrito e uma linha por registro; sem registros -> só o cabeçalho."""
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name

    for col, h in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=h)
        cell.font = Font(bold=True)
        cell.fill = HEADER_FILL

    for row_idx, row in enumerate(rows, 2):
        for col, h in enumerate(headers, 1):
            ws.cell(row=row_idx, column=col, value=_excel_value(row.get(h)))

    for col in range(1, len(headers) + 1):
        ws.column_dimensions[get_column_letter(col)].width = COLUMN_WIDTH

    buf = BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


async def export_current_filters(client: OfsApiClient, filters: FilterState, resource: Resource) -> BytesIO:
    """
    Exporta os registros dos filtros atuais. Não reaproveita as linhas da tela:
    os parâmetros são refeitos e os dados vêm do endpoint /export.
    Qualquer falha levanta ConsultaError e nenhum arquivo é gerado.
    """
    ensure_can_query(filters, resource)
    params = build_query_params(filters, resource)
    try:
        raw_rows = await client.fetch_export_rows(resource.api_path, params)
        rows = [to_export_row(r, resource) for r in raw_rows]
    except ConsultaError as e:
        logger.warning("export_failed resource=%s kind=%s status=%s", resource.name, e.kind.value, e.status_code)
        raise ConsultaError(e.kind, f"{MSG_GENERIC_EXPORT}: {e.message}", status_code=e.status_code, detail=e.detail) from e
    buf = build_export_xlsx(resource.export_headers, rows, resource.sheet_name)
    logger.info("export_built resource=%s rows=%s params=%s", resource.name, len(rows), params.to_query())
    return buf
