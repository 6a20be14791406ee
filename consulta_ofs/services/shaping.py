"""Formatação dos registros do API para a tabela da página e para o Excel."""
import logging
import re
from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ValidationError

from consulta_ofs.constants import DISPLAY_DATE_FORMAT, MSG_INVALID_RESPONSE, PLACEHOLDER
from consulta_ofs.errors import ConsultaError, ErrorKind
from consulta_ofs.resources import Column, Resource

logger = logging.getLogger(__name__)

# Prefixo yyyy-mm-dd de uma data ou data/hora ISO
_ISO_DATE_PREFIX = re.compile(r"^\s*(\d{4})-(\d{2})-(\d{2})")


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def format_date(value: Any) -> str:
    """
    Data de calendário no formato dd/mm/aaaa. Usa o dia escrito no valor
    ("2024-01-31", "2024-01-31T00:00:00Z"), sem conversão de fuso horário.
    Valor vazio ou irreconhecível -> "-".
    """
    if _is_empty(value):
        return PLACEHOLDER
    if isinstance(value, (date, datetime)):
        return value.strftime(DISPLAY_DATE_FORMAT)
    m = _ISO_DATE_PREFIX.match(str(value))
    if not m:
        return PLACEHOLDER
    try:
        d = date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return PLACEHOLDER
    return d.strftime(DISPLAY_DATE_FORMAT)


def _cell(record: BaseModel, column: Column) -> Any:
    value = getattr(record, column.field)
    if column.is_date:
        return format_date(value)
    return PLACEHOLDER if _is_empty(value) else value


def parse_record(raw: Any, resource: Resource) -> BaseModel:
    try:
        return resource.record_model.model_validate(raw)
    except ValidationError as e:
        logger.warning("record_invalid resource=%s error_count=%s", resource.name, e.error_count())
        raise ConsultaError(ErrorKind.server, MSG_INVALID_RESPONSE) from e


def to_display_row(raw: Any, resource: Resource) -> dict[str, str]:
    """Linha da tabela: rótulo da coluna -> texto exibido."""
    record = parse_record(raw, resource)
    return {c.label: str(_cell(record, c)) for c in resource.display_columns}


def to_export_row(raw: Any, resource: Resource) -> dict[str, Any]:
    """Linha do Excel: nome da coluna de exportação -> valor (números ficam números)."""
    record = parse_record(raw, resource)
    return {c.label: _cell(record, c) for c in resource.export_columns}
