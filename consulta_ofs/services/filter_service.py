"""
Normalização dos filtros: texto livre -> lista de tokens, intervalo de datas ->
dataInicial/dataFinal, caixas de seleção -> lista de rótulos. Também decide se
a consulta pode ser feita (ao menos um filtro efetivo).
Funções puras: nenhuma faz I/O.
"""
import re
from datetime import date

from consulta_ofs.constants import SELECT_ALL, WIRE_DATE_FORMAT
from consulta_ofs.errors import ConsultaError, ErrorKind
from consulta_ofs.resources import Resource
from consulta_ofs.schemas.filters import FilterState, QueryParams

TOKEN_SEPARATORS = re.compile(r"[\n,\s]+")


def normalize_tokens(raw_text: str | None) -> list[str]:
    """
    Divide o texto colado pelo usuário em tokens (quebra de linha, vírgula, espaço).
    Tokens vazios são descartados; nada mais é alterado (sem dedup, sem maiúsculas).
    """
    if not raw_text:
        return []
    return [t for t in TOKEN_SEPARATORS.split(raw_text) if t]


def join_tokens(tokens: list[str]) -> str | None:
    """Valor do parâmetro: tokens separados por vírgula; lista vazia -> parâmetro ausente."""
    return ",".join(tokens) if tokens else None


def selection_value(selecao: tuple[str, ...], choices: tuple[str, ...]) -> str | None:
    """
    Rótulos marcados -> valor do parâmetro. "Todos", nada marcado ou todos marcados
    significam "não filtrar" e o parâmetro não é enviado.
    """
    picked = [c for c in choices if c in selecao]
    if SELECT_ALL in selecao or not picked or len(picked) == len(choices):
        return None
    return ",".join(picked)


def build_query_params(filters: FilterState, resource: Resource) -> QueryParams:
    values: dict[str, str | None] = {
        "equipamento": join_tokens(normalize_tokens(filters.equipamento)),
        "nota": join_tokens(normalize_tokens(filters.nota)),
    }
    # Intervalo parcial nunca é enviado
    if filters.has_date_range():
        values["data_inicial"] = filters.data_inicial.strftime(WIRE_DATE_FORMAT)
        values["data_final"] = filters.data_final.strftime(WIRE_DATE_FORMAT)
    if resource.selection_key:
        values[resource.selection_key] = selection_value(filters.selecao, resource.selection_choices)
    return QueryParams(**values)


def can_query(filters: FilterState, resource: Resource) -> bool:
    """
    True, se há ao menos um filtro efetivo: intervalo completo, código, nota ou
    seleção que restringe a consulta. "Todos" ou todas as opções marcadas não
    restringem nada e não contam.
    """
    return bool(
        filters.has_date_range()
        or filters.equipamento.strip()
        or filters.nota.strip()
        or (
            resource.selection_key is not None
            and selection_value(filters.selecao, resource.selection_choices) is not None
        )
    )


def ensure_can_query(filters: FilterState, resource: Resource) -> None:
    if not can_query(filters, resource):
        raise ConsultaError(ErrorKind.validation, resource.validation_message)


def _parse_date(value: str | None) -> date | None:
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip()[:10])
    except ValueError:
        return None


def filter_state_from_form(
    data_inicial: str | None,
    data_final: str | None,
    equipamento: str | None,
    nota: str | None,
    selecao: list[str] | None,
    resource: Resource,
) -> FilterState:
    """Valores do formulário -> FilterState. Datas inválidas viram None; rótulos desconhecidos são ignorados."""
    allowed = (*resource.selection_choices, SELECT_ALL) if resource.selection_key else ()
    return FilterState(
        data_inicial=_parse_date(data_inicial),
        data_final=_parse_date(data_final),
        equipamento=equipamento or "",
        nota=nota or "",
        selecao=tuple(s for s in (selecao or []) if s in allowed),
    )
