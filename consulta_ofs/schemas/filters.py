"""
DTO dos filtros. O router converte os parâmetros do formulário em FilterState;
o serviço de filtros deriva daí os QueryParams enviados ao API.
"""
from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class FilterState(BaseModel):
    """Filtros como digitados no formulário (texto bruto, ainda não dividido)."""
    model_config = ConfigDict(frozen=True)

    data_inicial: date | None = None
    data_final: date | None = None
    equipamento: str = ""
    nota: str = ""
    selecao: tuple[str, ...] = ()

    def has_date_range(self) -> bool:
        return self.data_inicial is not None and self.data_final is not None


class QueryParams(BaseModel):
    """Parâmetros canônicos de uma consulta. Nunca contém chave com valor vazio."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    data_inicial: str | None = Field(None, alias="dataInicial")
    data_final: str | None = Field(None, alias="dataFinal")
    equipamento: str | None = None
    nota: str | None = None
    status: str | None = None
    acoes: str | None = None

    def to_query(self) -> dict[str, str]:
        return self.model_dump(by_alias=True, exclude_none=True)
