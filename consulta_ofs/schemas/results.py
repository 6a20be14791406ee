from pydantic import BaseModel


class QueryResult(BaseModel):
    """Resultado de uma consulta: linhas já formatadas para a tabela e metadados."""
    rows: list[dict[str, str]] = []
    total_count: int | None = None
    count_unknown: bool = False
    last_updated: str | None = None
    sequence: int = 0
