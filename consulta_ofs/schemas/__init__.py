from consulta_ofs.schemas.filters import FilterState, QueryParams
from consulta_ofs.schemas.records import EquipamentoRecord, MaterialRecord
from consulta_ofs.schemas.results import QueryResult

__all__ = ["FilterState", "QueryParams", "EquipamentoRecord", "MaterialRecord", "QueryResult"]
