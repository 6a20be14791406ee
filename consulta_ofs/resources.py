"""
Descrição dos dois recursos consultáveis (equipamentos, materiais):
caminho no API, colunas da tela, colunas do Excel, nome do arquivo,
rótulos do formulário. Routers e serviços não conhecem nomes de campos;
tudo que depende do recurso vem daqui.
"""
from dataclasses import dataclass

from pydantic import BaseModel

from consulta_ofs.constants import ACOES_MATERIAIS
from consulta_ofs.schemas.records import EquipamentoRecord, MaterialRecord


@dataclass(frozen=True)
class Column:
    label: str
    field: str
    is_date: bool = False


@dataclass(frozen=True)
class Resource:
    name: str
    title: str
    record_model: type[BaseModel]
    display_columns: tuple[Column, ...]
    export_columns: tuple[Column, ...]
    export_filename: str
    sheet_name: str
    code_label: str
    validation_message: str
    page_route: str
    export_route: str
    selection_key: str | None = None
    selection_choices: tuple[str, ...] = ()
    has_last_updated: bool = False

    @property
    def api_path(self) -> str:
        return f"/api/{self.name}"

    @property
    def display_labels(self) -> list[str]:
        return [c.label for c in self.display_columns]

    @property
    def export_headers(self) -> list[str]:
        return [c.label for c in self.export_columns]


EQUIPAMENTOS = Resource(
    name="equipamentos",
    title="Consulta de Equipamentos",
    record_model=EquipamentoRecord,
    display_columns=(
        Column("Instalação", "instalacao"),
        Column("Nota", "nota"),
        Column("Cliente", "cliente"),
        Column("Descrição Nota", "texto_breve"),
        Column("Alavanca", "alavanca"),
        Column("Data Conclusão", "data_conclusao", is_date=True),
        Column("Equipamento Removido", "equipamento_removido"),
        Column("Equipamento Instalado", "equipamento_instalado"),
    ),
    export_columns=(
        Column("Instalação", "instalacao"),
        Column("Nota", "nota"),
        Column("Cliente", "cliente"),
        Column("Texto", "texto_breve"),
        Column("Alavanca", "alavanca"),
        Column("Data Conclusão", "data_conclusao", is_date=True),
        Column("Equipamento Removido", "equipamento_removido"),
        Column("Equipamento Instalado", "equipamento_instalado"),
    ),
    export_filename="equipamentos_filtrados.xlsx",
    sheet_name="Equipamentos",
    code_label="Equip. Removido",
    validation_message="Informe um intervalo de datas, Equipamento ou Nota para continuar.",
    page_route="equipamentos",
    export_route="equipamentos_export",
    has_last_updated=True,
)

MATERIAIS = Resource(
    name="materiais",
    title="Consulta de Materiais (OFS)",
    record_model=MaterialRecord,
    display_columns=(
        Column("Data", "data", is_date=True),
        Column("Nota", "nota"),
        Column("Descrição", "descricao_nota"),
        Column("Acao", "acao"),
        Column("Status do Usuário", "status_usuario"),
        Column("Tipo de nota", "tipo_nota"),
        Column("Instalação", "instalacao"),
        Column("Zona", "zona"),
        Column("Lote", "lote"),
        Column("Descricao", "descricao_material"),
        Column("Quantidade", "quantidade"),
        Column("Serial", "serial"),
        Column("Base Operacional", "base_operacional"),
    ),
    export_columns=(
        Column("Data", "data", is_date=True),
        Column("Nota", "nota"),
        Column("Texto", "texto_breve"),
        Column("Acao", "acao"),
        Column("Status do Usuário", "status_usuario"),
        Column("Tipo de nota", "tipo_nota"),
        Column("Instalação", "instalacao"),
        Column("Zona", "zona"),
        Column("Lote", "lote"),
        Column("Descricao", "descricao_material"),
        Column("Quantidade", "quantidade"),
        Column("Serial", "serial"),
        Column("Base Operacional", "base_operacional"),
    ),
    export_filename="materiais_filtrados.xlsx",
    sheet_name="Materiais",
    code_label="Descrição (Material)",
    validation_message="Informe um intervalo de datas, Nota ou Descrição para continuar.",
    page_route="materiais",
    export_route="materiais_export",
    selection_key="acoes",
    selection_choices=ACOES_MATERIAIS,
)

RESOURCES = {r.name: r for r in (EQUIPAMENTOS, MATERIAIS)}
