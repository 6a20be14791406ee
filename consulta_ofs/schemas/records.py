"""
Registros devolvidos pelo API OFS. Cada recurso tem um esquema fechado:
os campos usam as chaves em português do API como alias, todos opcionais,
chaves desconhecidas são ignoradas.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class EquipamentoRecord(_Record):
    """Registro de instalação/retirada de equipamento (`/api/equipamentos`)."""
    instalacao: Any = Field(None, alias="Instalação")
    nota: Any = Field(None, alias="Nota")
    cliente: Any = Field(None, alias="Cliente")
    texto_breve: Any = Field(None, alias="Texto breve para o code")
    alavanca: Any = Field(None, alias="Alavanca")
    data_conclusao: Any = Field(None, alias="Data Conclusão")
    equipamento_removido: Any = Field(None, alias="Equipamento Removido")
    equipamento_instalado: Any = Field(None, alias="Equipamento Instalado")


class MaterialRecord(_Record):
    """Registro de movimentação de material (`/api/materiais`)."""
    data: Any = Field(None, alias="Data")
    nota: Any = Field(None, alias="Nota")
    descricao_nota: Any = Field(None, alias="Descrição")
    texto_breve: Any = Field(None, alias="Texto Breve")
    acao: Any = Field(None, alias="Acao")
    status_usuario: Any = Field(None, alias="Status do Usuário")
    tipo_nota: Any = Field(None, alias="Tipo de nota")
    instalacao: Any = Field(None, alias="Instalação")
    zona: Any = Field(None, alias="Zona")
    lote: Any = Field(None, alias="Lote")
    descricao_material: Any = Field(None, alias="Descricao")
    quantidade: Any = Field(None, alias="Quantidade")
    serial: Any = Field(None, alias="Serial")
    base_operacional: Any = Field(None, alias="Base Operacional")
