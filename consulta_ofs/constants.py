"""
Fonte única de rótulos, mensagens e valores de referência.
Usada nos routers, serviços e templates (via contexto).
"""

# Valor exibido no lugar de campos ausentes ou vazios (tela e Excel)
PLACEHOLDER = "-"

# Formatos de data: envio ao API e exibição
WIRE_DATE_FORMAT = "%Y-%m-%d"
DISPLAY_DATE_FORMAT = "%d/%m/%Y"

# Sentinela "selecionar tudo" das caixas de seleção
SELECT_ALL = "Todos"

# --- Ações (coluna "Acao" dos materiais) ---
ACOES_MATERIAIS = ("Instalação", "Retirada", "Substituição")

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# --- Mensagens para o aviso único da página ---
MSG_GENERIC_LOAD = "Erro ao carregar dados"
MSG_GENERIC_EXPORT = "Erro ao exportar Excel"
MSG_CONNECTION = "Erro de conexão: {detail}"
MSG_SERVER = "Erro {status}: {detail}"
MSG_INVALID_RESPONSE = "Resposta da API sem dados"
MSG_BUSY = "Consulta em andamento. Aguarde a conclusão."
MSG_SUPERSEDED = "Consulta substituída por outra mais recente."
COUNT_UNKNOWN_LABEL = "indisponível"
