import enum


class ErrorKind(str, enum.Enum):
    validation = "validation"
    transport = "transport"
    server = "server"
    secondary = "secondary"


class ConsultaError(Exception):
    """Falha de uma consulta ou exportação, já classificada e com mensagem para o usuário."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code
        self.detail = detail

    def __repr__(self) -> str:
        return f"ConsultaError(kind={self.kind.value!r}, status_code={self.status_code!r}, message={self.message!r})"
