"""
Sessão de página: identifica o navegador por cookie assinado e guarda, em memória,
o estado de carregamento e a sequência de consultas de cada página (equipamentos, materiais).
Nada é persistido; nada é compartilhado entre sessões.
"""
import logging
import secrets
import time
from collections import OrderedDict
from dataclasses import dataclass

from fastapi import Request, Response
from itsdangerous import BadSignature, URLSafeTimedSerializer

from consulta_ofs.config import (
    SECRET_KEY,
    SECURE_COOKIES,
    SESSION_BUSY_TIMEOUT,
    SESSION_COOKIE_NAME,
    SESSION_MAX_AGE,
    SESSION_MAX_ENTRIES,
)

logger = logging.getLogger(__name__)

serializer = URLSafeTimedSerializer(SECRET_KEY, salt="consulta-ofs-session")


def create_session_token(session_id: str) -> str:
    return serializer.dumps({"sid": session_id})


def load_session_token(token: str) -> dict | None:
    try:
        return serializer.loads(token, max_age=SESSION_MAX_AGE)
    except BadSignature:
        return None


@dataclass
class PageSession:
    """
    Estado de uma página numa sessão. `loading` bloqueia novo disparo enquanto
    uma consulta está em andamento; `sequence` numera as consultas, e só a mais
    recente tem o resultado entregue à página.
    Uma consulta presa há mais de `busy_timeout` segundos deixa de bloquear;
    se ela terminar depois, seu resultado é descartado.
    """
    loading: bool = False
    sequence: int = 0
    started_at: float = 0.0
    busy_timeout: float = SESSION_BUSY_TIMEOUT

    def is_busy(self) -> bool:
        return self.loading and (time.monotonic() - self.started_at) < self.busy_timeout

    def begin(self) -> int:
        self.loading = True
        self.started_at = time.monotonic()
        self.sequence += 1
        return self.sequence

    def finish(self, seq: int) -> bool:
        """Encerra a consulta `seq`. False se ela já foi superada por outra."""
        if seq != self.sequence:
            logger.info("stale_result_discarded seq=%s latest=%s", seq, self.sequence)
            return False
        self.loading = False
        return True


class SessionRegistry:
    """Sessões de página em memória, com descarte das menos usadas acima do limite."""

    def __init__(self, max_entries: int = SESSION_MAX_ENTRIES):
        self.max_entries = max_entries
        self._sessions: OrderedDict[tuple[str, str], PageSession] = OrderedDict()

    def get(self, session_id: str, page: str) -> PageSession:
        key = (session_id, page)
        session = self._sessions.get(key)
        if session is None:
            session = PageSession()
            self._sessions[key] = session
            while len(self._sessions) > self.max_entries:
                self._sessions.popitem(last=False)
        else:
            self._sessions.move_to_end(key)
        return session

    def __len__(self) -> int:
        return len(self._sessions)


registry = SessionRegistry()


def get_registry() -> SessionRegistry:
    return registry


def resolve_session_id(request: Request) -> tuple[str, bool]:
    """Id da sessão do cookie assinado; se ausente ou inválido, gera um novo. Retorna (id, é_novo)."""
    token = request.cookies.get(SESSION_COOKIE_NAME)
    data = load_session_token(token) if token else None
    if data and isinstance(data.get("sid"), str):
        return data["sid"], False
    return secrets.token_urlsafe(16), True


def attach_session_cookie(response: Response, session_id: str) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        create_session_token(session_id),
        max_age=SESSION_MAX_AGE,
        httponly=True,
        path="/",
        secure=SECURE_COOKIES,
        samesite="lax",
    )
