import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent

# Endereço do API remoto OFS; sobrescrito por OFS_API_URL
OFS_API_URL = os.getenv("OFS_API_URL", "https://backend-equipamento.onrender.com").rstrip("/")
# Tempo limite (segundos) de cada requisição ao API
OFS_API_TIMEOUT = float(os.getenv("OFS_API_TIMEOUT", "30"))

SECRET_KEY = os.getenv("SECRET_KEY", "change-me-in-production-secret-key-32chars")
SESSION_COOKIE_NAME = "consulta_session"
# Para HTTPS: SECURE_COOKIES=true, o cookie só é enviado por HTTPS
SECURE_COOKIES = os.getenv("SECURE_COOKIES", "false").lower() in ("true", "1", "yes")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(86400)))
# Limite de sessões de página mantidas em memória
SESSION_MAX_ENTRIES = int(os.getenv("SESSION_MAX_ENTRIES", "500"))
# Após esse tempo uma consulta em andamento deixa de bloquear um novo "Filtrar"
SESSION_BUSY_TIMEOUT = float(os.getenv("SESSION_BUSY_TIMEOUT", str(OFS_API_TIMEOUT * 3)))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

TEMPLATES_DIR = BASE_DIR / "templates"
