import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from consulta_ofs.clients.ofs_api import make_http_client
from consulta_ofs.config import LOG_LEVEL, OFS_API_URL
from consulta_ofs.routers import consulta_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Um httpx.AsyncClient para toda a aplicação, fechado no desligamento."""
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    app.state.http = make_http_client()
    logger.info("app_started ofs_api_url=%s", OFS_API_URL)
    try:
        yield
    finally:
        await app.state.http.aclose()


app = FastAPI(title="Consulta OFS", lifespan=lifespan)

app.include_router(consulta_router.router)


@app.get("/health", include_in_schema=False)
def health():
    return {"status": "ok"}
