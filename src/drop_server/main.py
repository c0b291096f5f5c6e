import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from drop_server.config.config import config
from drop_server.drop.api import router as drop_router
from drop_server.drop.persistence import SqlMetadataPersister
from drop_server.drop.pipeline import UploadPipeline
from drop_server.drop.storage import DiskFileSink
from drop_server.drop.store import MetadataStore
from drop_server.errors import DropError
from drop_server.logging_config import setup_logging

logger = logging.getLogger(__name__)


def _sqlite_dir(sql_url: str) -> Path | None:
    prefix = 'sqlite:///'
    if sql_url.startswith(prefix) and len(sql_url) > len(prefix):
        return Path(sql_url[len(prefix):]).parent
    return None


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    sink = DiskFileSink(config.file.base_dir)
    sink.init()

    sql_dir = _sqlite_dir(config.metadata.sql_url)
    if sql_dir:
        sql_dir.mkdir(parents=True, exist_ok=True)
    persister = SqlMetadataPersister(config.metadata.sql_url)
    persister.init()

    store = MetadataStore()
    store.load(persister)
    app.state.pipeline = UploadPipeline(store, sink, persister)
    if not config.secret_key:
        logger.warning("No secret key configured, uploads are open")
    yield


app = FastAPI(lifespan=lifespan)
app.include_router(drop_router, tags=['drop'])

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 或者指定特定的域名
    allow_credentials=True,
    allow_methods=["*"],  # 允许所有 HTTP 方法
    allow_headers=["*"]  # 允许所有请求头
)


@app.exception_handler(DropError)
async def drop_error_handler(request: Request, exc: DropError):
    if exc.status_code >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


if __name__ == "__main__":
    uvicorn.run(app='drop_server.main:app', host=config.host, port=config.port, reload=True)
