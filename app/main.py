from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from api.config import config_router as config_router
from api.convert import router as convert_router
from api.display import router as display_router
from dependencies import config, converter, driver
import logging
import os

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # инициализация при старте
    cfg = config.get()
    converter.configure(cfg.converter)
    driver.init_from_config(cfg.device)
    await driver.start()

    yield

    # остановка при завершении
    await driver.stop()


app = FastAPI(lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(convert_router, prefix="/api/convert", tags=["convert"])
app.include_router(display_router, prefix="/api/display", tags=["display"])
app.include_router(config_router, prefix="/api/config", tags=["config"])


if __name__ == "__main__":
    import uvicorn

    os.makedirs("logs", exist_ok=True)

    cfg = config.get()
    uvicorn.run(app, host=cfg.system.host, port=cfg.system.port, log_config="log_conf.yaml")
