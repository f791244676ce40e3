from fastapi import APIRouter
from dependencies import config, converter

config_router = APIRouter()

@config_router.post("/reload")
async def reload_config():
    cfg = config.load()
    converter.configure(cfg.converter)
    return {"status": "ok"}

@config_router.get("/")
async def get_config():
    return config.get().model_dump()
