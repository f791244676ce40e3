# тут модели для config.yaml

from typing import Literal
from pydantic import BaseModel, Field

class SystemConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000

class ConverterConfig(BaseModel):
    resample: Literal["bilinear", "bicubic", "lanczos"] = "bilinear"
    max_upload_bytes: int = Field(default=16 * 1024 * 1024, gt=0)
    max_frames: int = Field(default=256, gt=0)

class DeviceConfig(BaseModel):
    transport: str = ""  # например http://esp-home.local
    timeout: float = 10.0
    buffer_path: str = "/api/gif"
    color_path: str = "/api/rgb"
    settings_path: str = "/api/settings"
    info_path: str = "/system/info"
