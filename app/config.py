from pathlib import Path
from pydantic import BaseModel, Field
import yaml
from models.config import SystemConfig, ConverterConfig, DeviceConfig

DEFAULT_CONFIG_PATH = Path(__file__).with_name("config.yaml")

class GlobalConfig(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    converter: ConverterConfig = Field(default_factory=ConverterConfig)
    device: DeviceConfig = Field(default_factory=DeviceConfig)

class Config:
    def __init__(self, path: str | Path = DEFAULT_CONFIG_PATH):
        self.path = path
        self.model = None

    def load(self):
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        self.model = GlobalConfig(**data)
        return self.model

    def get(self) -> GlobalConfig:
        if self.model is None:
            return self.load()
        return self.model
