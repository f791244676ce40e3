# глобальные экземпляры основных компонентов приложения

from config import Config
from converter import Converter
from transport.driver import Driver

config = Config()  # будет загружен из config.yaml при старте
converter = Converter()
driver = Driver()
