import numpy as np

# канонический кадр RGB888 64x64 для матрицы (3 байта на пиксель: R, G, B)

MATRIX_WIDTH = 64
MATRIX_HEIGHT = 64
MATRIX_SIZE = MATRIX_WIDTH * MATRIX_HEIGHT


class RasterFrame:

    def __init__(self, pixels: np.ndarray | None = None):
        self.width = MATRIX_WIDTH
        self.height = MATRIX_HEIGHT
        if pixels is None:
            pixels = np.zeros((MATRIX_HEIGHT, MATRIX_WIDTH, 3), dtype=np.uint8)
        if pixels.shape != (MATRIX_HEIGHT, MATRIX_WIDTH, 3):
            raise ValueError(f"RasterFrame must be {MATRIX_WIDTH}x{MATRIX_HEIGHT} RGB, got shape {pixels.shape}")
        # храним собственную копию и запрещаем запись - кадр неизменяемый
        self.pixels = np.array(pixels, dtype=np.uint8, copy=True)
        self.pixels.setflags(write=False)

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        """Возвращает цвет пикселя (R, G, B) в координатах (x, y)"""
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)
