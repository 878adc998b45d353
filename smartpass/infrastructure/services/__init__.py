"""Infrastructure services"""

from .qr_code_generator import PngQRCodeGenerator

__all__ = ["PngQRCodeGenerator"]
