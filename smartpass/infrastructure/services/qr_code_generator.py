"""
Name: QR Code Generator (qrcode + Pillow)

Responsibilities:
  - Encode <public base url>/public-employee/<id> as a PNG QR image
  - Return it as a base64 data URL suitable for <img src>

Collaborators:
  - config.py: PUBLIC_APP_URL
  - application.use_cases.employees: create / regenerate QR
"""

import base64
import io

import qrcode


class PngQRCodeGenerator:
    """R: QRCodeGenerator producing data:image/png;base64 URLs."""

    def __init__(self, public_base_url: str, box_size: int = 10, border: int = 2):
        self._base_url = public_base_url.rstrip("/")
        self._box_size = box_size
        self._border = border

    def public_link(self, employee_id: str) -> str:
        return f"{self._base_url}/public-employee/{employee_id}"

    def generate(self, employee_id: str) -> str:
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_M,
            box_size=self._box_size,
            border=self._border,
        )
        qr.add_data(self.public_link(employee_id))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        encoded = base64.b64encode(buf.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"
