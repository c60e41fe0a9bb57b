"""
QR codes for sharing a wedding's live URL
"""

from io import BytesIO

import qrcode
import structlog

logger = structlog.get_logger(__name__)


def generate_qr_png(data: str, box_size: int = 10, border: int = 4) -> bytes:
    """Encode `data` as a black-on-white QR code PNG"""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format="PNG")
    logger.debug("Generated QR code", data=data)
    return buffer.getvalue()
