"""
QR code generation service
"""

import io
import os
from typing import Optional
import qrcode

from app.core.config import settings

class QRService:
    """Service for generating per-guest check-in QR codes"""

    @staticmethod
    def checkin_url(guest_id: str) -> str:
        """Get the URL encoded in a guest's QR code"""
        return f"{settings.BASE_URL.rstrip('/')}/checkin/{guest_id}"

    @staticmethod
    def generate_guest_qr(guest_id: str, format: str = 'PNG') -> bytes:
        """Generate the check-in QR code for one guest"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(QRService.checkin_url(guest_id))
        qr.make(fit=True)

        img = qr.make_image(fill_color="black", back_color="white")

        buffer = io.BytesIO()
        img.save(buffer, format=format)

        return buffer.getvalue()

    @staticmethod
    def save_qr_image(guest_id: str, output_dir: Optional[str] = None) -> str:
        """Write a guest's QR code to ``{output_dir}/{guest_id}.png``"""
        output_dir = output_dir or "static/qr_guest"
        os.makedirs(output_dir, exist_ok=True)
        file_path = os.path.join(output_dir, f"{guest_id}.png")

        with open(file_path, 'wb') as f:
            f.write(QRService.generate_guest_qr(guest_id))

        return file_path
