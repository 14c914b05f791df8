"""
Lectura y escritura de tablas de traducciones (convención Globalize:
`<modelo>_translations` con `<modelo>_id` + `locale`).
"""
from app.infrastructure.translations.content_reader import ContentReader
from app.infrastructure.translations.content_writer import ContentWriter
from app.infrastructure.translations.payload_codec import decode_payload, encode_payload

__all__ = ["ContentReader", "ContentWriter", "decode_payload", "encode_payload"]
