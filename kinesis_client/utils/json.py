import json
from datetime import date, datetime

from .strings import base64_encode


class CustomEncoder(json.JSONEncoder):
    """Helper class to convert JSON documents with datetimes or bytes, as they are returned by the parser."""

    def default(self, o):
        if isinstance(o, (datetime, date)):
            return o.isoformat()
        if isinstance(o, (bytes, bytearray)):
            return base64_encode(bytes(o))
        return super(CustomEncoder, self).default(o)
