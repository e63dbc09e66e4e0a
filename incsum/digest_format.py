import base64

from incsum.define import ENCODING


def bytes_to_hex(data: bytes) -> str:
    return data.hex()


def bytes_to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode(ENCODING)
