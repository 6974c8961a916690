"""
LP-NFT / LP-SFT metadata helpers
"""

import base64
import json

DATA_URI_PREFIX = "data:application/json;base64,"


def extract_json_from_uri(uri: str) -> dict:
    """
    Decode the JSON metadata embedded in a base64 data URI

    Raises:
        ValueError: If the URI is not a base64 JSON data URI
    """
    if not uri.startswith(DATA_URI_PREFIX):
        raise ValueError(f"Not a base64 JSON data URI: {uri[:40]}")
    encoded = uri[len(DATA_URI_PREFIX):]
    return json.loads(base64.b64decode(encoded).decode("utf-8"))
