"""ConfigMap and Secret templates."""

import base64

from kubetpl.core.constants import API_CORE
from kubetpl.core.objects import k8s_object
from kubetpl.pacts.types import ValidationError


def config_map(name: str, namespace: str | None = None, data: dict | None = None,
               app: str | None = None) -> dict:
    """ConfigMap whose data values must all be strings."""
    data = dict(data or {})
    nonstrings = [k for k, v in data.items() if not isinstance(v, str)]
    if nonstrings:
        raise ValidationError(
            "ConfigMap", f"data contains non-string values: {', '.join(nonstrings)}")
    obj = k8s_object(API_CORE, "ConfigMap", name, app=app, namespace=namespace)
    obj["data"] = data
    return obj


def _b64(value: str | bytes) -> str:
    """Base64-encode a str (as UTF-8) or bytes value."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return base64.b64encode(value).decode("ascii")


def secret(name: str, namespace: str | None = None, data: dict | None = None,
           secret_type: str = "Opaque", app: str | None = None) -> dict:
    """Secret built from plain values; each one is base64-encoded into ``data``."""
    data = dict(data or {})
    invalid = [k for k, v in data.items() if not isinstance(v, (str, bytes))]
    if invalid:
        raise ValidationError(
            "Secret", f"data values must be str or bytes: {', '.join(invalid)}")
    obj = k8s_object(API_CORE, "Secret", name, app=app, namespace=namespace)
    obj["type"] = secret_type
    obj["data"] = {k: _b64(v) for k, v in data.items()}
    return obj
