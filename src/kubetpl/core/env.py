"""Container environment — env var lists and value references."""

from kubetpl.core.objects import object_name
from kubetpl.pacts.helpers import object_items, require, to_string
from kubetpl.pacts.types import ValidationError


def env_list(env: dict | None) -> list[dict]:
    """Expand ``{NAME: value}`` into a container ``env`` list.

    Mapping values are EnvVarSource references (see secret_key_ref and
    friends) and go under ``valueFrom``; anything else is stringified.
    """
    result = []
    for key, value in object_items(env or {}):
        if isinstance(value, dict):
            result.append({"name": key, "valueFrom": value})
        else:
            result.append({"name": key, "value": to_string(value)})
    return result


def _data_keys(obj: dict) -> dict:
    return (obj or {}).get("data") or {}


def secret_key_ref(secret: dict, key: str) -> dict:
    """Reference one key of a Secret; the key must exist in ``secret.data``."""
    name = object_name(secret, "SecretKeyRef", "secret")
    if key not in _data_keys(secret):
        raise ValidationError("SecretKeyRef", f"{key} not in secret {name} data")
    return {"secretKeyRef": {"name": name, "key": key}}


def config_map_ref(configmap: dict, key: str) -> dict:
    """Reference one key of a ConfigMap; the key must exist in ``configmap.data``."""
    name = object_name(configmap, "ConfigMapRef", "configmap")
    if key not in _data_keys(configmap):
        raise ValidationError("ConfigMapRef", f"{key} not in configmap {name} data")
    return {"configMapKeyRef": {"name": name, "key": key}}


def field_ref(field_path: str) -> dict:
    """Downward API reference, e.g. ``metadata.namespace``."""
    return {"fieldRef": {"apiVersion": "v1", "fieldPath": require(field_path, "FieldRef", "fieldPath")}}


def resource_field_ref(resource: str, divisor=1, container_name: str | None = None) -> dict:
    """Reference a container resource limit/request, e.g. ``limits.memory``."""
    ref = {
        "resource": require(resource, "ResourceFieldRef", "resource"),
        "divisor": to_string(divisor),
    }
    if container_name is not None:
        ref["containerName"] = container_name
    return {"resourceFieldRef": ref}
