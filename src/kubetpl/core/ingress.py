"""Ingress template, rule/backend helpers and path validation."""

from kubetpl.core.constants import API_NETWORKING
from kubetpl.core.objects import k8s_object
from kubetpl.pacts.helpers import require
from kubetpl.pacts.types import ValidationError


def ingress_backend(service_name: str, port: int | str = 80) -> dict:
    """Backend by service name; string ports are treated as port names."""
    require(service_name, "IngressBackend", "service_name")
    port_ref = {"name": port} if isinstance(port, str) else {"number": port}
    return {"service": {"name": service_name, "port": port_ref}}


def ingress_path(backend: dict, path: str = "/", path_type: str = "Prefix") -> dict:
    return {"path": path, "pathType": path_type, "backend": backend}


def ingress_rule(host: str | None, paths: list[dict]) -> dict:
    """Rule routing *paths* for *host*; a None host matches every host."""
    rule = {}
    if host is not None:
        rule["host"] = host
    rule["http"] = {"paths": list(paths)}
    return rule


def ingress_tls(hosts: list[str], secret_name: str) -> dict:
    return {"hosts": list(hosts), "secretName": require(secret_name, "IngressTLS", "secretName")}


def _relative_paths(rules: list[dict]) -> list[str]:
    """Collect every rule path that does not start with '/'."""
    bad = []
    for rule in rules:
        for entry in (rule.get("http") or {}).get("paths") or []:
            path = entry.get("path") or "/"
            if not path.startswith("/"):
                bad.append(path)
    return bad


def ingress(name: str, namespace: str | None = None,
            rules: list[dict] | None = None, tls: list[dict] | None = None,
            default_backend: dict | None = None,
            annotations: dict | None = None,
            ingress_class: str | None = None, app: str | None = None) -> dict:
    """Ingress; ``tls`` and ``defaultBackend`` appear only when given."""
    template = "Ingress"
    rules = list(rules or [])
    bad = _relative_paths(rules)
    if bad:
        raise ValidationError(template, f"paths must be absolute: {', '.join(bad)}")
    obj = k8s_object(API_NETWORKING, template, name, app=app, namespace=namespace)
    obj["metadata"]["annotations"].update(annotations or {})
    spec = {}
    if ingress_class is not None:
        spec["ingressClassName"] = ingress_class
    if default_backend is not None:
        spec["defaultBackend"] = default_backend
    spec["rules"] = rules
    if tls:
        spec["tls"] = list(tls)
    obj["spec"] = spec
    return obj

