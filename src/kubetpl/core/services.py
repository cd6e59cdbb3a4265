"""Service template and the address helpers derived from a Service."""

from kubetpl.core.constants import API_CORE
from kubetpl.core.objects import k8s_object, object_name, object_namespace
from kubetpl.core.workloads import first_container_port, pod_labels
from kubetpl.pacts.helpers import require
from kubetpl.pacts.types import MissingFieldError


def service(name: str, namespace: str | None = None,
            target_pod: dict | None = None,
            port: int | None = None, target_port: int | str | None = None,
            service_type: str = "ClusterIP", port_name: str | None = None,
            app: str | None = None) -> dict:
    """Service selecting *target_pod*.

    The selector is the target's pod labels. Both the service port and the
    target port default to the first port of the target's first container.
    """
    template = "Service"
    require(target_pod, template, "target_pod")
    obj = k8s_object(API_CORE, template, name, app=app, namespace=namespace)
    if target_port is None:
        target_port = first_container_port(target_pod, template)
    if port is None:
        port = first_container_port(target_pod, template)
    port_entry = {"port": port, "targetPort": target_port}
    if port_name is not None:
        port_entry = {"name": port_name, **port_entry}
    obj["spec"] = {
        "selector": pod_labels(target_pod, template),
        "ports": [port_entry],
        "type": service_type,
    }
    return obj


def _service_port(svc: dict, template: str) -> int:
    ports = (svc.get("spec") or {}).get("ports") or []
    if not ports:
        raise MissingFieldError(template, "service.spec.ports")
    return ports[0]["port"]


def service_host(svc: dict) -> str:
    """In-cluster DNS name, ``<name>.<namespace>.svc``."""
    name = object_name(svc, "ServiceHost", "service")
    ns = require(object_namespace(svc), "ServiceHost", "service.metadata.namespace")
    return f"{name}.{ns}.svc"


def service_host_colon_port(svc: dict) -> str:
    return f"{service_host(svc)}:{_service_port(svc, 'ServiceHost')}"


def service_http_url(svc: dict) -> str:
    return f"http://{service_host_colon_port(svc)}/"


def service_name_port(svc: dict) -> dict:
    """Ingress backend pointing at this Service's first port."""
    return {
        "service": {
            "name": object_name(svc, "ServiceNamePort", "service"),
            "port": {"number": _service_port(svc, "ServiceNamePort")},
        },
    }
