"""Object envelope and the kinds that need nothing beyond it."""

from kubetpl.core.constants import (
    API_APIEXTENSIONS, API_APIREGISTRATION, API_AUTOSCALING, API_CORE,
    SYSTEM_NAMESPACE,
)
from kubetpl.pacts.helpers import object_values, require
from kubetpl.pacts.types import MissingFieldError, ValidationError


def k8s_object(api_version: str, kind: str, name: str,
               app: str | None = None, namespace: str | None = None) -> dict:
    """Build the envelope shared by every object: apiVersion, kind, metadata.

    ``labels.name`` is always set; ``labels.app`` only when *app* is given,
    and ``labels["k8s-app"]`` as well when the object lives in kube-system.
    """
    require(name, kind, "name")
    labels = {"name": name}
    if app is not None:
        labels["app"] = app
        if namespace == SYSTEM_NAMESPACE:
            labels["k8s-app"] = app
    metadata = {"name": name}
    if namespace is not None:
        metadata["namespace"] = namespace
    metadata["labels"] = labels
    metadata["annotations"] = {}
    return {"apiVersion": api_version, "kind": kind, "metadata": metadata}


def object_name(obj: dict, template: str, field: str) -> str:
    """Return ``metadata.name`` of a referenced object."""
    name = ((obj or {}).get("metadata") or {}).get("name")
    if not name:
        raise MissingFieldError(template, f"{field}.metadata.name")
    return name


def object_namespace(obj: dict) -> str | None:
    """Return ``metadata.namespace`` of a referenced object, if any."""
    return ((obj or {}).get("metadata") or {}).get("namespace")


def k8s_list(items: list | dict) -> dict:
    """Aggregate several objects into a ``List``.

    A mapping keeps its insertion order and drops hidden keys.
    """
    if isinstance(items, dict):
        items = object_values(items)
    return {"apiVersion": API_CORE, "kind": "List", "items": list(items)}


def namespace(name: str, app: str | None = None) -> dict:
    return k8s_object(API_CORE, "Namespace", name, app=app)


def service_account(name: str, namespace: str | None = None,
                    app: str | None = None) -> dict:
    return k8s_object(API_CORE, "ServiceAccount", name, app=app, namespace=namespace)


def endpoint_address(ip: str) -> dict:
    return {"ip": ip}


def endpoint_port(port: int, name: str | None = None) -> dict:
    entry = {"port": port}
    if name is not None:
        entry["name"] = name
    return entry


def endpoints(name: str, namespace: str | None = None,
              subsets: list[dict] | None = None, app: str | None = None) -> dict:
    """Endpoints for a selector-less Service (subsets of addresses/ports)."""
    obj = k8s_object(API_CORE, "Endpoints", name, app=app, namespace=namespace)
    obj["subsets"] = list(subsets or [])
    return obj


def cross_version_object_reference(target: dict) -> dict:
    """Reference a scalable object by apiVersion, kind and name."""
    template = "CrossVersionObjectReference"
    return {
        "apiVersion": require((target or {}).get("apiVersion"), template, "target.apiVersion"),
        "kind": require((target or {}).get("kind"), template, "target.kind"),
        "name": object_name(target, template, "target"),
    }


def horizontal_pod_autoscaler(name: str, namespace: str | None = None,
                              target: dict | None = None,
                              max_replicas: int | None = None,
                              min_replicas: int | None = None,
                              target_cpu_utilization: int | None = None,
                              app: str | None = None) -> dict:
    """Autoscale *target*; minReplicas defaults to the target's replica count."""
    template = "HorizontalPodAutoscaler"
    require(target, template, "target")
    require(max_replicas, template, "maxReplicas")
    if min_replicas is None:
        min_replicas = (target.get("spec") or {}).get("replicas")
        require(min_replicas, template, "target.spec.replicas")
    if max_replicas < min_replicas:
        raise ValidationError(
            template, f"maxReplicas ({max_replicas}) < minReplicas ({min_replicas})")
    obj = k8s_object(API_AUTOSCALING, "HorizontalPodAutoscaler", name,
                     app=app, namespace=namespace)
    obj["spec"] = {
        "scaleTargetRef": cross_version_object_reference(target),
        "minReplicas": min_replicas,
        "maxReplicas": max_replicas,
    }
    if target_cpu_utilization is not None:
        obj["spec"]["targetCPUUtilizationPercentage"] = target_cpu_utilization
    return obj


def api_service(name: str, service: dict | None = None,
                group: str | None = None, version: str | None = None,
                group_priority_minimum: int = 1000, version_priority: int = 15,
                ca_bundle: str | None = None, app: str | None = None) -> dict:
    """Register an aggregated API served by *service*.

    Without a CA bundle the API server skips TLS verification.
    """
    template = "APIService"
    require(service, template, "service")
    obj = k8s_object(API_APIREGISTRATION, "APIService", name, app=app)
    spec = {
        "service": {
            "name": object_name(service, template, "service"),
            "namespace": require(object_namespace(service), template,
                                 "service.metadata.namespace"),
        },
        "group": require(group, template, "group"),
        "version": require(version, template, "version"),
        "groupPriorityMinimum": group_priority_minimum,
        "versionPriority": version_priority,
    }
    if ca_bundle is not None:
        spec["caBundle"] = ca_bundle
    else:
        spec["insecureSkipTLSVerify"] = True
    obj["spec"] = spec
    return obj


def custom_resource_definition(group: str, version: str, kind: str,
                               scope: str = "Namespaced",
                               plural: str | None = None,
                               schema: dict | None = None) -> dict:
    """CRD named ``<plural>.<group>``; names are derived from *kind*."""
    template = "CustomResourceDefinition"
    require(group, template, "group")
    require(version, template, "version")
    require(kind, template, "kind")
    singular = kind.lower()
    plural = plural or f"{singular}s"
    obj = k8s_object(API_APIEXTENSIONS, "CustomResourceDefinition", f"{plural}.{group}")
    obj["spec"] = {
        "group": group,
        "scope": scope,
        "names": {
            "kind": kind,
            "singular": singular,
            "plural": plural,
            "listKind": f"{kind}List",
        },
        "versions": [{
            "name": version,
            "served": True,
            "storage": True,
            "schema": {"openAPIV3Schema": schema or {
                "type": "object",
                "x-kubernetes-preserve-unknown-fields": True,
            }},
        }],
    }
    return obj
