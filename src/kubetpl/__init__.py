"""kubetpl — Kubernetes manifests from parameterized Python templates.

Re-exports the public API for template modules.
Templates can import directly from here or from kubetpl.pacts.
"""

from kubetpl.pacts.types import (
    Cluster, ClusterConfigError, MissingFieldError, TemplateError,
    UnitParseError, ValidationError,
)
from kubetpl.pacts.helpers import (
    hyphenate, map_to_named_list, object_items, object_values, overlay,
    si_to_num,
)
from kubetpl.core.objects import (
    api_service, cross_version_object_reference, custom_resource_definition,
    endpoint_address, endpoint_port, endpoints, horizontal_pod_autoscaler,
    k8s_list, k8s_object, namespace, service_account,
)
from kubetpl.core.data import config_map, secret
from kubetpl.core.env import (
    config_map_ref, env_list, field_ref, resource_field_ref, secret_key_ref,
)
from kubetpl.core.volumes import (
    config_map_volume, empty_dir_volume, git_repo_volume, host_path_volume,
    persistent_volume, persistent_volume_claim, pvc_volume, secret_volume,
    storage_class,
)
from kubetpl.core.workloads import (
    container, cron_job, daemon_set, deployment, job, job_spec, pod,
    pod_disruption_budget, pod_spec, stateful_set, weighted_pod_affinity_term,
)
from kubetpl.core.services import (
    service, service_host, service_host_colon_port, service_http_url,
    service_name_port,
)
from kubetpl.core.ingress import (
    ingress, ingress_backend, ingress_path, ingress_rule, ingress_tls,
)
from kubetpl.core.rbac import (
    cluster_role, cluster_role_binding, policy_rule, role, role_binding,
)
from kubetpl.core.contour import contour_ingress
from kubetpl.io.config import load_cluster

__all__ = [
    # Types & errors
    "Cluster",
    "TemplateError",
    "MissingFieldError",
    "ValidationError",
    "UnitParseError",
    "ClusterConfigError",
    # Helpers
    "hyphenate",
    "map_to_named_list",
    "object_items",
    "object_values",
    "overlay",
    "si_to_num",
    "env_list",
    "load_cluster",
    # Envelope & simple kinds
    "k8s_object",
    "k8s_list",
    "namespace",
    "service_account",
    "endpoints",
    "endpoint_address",
    "endpoint_port",
    "cross_version_object_reference",
    "horizontal_pod_autoscaler",
    "api_service",
    "custom_resource_definition",
    # Config & secrets
    "config_map",
    "secret",
    "secret_key_ref",
    "config_map_ref",
    "field_ref",
    "resource_field_ref",
    # Storage
    "empty_dir_volume",
    "host_path_volume",
    "git_repo_volume",
    "secret_volume",
    "config_map_volume",
    "pvc_volume",
    "persistent_volume_claim",
    "persistent_volume",
    "storage_class",
    # Workloads
    "container",
    "pod_spec",
    "pod",
    "deployment",
    "stateful_set",
    "daemon_set",
    "job_spec",
    "job",
    "cron_job",
    "pod_disruption_budget",
    "weighted_pod_affinity_term",
    # Networking
    "service",
    "service_host",
    "service_host_colon_port",
    "service_http_url",
    "service_name_port",
    "ingress",
    "ingress_backend",
    "ingress_path",
    "ingress_rule",
    "ingress_tls",
    "contour_ingress",
    # RBAC
    "role",
    "cluster_role",
    "role_binding",
    "cluster_role_binding",
    "policy_rule",
]
