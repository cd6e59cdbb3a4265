"""Containers, pod specs and the workload kinds built around them."""

from kubetpl.core.constants import API_APPS, API_BATCH, API_CORE, API_POLICY
from kubetpl.core.env import env_list
from kubetpl.core.objects import k8s_object
from kubetpl.core.volumes import has_pvc, persistent_volume_claim
from kubetpl.pacts.helpers import (
    map_to_named_list, object_items, require, to_string,
)
from kubetpl.pacts.types import MissingFieldError, ValidationError

# Pod template kinds whose template lives under spec.template
WORKLOAD_KINDS = ("DaemonSet", "Deployment", "Job", "StatefulSet")

DEFAULT_TOPOLOGY_KEY = "kubernetes.io/hostname"


def container(name: str, image: str | None = None,
              command: list[str] | None = None,
              args: dict | list | None = None,
              env: dict | None = None,
              ports: dict | None = None,
              volume_mounts: dict | None = None,
              resources: dict | None = None,
              image_pull_policy: str | None = None,
              stdin: bool = False, tty: bool = False) -> dict:
    """Container with env/args/ports/volumeMounts expanded from mappings.

    ``args={"log-level": "debug"}`` renders as ``--log-level=debug``, while a
    list is taken as positional args;
    ``ports={"http": {"containerPort": 80}}`` as a named port list.
    """
    template = "Container"
    require(name, template, "name")
    require(image, template, "image")
    if tty and not stdin:
        raise ValidationError(template, "tty=true requires stdin=true")
    if image_pull_policy is None:
        image_pull_policy = "Always" if image.endswith(":latest") else "IfNotPresent"
    result = {
        "name": name,
        "image": image,
        "imagePullPolicy": image_pull_policy,
    }
    if command is not None:
        result["command"] = list(command)
    if isinstance(args, list):
        result["args"] = [to_string(a) for a in args]
    else:
        result["args"] = [f"--{k}={to_string(v)}" for k, v in object_items(args or {})]
    result["env"] = env_list(env)
    result["ports"] = map_to_named_list(ports)
    result["volumeMounts"] = map_to_named_list(volume_mounts)
    if resources is not None:
        result["resources"] = resources
    result["stdin"] = stdin
    result["tty"] = tty
    return result


def _ordered_containers(containers: dict | list | None) -> list[dict]:
    """Expand a container mapping, emitting the one keyed ``default`` first."""
    if containers is None:
        return []
    if isinstance(containers, list):
        return list(containers)
    if "default" in containers:
        containers = {"default": containers["default"],
                      **{k: v for k, v in containers.items() if k != "default"}}
    return map_to_named_list(containers)


def pod_spec(containers: dict | list | None = None,
             init_containers: dict | list | None = None,
             volumes: dict | None = None,
             image_pull_secrets: list[str] | None = None,
             termination_grace_period_seconds: int = 30,
             restart_policy: str | None = None,
             service_account_name: str | None = None,
             node_selector: dict | None = None,
             affinity: dict | None = None) -> dict:
    """PodSpec from a ``{name: container}`` mapping; at least one container."""
    expanded = _ordered_containers(containers)
    if not expanded:
        raise ValidationError("PodSpec", "must have at least one container")
    spec = {
        "containers": expanded,
        "initContainers": _ordered_containers(init_containers),
        "volumes": map_to_named_list(volumes),
        "imagePullSecrets": [{"name": s} for s in (image_pull_secrets or [])],
        "terminationGracePeriodSeconds": termination_grace_period_seconds,
    }
    if restart_policy is not None:
        spec["restartPolicy"] = restart_policy
    if service_account_name is not None:
        spec["serviceAccountName"] = service_account_name
    if node_selector is not None:
        spec["nodeSelector"] = node_selector
    if affinity is not None:
        spec["affinity"] = affinity
    return spec


def pod(name: str, namespace: str | None = None, spec: dict | None = None,
        app: str | None = None) -> dict:
    obj = k8s_object(API_CORE, "Pod", name, app=app, namespace=namespace)
    obj["spec"] = require(spec, "Pod", "spec")
    return obj


def pod_template(target: dict, template: str) -> dict:
    """Return the pod template of *target*.

    Accepts a Pod, a bare pod template (metadata + spec) or a workload
    carrying ``spec.template``.
    """
    require(target, template, "target_pod")
    spec = target.get("spec") or {}
    if target.get("kind") in WORKLOAD_KINDS or "template" in spec:
        return require(spec.get("template"), template, "target_pod.spec.template")
    return target


def pod_labels(target: dict, template: str) -> dict:
    """Labels of the target's pod template."""
    labels = (pod_template(target, template).get("metadata") or {}).get("labels")
    if not labels:
        raise MissingFieldError(template, "target_pod.metadata.labels")
    return dict(labels)


def first_container_port(target: dict, template: str) -> int | str:
    """``containerPort`` of the first port of the target's first container."""
    containers = (pod_template(target, template).get("spec") or {}).get("containers") or []
    if not containers:
        raise MissingFieldError(template, "target_pod.spec.containers")
    ports = containers[0].get("ports") or []
    if not ports:
        raise MissingFieldError(template, "target_pod.spec.containers[0].ports")
    return require(ports[0].get("containerPort"), template,
                   "target_pod.spec.containers[0].ports[0].containerPort")


def _pod_template_spec(labels: dict, spec: dict) -> dict:
    return {"metadata": {"labels": dict(labels), "annotations": {}}, "spec": spec}


def _check_replicas(template: str, replicas: int) -> None:
    if replicas < 1:
        raise ValidationError(template, f"replicas must be >= 1, got {replicas}")


def deployment(name: str, namespace: str | None = None, spec: dict | None = None,
               replicas: int = 1, app: str | None = None,
               strategy_type: str = "RollingUpdate",
               min_ready_seconds: int = 30,
               revision_history_limit: int = 10) -> dict:
    """Deployment running pod *spec*.

    Rolling updates surge 25% for stateless pods; pods mounting a PVC are
    replaced one at a time without surge.
    """
    template = "Deployment"
    require(spec, template, "spec")
    _check_replicas(template, replicas)
    obj = k8s_object(API_APPS, template, name, app=app, namespace=namespace)
    labels = obj["metadata"]["labels"]
    strategy = {"type": strategy_type}
    if strategy_type == "RollingUpdate":
        if has_pvc(spec.get("volumes") or []):
            strategy["rollingUpdate"] = {"maxSurge": 0, "maxUnavailable": 1}
        else:
            strategy["rollingUpdate"] = {"maxSurge": "25%", "maxUnavailable": "25%"}
    obj["spec"] = {
        "selector": {"matchLabels": dict(labels)},
        "template": _pod_template_spec(labels, spec),
        "strategy": strategy,
        "minReadySeconds": min_ready_seconds,
        "revisionHistoryLimit": revision_history_limit,
        "replicas": replicas,
    }
    return obj


def stateful_set(name: str, namespace: str | None = None, spec: dict | None = None,
                 replicas: int = 1, app: str | None = None,
                 service_name: str | None = None,
                 volume_claim_templates: dict | None = None) -> dict:
    """StatefulSet; ``volume_claim_templates`` maps claim name → PVC kwargs."""
    template = "StatefulSet"
    require(spec, template, "spec")
    _check_replicas(template, replicas)
    obj = k8s_object(API_APPS, template, name, app=app, namespace=namespace)
    labels = obj["metadata"]["labels"]
    obj["spec"] = {
        "serviceName": service_name or name,
        "selector": {"matchLabels": dict(labels)},
        "updateStrategy": {"type": "RollingUpdate", "rollingUpdate": {"partition": 0}},
        "template": _pod_template_spec(labels, spec),
        "volumeClaimTemplates": [
            persistent_volume_claim(claim, **(kwargs or {}))
            for claim, kwargs in object_items(volume_claim_templates or {})
        ],
        "replicas": replicas,
    }
    return obj


def daemon_set(name: str, namespace: str | None = None, spec: dict | None = None,
               app: str | None = None, max_unavailable: int | str = 1) -> dict:
    template = "DaemonSet"
    require(spec, template, "spec")
    obj = k8s_object(API_APPS, template, name, app=app, namespace=namespace)
    labels = obj["metadata"]["labels"]
    obj["spec"] = {
        "selector": {"matchLabels": dict(labels)},
        "updateStrategy": {
            "type": "RollingUpdate",
            "rollingUpdate": {"maxUnavailable": max_unavailable},
        },
        "template": _pod_template_spec(labels, spec),
    }
    return obj


def job_spec(spec: dict, labels: dict | None = None,
             completions: int = 1, parallelism: int = 1,
             backoff_limit: int | None = None) -> dict:
    """JobSpec shared by Job and CronJob; pods restart OnFailure by default."""
    template_spec = dict(require(spec, "JobSpec", "spec"))
    template_spec.setdefault("restartPolicy", "OnFailure")
    result = {
        "template": _pod_template_spec(labels or {}, template_spec),
        "completions": completions,
        "parallelism": parallelism,
    }
    if backoff_limit is not None:
        result["backoffLimit"] = backoff_limit
    return result


def job(name: str, namespace: str | None = None, spec: dict | None = None,
        app: str | None = None, **job_options) -> dict:
    obj = k8s_object(API_BATCH, "Job", name, app=app, namespace=namespace)
    obj["spec"] = job_spec(require(spec, "Job", "spec"),
                           labels=obj["metadata"]["labels"], **job_options)
    return obj


def cron_job(name: str, namespace: str | None = None, spec: dict | None = None,
             schedule: str | None = None, app: str | None = None,
             concurrency_policy: str = "Forbid",
             successful_jobs_history_limit: int = 10,
             failed_jobs_history_limit: int = 20,
             **job_options) -> dict:
    template = "CronJob"
    require(spec, template, "spec")
    obj = k8s_object(API_BATCH, template, name, app=app, namespace=namespace)
    obj["spec"] = {
        "jobTemplate": {
            "spec": job_spec(spec, labels=obj["metadata"]["labels"], **job_options),
        },
        "schedule": require(schedule, template, "schedule"),
        "successfulJobsHistoryLimit": successful_jobs_history_limit,
        "failedJobsHistoryLimit": failed_jobs_history_limit,
        "concurrencyPolicy": concurrency_policy,
    }
    return obj


def pod_disruption_budget(name: str, namespace: str | None = None,
                          target_pod: dict | None = None,
                          min_available: int | str | None = None,
                          max_unavailable: int | str | None = None,
                          app: str | None = None) -> dict:
    """PDB selecting the target's pods; exactly one budget field is allowed."""
    template = "PodDisruptionBudget"
    if (min_available is None) == (max_unavailable is None):
        raise ValidationError(
            template, "exactly one of minAvailable/maxUnavailable required")
    obj = k8s_object(API_POLICY, template, name, app=app, namespace=namespace)
    spec = {"selector": {"matchLabels": pod_labels(target_pod, template)}}
    if min_available is not None:
        spec["minAvailable"] = min_available
    else:
        spec["maxUnavailable"] = max_unavailable
    obj["spec"] = spec
    return obj


def weighted_pod_affinity_term(match_labels: dict | None = None,
                               match_expressions: list[dict] | None = None,
                               weight: int = 1,
                               topology_key: str = DEFAULT_TOPOLOGY_KEY) -> dict:
    """Preferred (anti-)affinity term; pass exactly one kind of selector."""
    if (match_labels is None) == (match_expressions is None):
        raise ValidationError(
            "WeightedPodAffinityTerm",
            "exactly one of matchLabels/matchExpressions required")
    if match_labels is not None:
        selector = {"matchLabels": dict(match_labels)}
    else:
        selector = {"matchExpressions": list(match_expressions)}
    return {
        "weight": weight,
        "podAffinityTerm": {"labelSelector": selector, "topologyKey": topology_key},
    }
