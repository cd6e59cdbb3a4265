"""Volume sources and storage objects — PVC, PV, StorageClass."""

from kubetpl.core.constants import API_CORE, API_STORAGE
from kubetpl.core.objects import k8s_object, object_name
from kubetpl.pacts.helpers import require


def empty_dir_volume(medium: str | None = None, size_limit: str | None = None) -> dict:
    source = {}
    if medium is not None:
        source["medium"] = medium
    if size_limit is not None:
        source["sizeLimit"] = size_limit
    return {"emptyDir": source}


def host_path_volume(path: str, path_type: str | None = None) -> dict:
    source = {"path": require(path, "HostPathVolume", "path")}
    if path_type is not None:
        source["type"] = path_type
    return {"hostPath": source}


def git_repo_volume(repository: str, revision: str | None = None) -> dict:
    source = {"repository": require(repository, "GitRepoVolume", "repository")}
    if revision is not None:
        source["revision"] = revision
    return {"gitRepo": source}


def secret_volume(secret: dict, items: list[dict] | None = None) -> dict:
    source = {"secretName": object_name(secret, "SecretVolume", "secret")}
    if items is not None:
        source["items"] = items
    return {"secret": source}


def config_map_volume(configmap: dict, items: list[dict] | None = None) -> dict:
    source = {"name": object_name(configmap, "ConfigMapVolume", "configmap")}
    if items is not None:
        source["items"] = items
    return {"configMap": source}


def pvc_volume(pvc: dict | str) -> dict:
    """Mount a claim by name; *pvc* is a PVC object or just its name."""
    claim = pvc if isinstance(pvc, str) else object_name(pvc, "PVCVolume", "pvc")
    return {"persistentVolumeClaim": {"claimName": claim}}


def has_pvc(pod_volumes: list, volume_claim_templates: list | None = None) -> bool:
    """True if any pod volume is backed by a PersistentVolumeClaim."""
    if volume_claim_templates:
        return True
    return any("persistentVolumeClaim" in v for v in pod_volumes)


def persistent_volume_claim(name: str, namespace: str | None = None,
                            storage: str | None = None,
                            storage_class: str | None = None,
                            access_modes: list[str] | None = None,
                            app: str | None = None) -> dict:
    """Claim *storage* (e.g. ``10Gi``); storageClassName only when given."""
    template = "PersistentVolumeClaim"
    obj = k8s_object(API_CORE, template, name, app=app, namespace=namespace)
    spec = {
        "resources": {"requests": {"storage": require(storage, template, "storage")}},
        "accessModes": list(access_modes or ["ReadWriteOnce"]),
    }
    if storage_class is not None:
        spec["storageClassName"] = storage_class
    obj["spec"] = spec
    return obj


def persistent_volume(name: str, spec: dict | None = None, app: str | None = None) -> dict:
    obj = k8s_object(API_CORE, "PersistentVolume", name, app=app)
    obj["spec"] = dict(spec or {})
    return obj


def storage_class(name: str, provisioner: str | None = None,
                  parameters: dict | None = None,
                  reclaim_policy: str | None = None, app: str | None = None) -> dict:
    obj = k8s_object(API_STORAGE, "StorageClass", name, app=app)
    obj["provisioner"] = require(provisioner, "StorageClass", "provisioner")
    obj["parameters"] = dict(parameters or {})
    if reclaim_policy is not None:
        obj["reclaimPolicy"] = reclaim_policy
    return obj
