"""RBAC roles, bindings and policy rules."""

from kubetpl.core.constants import API_RBAC, RBAC_GROUP
from kubetpl.core.objects import k8s_object, object_name, object_namespace
from kubetpl.pacts.helpers import require


def policy_rule(api_groups: list[str], resources: list[str], verbs: list[str],
                resource_names: list[str] | None = None) -> dict:
    rule = {
        "apiGroups": list(api_groups),
        "resources": list(resources),
        "verbs": list(verbs),
    }
    if resource_names is not None:
        rule["resourceNames"] = list(resource_names)
    return rule


def role(name: str, namespace: str | None = None, rules: list[dict] | None = None,
         app: str | None = None) -> dict:
    obj = k8s_object(API_RBAC, "Role", name, app=app, namespace=namespace)
    obj["rules"] = list(rules or [])
    return obj


def cluster_role(name: str, rules: list[dict] | None = None,
                 app: str | None = None) -> dict:
    obj = role(name, rules=rules, app=app)
    obj["kind"] = "ClusterRole"
    return obj


def _subject(obj: dict, template: str) -> dict:
    """Project a subject object onto kind/namespace/name."""
    subject = {"kind": require(obj.get("kind"), template, "subject.kind")}
    ns = object_namespace(obj)
    if ns is not None:
        subject["namespace"] = ns
    subject["name"] = object_name(obj, template, "subject")
    return subject


def role_binding(name: str, namespace: str | None = None,
                 role_ref: dict | None = None, subjects: list[dict] | None = None,
                 app: str | None = None, kind: str = "RoleBinding") -> dict:
    """Bind *role_ref* (a Role or ClusterRole object) to subject objects."""
    require(role_ref, kind, "roleRef")
    obj = k8s_object(API_RBAC, kind, name, app=app, namespace=namespace)
    obj["subjects"] = [_subject(s, kind) for s in (subjects or [])]
    obj["roleRef"] = {
        "apiGroup": RBAC_GROUP,
        "kind": require(role_ref.get("kind"), kind, "roleRef.kind"),
        "name": object_name(role_ref, kind, "roleRef"),
    }
    return obj


def cluster_role_binding(name: str, role_ref: dict | None = None,
                         subjects: list[dict] | None = None,
                         app: str | None = None) -> dict:
    return role_binding(name, role_ref=role_ref, subjects=subjects, app=app,
                        kind="ClusterRoleBinding")
