"""Configuration handling — kubetpl.yaml and cluster metadata documents."""

import os

import yaml

from kubetpl.core.constants import CLUSTER_ENV_VAR
from kubetpl.pacts.types import Cluster, ClusterConfigError


def load_config(path: str) -> dict:
    """Load kubetpl.yaml or return the default config."""
    if os.path.exists(path):
        with open(path, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    else:
        cfg = {}

    cfg.setdefault("cluster", None)
    cfg.setdefault("output", "-")
    cfg.setdefault("list", False)
    return cfg


def load_cluster(source: str | dict) -> Cluster:
    """Load cluster metadata from a YAML/JSON file path or an inline mapping."""
    if isinstance(source, dict):
        return Cluster.from_dict(source)
    if not os.path.exists(source):
        raise ClusterConfigError(f"cluster metadata file not found: {source}")
    try:
        with open(source, encoding="utf-8") as f:
            doc = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ClusterConfigError(
            f"cannot parse cluster metadata {source}: {exc.__class__.__name__}") from exc
    return Cluster.from_dict(doc)


def cluster_from_env(required: bool = True) -> Cluster | None:
    """Load the cluster named by the KUBETPL_CLUSTER environment variable.

    Returns None when the variable is unset and *required* is False.
    """
    path = os.environ.get(CLUSTER_ENV_VAR)
    if not path:
        if not required:
            return None
        raise ClusterConfigError(
            f"no cluster given and {CLUSTER_ENV_VAR} is not set")
    return load_cluster(path)
