"""CLI entry point — argument parsing, orchestration."""

import argparse
import os
import sys

from kubetpl.core.constants import CLUSTER_ENV_VAR
from kubetpl.io.config import cluster_from_env, load_cluster, load_config
from kubetpl.io.loading import discover_template_files, render_templates
from kubetpl.io.output import emit_warnings, write_manifests
from kubetpl.pacts.types import TemplateError


def _resolve_cluster(args, config: dict):
    """Pick the cluster source: --cluster, then kubetpl.yaml, then the env var.

    Returns (cluster, path); path is the absolute file to export through
    KUBETPL_CLUSTER while templates render, or None.
    """
    source = args.cluster or config.get("cluster")
    if source is None:
        return cluster_from_env(required=False), None
    cluster = load_cluster(source)
    if isinstance(source, str):
        return cluster, os.path.abspath(source)
    return cluster, None


def _render_with_cluster(files: list[str], cluster, cluster_path: str | None,
                         warnings: list[str]) -> list[dict]:
    """Render templates with KUBETPL_CLUSTER pointing at cluster_path, then restore it."""
    if cluster_path is None:
        return render_templates(files, cluster, warnings)
    previous = os.environ.get(CLUSTER_ENV_VAR)
    os.environ[CLUSTER_ENV_VAR] = cluster_path
    try:
        return render_templates(files, cluster, warnings)
    finally:
        if previous is None:
            os.environ.pop(CLUSTER_ENV_VAR, None)
        else:
            os.environ[CLUSTER_ENV_VAR] = previous


def main(argv: list[str] | None = None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Render Kubernetes manifests from Python template modules"
    )
    parser.add_argument(
        "templates", nargs="+",
        help="Template files (or directories of them) defining render(cluster)",
    )
    parser.add_argument(
        "--config", default="kubetpl.yaml",
        help="Configuration file (default: kubetpl.yaml)",
    )
    parser.add_argument(
        "--cluster",
        help=f"Cluster metadata YAML/JSON (default: config, then ${CLUSTER_ENV_VAR})",
    )
    parser.add_argument(
        "-o", "--output",
        help="Where to write the manifests (default: config, then stdout)",
    )
    parser.add_argument(
        "--list", action="store_true", default=None,
        help="Wrap all objects in a single v1 List",
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)
    output = args.output or config["output"]
    as_list = args.list if args.list is not None else bool(config["list"])
    warnings: list[str] = []

    try:
        cluster, cluster_path = _resolve_cluster(args, config)
        if cluster is not None:
            print(f"Cluster: {cluster.fqdn}", file=sys.stderr)
        files = discover_template_files(args.templates)
        objects = _render_with_cluster(files, cluster, cluster_path, warnings)
    except TemplateError as exc:
        emit_warnings(warnings)
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    emit_warnings(warnings)
    if not objects:
        print("No objects rendered — nothing to write.", file=sys.stderr)
        sys.exit(2)

    kinds: dict[str, int] = {}
    for obj in objects:
        kinds[obj["kind"]] = kinds.get(obj["kind"], 0) + 1
    print(f"Rendered objects: {kinds}", file=sys.stderr)
    write_manifests(objects, output, as_list=as_list)


if __name__ == "__main__":
    main()
