"""Output writing — YAML document streams and warnings."""

import sys

import yaml

from kubetpl.core.objects import k8s_list


def dump_documents(objects: list[dict], as_list: bool = False) -> str:
    """Serialise objects as a multi-document YAML stream (or one List)."""
    docs = [k8s_list(objects)] if as_list else objects
    return yaml.safe_dump_all(docs, default_flow_style=False, sort_keys=False,
                              explicit_start=True)


def write_manifests(objects: list[dict], path: str = "-", as_list: bool = False) -> None:
    """Write the manifest stream to *path*, or stdout for ``-``."""
    text = "# Generated by kubetpl — do not edit manually\n" + dump_documents(objects, as_list)
    if path == "-":
        sys.stdout.write(text)
        return
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    print(f"Wrote {path}", file=sys.stderr)


def emit_warnings(warnings: list[str]) -> None:
    """Print all warnings to stderr."""
    for w in warnings:
        print(f"⚠ {w}", file=sys.stderr)
