"""Template module discovery and loading — files defining ``render(cluster)``."""

import importlib.util
import os
import sys
from pathlib import Path

from kubetpl.pacts.helpers import object_values
from kubetpl.pacts.types import TemplateError


def discover_template_files(paths: list[str]) -> list[str]:
    """Expand directories into their .py files (one level, sorted)."""
    py_files = []
    for path in paths:
        if not os.path.isdir(path):
            py_files.append(path)
            continue
        for entry in sorted(os.listdir(path)):
            full = os.path.join(path, entry)
            if entry.startswith(('_', '.')):
                continue
            if entry.endswith('.py') and os.path.isfile(full):
                py_files.append(full)
    return py_files


def load_module(filepath: str):
    """Import a template file under a private module name."""
    if not os.path.isfile(filepath):
        raise TemplateError(f"template file not found: {filepath}")
    parent = str(Path(filepath).parent)
    if parent not in sys.path:
        sys.path.insert(0, parent)
    mod_name = f"kubetpl_tpl_{Path(filepath).stem}"
    spec = importlib.util.spec_from_file_location(mod_name, filepath)
    if spec is None or spec.loader is None:
        raise TemplateError(f"cannot load template {filepath}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def collect_objects(result) -> list[dict]:
    """Flatten a render() result into a list of objects.

    A single object (has ``kind``) stays one; a List object is unpacked;
    mappings contribute their visible values, lists their items, recursively.
    """
    if result is None:
        return []
    if isinstance(result, dict):
        if result.get("kind") == "List" and "items" in result:
            return collect_objects(result["items"])
        if "kind" in result:
            return [result]
        return collect_objects(object_values(result))
    if isinstance(result, (list, tuple)):
        objects = []
        for item in result:
            objects.extend(collect_objects(item))
        return objects
    raise TemplateError(f"render() returned unsupported {type(result).__name__}")


def render_templates(files: list[str], cluster, warnings: list[str]) -> list[dict]:
    """Load every template file and collect the objects its render() returns."""
    objects = []
    for filepath in files:
        module = load_module(filepath)
        render = getattr(module, "render", None)
        if not callable(render):
            warnings.append(f"{filepath}: no render() function — skipped")
            continue
        objects.extend(collect_objects(render(cluster)))
    return objects
