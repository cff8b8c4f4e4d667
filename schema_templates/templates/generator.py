"""Generate single-resource project templates for every resource in a package.

Output layout, relative to the output directory::

    README.md                          package index
    <module>/<resource>/Pulumi.yaml    project template
    <module>/<resource>/README.md      resource documentation

Generation is deterministic: the same package always yields the same bytes.
"""

from __future__ import annotations
import re
from typing import Dict, List, Optional, Tuple

import yaml
from jinja2 import TemplateError

from ..config import TemplateSettings, get_settings
from ..core.errors import GenerationError
from ..core.logger import get_logger
from ..core.utils import kebab_case
from ..schema.model import Package, Resource
from .markdown import render_package_readme, render_resource_readme
from .project import build_project, render_project

logger = get_logger(__name__)

_UNSAFE_SEGMENT = re.compile(r"[^A-Za-z0-9_.-]+")


def _safe_segment(segment: str, token: str) -> str:
    cleaned = _UNSAFE_SEGMENT.sub("-", segment).strip("-")
    if cleaned in ("", ".", ".."):
        raise GenerationError(
            f"cannot derive an output path for {token}", context={"segment": segment}
        )
    return cleaned


def template_dir(resource: Resource) -> str:
    """Relative directory holding a resource's template, always ``/``-separated."""
    segments = [_safe_segment(s, resource.token) for s in resource.module.split("/")]
    segments.append(_safe_segment(kebab_case(resource.name), resource.token))
    return "/".join(segments)


def _add(files: Dict[str, bytes], path: str, contents: bytes, token: str) -> None:
    if path in files:
        raise GenerationError(
            f"duplicate output path {path}", context={"path": path, "token": token}
        )
    files[path] = contents


def generate_package(
    generator_name: str,
    package: Package,
    settings: Optional[TemplateSettings] = None,
) -> Dict[str, bytes]:
    """Render every template file for ``package``.

    Returns:
        Mapping of relative output path to file contents.

    Raises:
        GenerationError: if any file cannot be rendered or two files collide.
    """
    settings = settings or get_settings()
    files: Dict[str, bytes] = {}
    modules: Dict[str, List[Tuple[str, Resource]]] = {}

    try:
        for module, resources in package.resources_by_module().items():
            for resource in resources:
                directory = template_dir(resource)
                project = build_project(package, resource, runtime=settings.runtime)
                _add(
                    files,
                    f"{directory}/{settings.project_name}",
                    render_project(project, generator_name),
                    resource.token,
                )
                _add(
                    files,
                    f"{directory}/{settings.readme_name}",
                    render_resource_readme(
                        resource, directory, generator_name, project_file=settings.project_name
                    ),
                    resource.token,
                )
                modules.setdefault(module, []).append((directory, resource))
                logger.debug("rendered template for %s in %s", resource.token, directory)

        _add(
            files,
            settings.readme_name,
            render_package_readme(package, modules, generator_name, settings.readme_name),
            package.name,
        )
    except (TemplateError, yaml.YAMLError, TypeError, ValueError) as e:
        raise GenerationError(str(e), context={"package": package.name}, original_error=e) from e

    logger.debug("generated %d files for package %s", len(files), package.name)
    return files
