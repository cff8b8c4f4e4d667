"""Template generation for bound packages."""

from .generator import generate_package, template_dir
from .project import build_project, render_project
from .markdown import render_package_readme, render_resource_readme

__all__ = [
    "generate_package",
    "template_dir",
    "build_project",
    "render_project",
    "render_package_readme",
    "render_resource_readme",
]
