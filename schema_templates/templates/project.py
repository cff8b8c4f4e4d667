from __future__ import annotations
from typing import Any, Dict, List, Optional

import yaml

from ..core.utils import INDEX_MODULE, camel_case, kebab_case
from ..schema.model import Package, Property, Resource


def summarize(text: Optional[str], default: str = "") -> str:
    """First paragraph of a description, collapsed onto one line."""
    if not text:
        return default
    paragraph = text.strip().split("\n\n", 1)[0]
    return " ".join(paragraph.split()) or default


def project_name(package: Package, resource: Resource) -> str:
    parts = [package.name]
    if resource.module != INDEX_MODULE:
        parts.append(kebab_case(resource.module.replace("/", "-")))
    parts.append(kebab_case(resource.name))
    return "-".join(p for p in parts if p)


def configurable_inputs(resource: Resource) -> List[Property]:
    """Required inputs that can be supplied as template configuration."""
    return [p for p in resource.required_inputs if p.type.config_type() is not None]


def manual_inputs(resource: Resource) -> List[Property]:
    """Required inputs whose type cannot be expressed as configuration."""
    return [p for p in resource.required_inputs if p.type.config_type() is None]


def build_project(package: Package, resource: Resource, runtime: str = "yaml") -> Dict[str, Any]:
    """Build the Pulumi.yaml document of a single-resource template."""
    description = summarize(resource.description, f"A template for {resource.token}")
    local_name = camel_case(resource.name) or "resource"
    inputs = configurable_inputs(resource)

    template_config: Dict[str, Any] = {}
    configuration: Dict[str, Any] = {}
    for prop in inputs:
        entry: Dict[str, Any] = {}
        if prop.description:
            entry["description"] = summarize(prop.description)
        if prop.has_default:
            entry["default"] = prop.default
        if prop.secret:
            entry["secret"] = True
        template_config[prop.name] = entry

        declaration: Dict[str, Any] = {"type": prop.type.config_type()}
        if prop.has_default:
            declaration["default"] = prop.default
        configuration[prop.name] = declaration

    resource_decl: Dict[str, Any] = {"type": resource.token}
    if inputs:
        resource_decl["properties"] = {p.name: "${" + p.name + "}" for p in inputs}

    project: Dict[str, Any] = {
        "name": project_name(package, resource),
        "runtime": runtime,
        "description": description,
        "template": {"description": description},
    }
    if template_config:
        project["template"]["config"] = template_config
    if configuration:
        project["configuration"] = configuration
    project["resources"] = {local_name: resource_decl}
    outputs = {p.name: "${" + f"{local_name}.{p.name}" + "}" for p in resource.properties}
    if outputs:
        project["outputs"] = outputs
    return project


def render_project(project: Dict[str, Any], generator_name: str) -> bytes:
    body = yaml.safe_dump(project, sort_keys=False, default_flow_style=False, allow_unicode=True)
    header = f"# Generated by {generator_name}. DO NOT EDIT.\n"
    return (header + body).encode("utf-8")
