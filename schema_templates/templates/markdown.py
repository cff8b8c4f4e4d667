from __future__ import annotations
from typing import Any, Dict, List

from jinja2 import Environment, StrictUndefined

from ..schema.model import Function, Package, Property, Resource
from .project import manual_inputs, summarize


def _cell(text: Any) -> str:
    """Make a value safe to place inside a Markdown table cell."""
    if text is None or text == "":
        return ""
    return " ".join(str(text).split()).replace("|", "\\|")


def _code(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"`{value}`"


def _describe(prop: Property) -> str:
    """Description cell for a property row."""
    parts = []
    if prop.deprecation_message:
        parts.append(f"**Deprecated:** {prop.deprecation_message}")
    if prop.description:
        parts.append(prop.description)
    if prop.has_default:
        parts.append(f"Default: {_code(prop.default)}.")
    if prop.default_env:
        parts.append(f"Environment: {', '.join(prop.default_env)}.")
    if prop.secret:
        parts.append("Secret.")
    return _cell(" ".join(parts))


_env = Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
    autoescape=False,
)
_env.filters["cell"] = _cell
_env.filters["code"] = _code
_env.filters["summary"] = summarize
_env.filters["describe"] = _describe


PROPERTY_TABLE = """\
| Name | Type | Required | Description |
|------|------|----------|-------------|
{% for p in props %}
| `{{ p.name }}` | {{ p.type.display() | cell }} | {{ "yes" if p.required else "no" }} | {{ p | describe }} |
{% endfor %}
"""

RESOURCE_README = """\
<!-- Generated by {{ generator }}. DO NOT EDIT. -->
# {{ resource.name }}

Template for `{{ resource.token }}`{% if resource.is_component %} (component resource){% endif %}.

{% if resource.deprecation_message %}
> **Deprecated:** {{ resource.deprecation_message }}

{% endif %}
{% if resource.description %}
{{ resource.description | trim }}

{% endif %}
## Usage

```bash
pulumi new ./{{ path }}
```

{% if resource.input_properties %}
## Inputs

{{ table(resource.input_properties) }}
{% endif %}
{% if manual %}
## Inputs to set by hand

These required inputs cannot be supplied as configuration and must be added to
`{{ project_file }}` before the first deployment:

{% for p in manual %}
- `{{ p.name }}` ({{ p.type.display() }})
{% endfor %}

{% endif %}
{% if resource.properties %}
## Outputs

{{ table(resource.properties) }}
{% endif %}
{% if resource.aliases %}
## Aliases

{% for a in resource.aliases %}
- `{{ a }}`
{% endfor %}

{% endif %}
"""

PACKAGE_README = """\
<!-- Generated by {{ generator }}. DO NOT EDIT. -->
# {{ package.name }} templates

{% if package.description %}
{{ package.description | trim }}

{% endif %}
{% if details %}
{% for key, value in details %}
- **{{ key }}:** {{ value }}
{% endfor %}

{% endif %}
## Templates

{% if modules %}
{% for module, entries in modules.items() %}
### {{ module }}

| Template | Resource | Description |
|----------|----------|-------------|
{% for path, r in entries %}
| [{{ r.name }}]({{ path }}/{{ readme }}) | `{{ r.token }}` | \
{% if r.deprecation_message %}**Deprecated.** {% endif %}{{ r.description | summary | cell }} |
{% endfor %}

{% endfor %}
{% else %}
This package declares no resources.

{% endif %}
{% if functions %}
## Functions

{% for f in functions %}
### {{ f.name }}

`{{ f.token }}`

{% if f.deprecation_message %}
> **Deprecated:** {{ f.deprecation_message }}

{% endif %}
{% if f.description %}
{{ f.description | summary }}

{% endif %}
{% if f.inputs %}
**Inputs**

{{ table(f.inputs) }}
{% endif %}
{% if f.outputs %}
**Outputs**

{{ table(f.outputs) }}
{% endif %}
{% endfor %}
{% endif %}
"""

_property_table = _env.from_string(PROPERTY_TABLE)
_env.globals["table"] = lambda props: _property_table.render(props=props)
_resource_readme = _env.from_string(RESOURCE_README)
_package_readme = _env.from_string(PACKAGE_README)


def _package_details(package: Package) -> List[tuple]:
    details = []
    for label, value in (
        ("Version", package.version),
        ("Publisher", package.publisher),
        ("License", package.license),
        ("Homepage", package.homepage),
        ("Repository", package.repository),
    ):
        if value:
            details.append((label, value))
    if package.keywords:
        details.append(("Keywords", ", ".join(package.keywords)))
    return details


def render_resource_readme(
    resource: Resource, path: str, generator_name: str, project_file: str = "Pulumi.yaml"
) -> bytes:
    text = _resource_readme.render(
        generator=generator_name,
        resource=resource,
        path=path,
        manual=manual_inputs(resource),
        project_file=project_file,
    )
    return text.encode("utf-8")


def render_package_readme(
    package: Package,
    modules: Dict[str, List[tuple]],
    generator_name: str,
    readme_name: str = "README.md",
) -> bytes:
    functions: List[Function] = sorted(package.functions, key=lambda f: f.token)
    text = _package_readme.render(
        generator=generator_name,
        package=package,
        details=_package_details(package),
        modules=modules,
        functions=functions,
        readme=readme_name,
    )
    return text.encode("utf-8")
