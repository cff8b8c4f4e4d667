"""Bound package model produced by :func:`schema_templates.schema.binder.import_spec`.

Unlike the raw spec models, every type reference here is resolved: named types
are referred to by token and are guaranteed to exist in the owning package.
"""

from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

TypeKind = Literal[
    "primitive",
    "array",
    "map",
    "object",
    "enum",
    "resource",
    "any",
    "asset",
    "archive",
    "json",
    "union",
]

PRIMITIVE_TYPES = ("boolean", "integer", "number", "string")

# Pulumi YAML configuration type names
CONFIG_TYPE_NAMES = {
    "boolean": "Boolean",
    "integer": "Integer",
    "number": "Number",
    "string": "String",
}


class TypeRef(BaseModel):
    kind: TypeKind
    # Primitive name; for enums, the underlying primitive
    name: Optional[str] = None
    token: Optional[str] = None
    element: Optional[TypeRef] = None
    elements: List[TypeRef] = Field(default_factory=list)
    plain: bool = False

    @property
    def is_scalar(self) -> bool:
        return self.kind in ("primitive", "enum") and self.name in PRIMITIVE_TYPES

    def display(self) -> str:
        if self.kind == "primitive":
            return self.name or "string"
        if self.kind == "array":
            return f"List<{self.element.display() if self.element else 'Any'}>"
        if self.kind == "map":
            return f"Map<{self.element.display() if self.element else 'Any'}>"
        if self.kind in ("object", "enum", "resource"):
            return (self.token or "").split(":")[-1]
        if self.kind == "union":
            return " | ".join(e.display() for e in self.elements)
        return self.kind.capitalize()

    def config_type(self) -> Optional[str]:
        """Configuration type name for scalars and lists of scalars, else None."""
        if self.is_scalar:
            return CONFIG_TYPE_NAMES[self.name]
        if self.kind == "array" and self.element is not None and self.element.is_scalar:
            return f"List<{CONFIG_TYPE_NAMES[self.element.name]}>"
        return None


class Property(BaseModel):
    name: str
    type: TypeRef
    description: Optional[str] = None
    required: bool = False
    has_default: bool = False
    default: Any = None
    default_env: List[str] = Field(default_factory=list)
    const: Any = None
    secret: bool = False
    replace_on_changes: bool = False
    deprecation_message: Optional[str] = None


class ObjectType(BaseModel):
    token: str
    name: str
    module: str
    description: Optional[str] = None
    properties: List[Property] = Field(default_factory=list)


class EnumValue(BaseModel):
    name: str
    value: Any
    description: Optional[str] = None
    deprecation_message: Optional[str] = None


class EnumType(BaseModel):
    token: str
    name: str
    module: str
    element_type: str
    description: Optional[str] = None
    values: List[EnumValue] = Field(default_factory=list)


class Resource(BaseModel):
    token: str
    name: str
    module: str
    description: Optional[str] = None
    input_properties: List[Property] = Field(default_factory=list)
    properties: List[Property] = Field(default_factory=list)
    state_inputs: List[Property] = Field(default_factory=list)
    aliases: List[str] = Field(default_factory=list)
    deprecation_message: Optional[str] = None
    is_component: bool = False
    is_provider: bool = False

    @property
    def required_inputs(self) -> List[Property]:
        return [p for p in self.input_properties if p.required]


class Function(BaseModel):
    token: str
    name: str
    module: str
    description: Optional[str] = None
    inputs: List[Property] = Field(default_factory=list)
    outputs: List[Property] = Field(default_factory=list)
    deprecation_message: Optional[str] = None


class Package(BaseModel):
    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    homepage: Optional[str] = None
    license: Optional[str] = None
    attribution: Optional[str] = None
    repository: Optional[str] = None
    publisher: Optional[str] = None
    logo_url: Optional[str] = None
    plugin_download_url: Optional[str] = None
    module_format: Optional[str] = None
    config: List[Property] = Field(default_factory=list)
    object_types: Dict[str, ObjectType] = Field(default_factory=dict)
    enum_types: Dict[str, EnumType] = Field(default_factory=dict)
    provider: Optional[Resource] = None
    resources: List[Resource] = Field(default_factory=list)
    functions: List[Function] = Field(default_factory=list)
    language: Dict[str, Any] = Field(default_factory=dict)

    def modules(self) -> List[str]:
        mods = {r.module for r in self.resources}
        mods.update(f.module for f in self.functions)
        mods.update(t.module for t in self.object_types.values())
        mods.update(t.module for t in self.enum_types.values())
        return sorted(mods)

    def resources_by_module(self) -> Dict[str, List[Resource]]:
        grouped: Dict[str, List[Resource]] = {}
        for r in sorted(self.resources, key=lambda r: (r.module, r.name, r.token)):
            grouped.setdefault(r.module, []).append(r)
        return grouped

    def get_resource(self, token: str) -> Optional[Resource]:
        for r in self.resources:
            if r.token == token:
                return r
        return None
