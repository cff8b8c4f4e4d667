"""Raw package specification models.

These mirror the JSON package schema one-to-one (camelCase keys are exposed
through aliases) and carry no semantics of their own; token resolution and
cross-reference checks happen in :mod:`schema_templates.schema.binder`.
Unknown keys are ignored so newer schema documents still load.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _SpecModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class TypeSpec(_SpecModel):
    type: Optional[str] = None
    ref: Optional[str] = Field(None, alias="$ref")
    items: Optional[TypeSpec] = None
    additional_properties: Optional[TypeSpec] = Field(None, alias="additionalProperties")
    one_of: Optional[List[TypeSpec]] = Field(None, alias="oneOf")
    plain: bool = False


class DefaultSpec(_SpecModel):
    environment: List[str] = Field(default_factory=list)


class PropertySpec(TypeSpec):
    description: Optional[str] = None
    const: Any = None
    default: Any = None
    default_info: Optional[DefaultSpec] = Field(None, alias="defaultInfo")
    deprecation_message: Optional[str] = Field(None, alias="deprecationMessage")
    secret: bool = False
    replace_on_changes: bool = Field(False, alias="replaceOnChanges")
    language: Dict[str, Any] = Field(default_factory=dict)


class ObjectTypeSpec(_SpecModel):
    description: Optional[str] = None
    properties: Dict[str, PropertySpec] = Field(default_factory=dict)
    type: Optional[str] = None
    required: List[str] = Field(default_factory=list)
    language: Dict[str, Any] = Field(default_factory=dict)


class EnumValueSpec(_SpecModel):
    name: Optional[str] = None
    description: Optional[str] = None
    value: Any = None
    deprecation_message: Optional[str] = Field(None, alias="deprecationMessage")


class ComplexTypeSpec(ObjectTypeSpec):
    enum: Optional[List[EnumValueSpec]] = None


class AliasSpec(_SpecModel):
    name: Optional[str] = None
    project: Optional[str] = None
    type: Optional[str] = None


class ResourceSpec(ObjectTypeSpec):
    input_properties: Dict[str, PropertySpec] = Field(default_factory=dict, alias="inputProperties")
    required_inputs: List[str] = Field(default_factory=list, alias="requiredInputs")
    state_inputs: Optional[ObjectTypeSpec] = Field(None, alias="stateInputs")
    aliases: List[AliasSpec] = Field(default_factory=list)
    deprecation_message: Optional[str] = Field(None, alias="deprecationMessage")
    is_component: bool = Field(False, alias="isComponent")
    methods: Dict[str, str] = Field(default_factory=dict)


class FunctionSpec(_SpecModel):
    description: Optional[str] = None
    inputs: Optional[ObjectTypeSpec] = None
    outputs: Optional[ObjectTypeSpec] = None
    deprecation_message: Optional[str] = Field(None, alias="deprecationMessage")
    language: Dict[str, Any] = Field(default_factory=dict)


class ConfigSpec(_SpecModel):
    variables: Dict[str, PropertySpec] = Field(default_factory=dict)
    defaults: List[str] = Field(default_factory=list)


class MetadataSpec(_SpecModel):
    module_format: Optional[str] = Field(None, alias="moduleFormat")


class PackageSpec(_SpecModel):
    name: str
    version: Optional[str] = None
    description: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    homepage: Optional[str] = None
    license: Optional[str] = None
    attribution: Optional[str] = None
    repository: Optional[str] = None
    logo_url: Optional[str] = Field(None, alias="logoUrl")
    plugin_download_url: Optional[str] = Field(None, alias="pluginDownloadURL")
    publisher: Optional[str] = None
    meta: Optional[MetadataSpec] = None
    config: ConfigSpec = Field(default_factory=ConfigSpec)
    types: Dict[str, ComplexTypeSpec] = Field(default_factory=dict)
    provider: Optional[ResourceSpec] = None
    resources: Dict[str, ResourceSpec] = Field(default_factory=dict)
    functions: Dict[str, FunctionSpec] = Field(default_factory=dict)
    language: Dict[str, Any] = Field(default_factory=dict)
