"""Package schema models, metaschema validation and the spec importer."""

from .spec import PackageSpec, PropertySpec, ResourceSpec, FunctionSpec, TypeSpec
from .model import Package, Resource, Function, ObjectType, EnumType, Property, TypeRef
from .validation import validate_document, load_metaschema
from .binder import import_spec

__all__ = [
    "PackageSpec",
    "PropertySpec",
    "ResourceSpec",
    "FunctionSpec",
    "TypeSpec",
    "Package",
    "Resource",
    "Function",
    "ObjectType",
    "EnumType",
    "Property",
    "TypeRef",
    "validate_document",
    "load_metaschema",
    "import_spec",
]
