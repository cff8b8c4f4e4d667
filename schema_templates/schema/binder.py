"""Import a raw package specification into a bound :class:`Package`.

Importing runs in three steps:

1. The raw JSON document is checked against the bundled metaschema.
2. The document is parsed into :class:`PackageSpec`.
3. Every token and type reference is resolved against the package.

All problems found in a step are collected and raised together as a single
:class:`ImportSpecError`; later steps only run when earlier ones succeed.

``$ref`` values understood by the importer:

- ``#/types/<token>``: an object or enum type declared in ``types``
- ``#/resources/<token>``: a resource declared in ``resources``
- ``#/provider``: the package provider
- ``pulumi.json#/Any``, ``pulumi.json#/Archive``, ``pulumi.json#/Asset``,
  ``pulumi.json#/Json``: built-in types
"""

from __future__ import annotations
import re
from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import unquote

from pydantic import ValidationError as PydanticValidationError

from ..core.errors import ImportSpecError
from ..core.logger import get_logger
from ..core.utils import parse_token, token_to_module
from .model import (
    PRIMITIVE_TYPES,
    EnumType,
    EnumValue,
    Function,
    ObjectType,
    Package,
    Property,
    Resource,
    TypeRef,
)
from .spec import (
    ComplexTypeSpec,
    FunctionSpec,
    ObjectTypeSpec,
    PackageSpec,
    PropertySpec,
    ResourceSpec,
    TypeSpec,
)
from .validation import validate_document

logger = get_logger(__name__)

BUILTIN_REFS = {
    "pulumi.json#/Any": "any",
    "pulumi.json#/Archive": "archive",
    "pulumi.json#/Asset": "asset",
    "pulumi.json#/Json": "json",
}
TYPES_PREFIX = "#/types/"
RESOURCES_PREFIX = "#/resources/"
PROVIDER_REF = "#/provider"


def provider_token(package_name: str) -> str:
    return f"pulumi:providers:{package_name}"


def _value_matches(value: Any, primitive: str) -> bool:
    if primitive == "boolean":
        return isinstance(value, bool)
    if primitive == "integer":
        return isinstance(value, int) and not isinstance(value, bool)
    if primitive == "number":
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if primitive == "string":
        return isinstance(value, str)
    return True


def _pydantic_messages(err: PydanticValidationError) -> List[str]:
    messages = []
    for e in err.errors():
        loc = " -> ".join(f"[{p}]" if isinstance(p, int) else str(p) for p in e["loc"]) or "root"
        messages.append(f"At '{loc}': {e['msg']}")
    return messages


class _Binder:
    def __init__(self, spec: PackageSpec):
        self.spec = spec
        self.diagnostics: List[str] = []
        self.module_format: Optional[str] = spec.meta.module_format if spec.meta else None
        # token -> "object" | "enum"
        self._type_kinds: Dict[str, str] = {}
        self._enum_elements: Dict[str, str] = {}

    def error(self, path: str, message: str) -> None:
        self.diagnostics.append(f"{path}: {message}")

    # ---------- tokens ----------
    def check_token(self, token: str, path: str) -> bool:
        try:
            pkg, _, _ = parse_token(token)
        except ValueError as e:
            self.error(path, str(e))
            return False
        if pkg != self.spec.name:
            self.error(path, f"token '{token}' does not belong to package '{self.spec.name}'")
            return False
        return True

    def module_of(self, token: str) -> str:
        try:
            return token_to_module(token, self.module_format)
        except ValueError:
            return "index"

    # ---------- types ----------
    def resolve_ref(self, ref: str, path: str, plain: bool) -> TypeRef:
        if ref in BUILTIN_REFS:
            return TypeRef(kind=BUILTIN_REFS[ref], plain=plain)
        if ref == PROVIDER_REF:
            return TypeRef(kind="resource", token=provider_token(self.spec.name), plain=plain)
        if ref.startswith(TYPES_PREFIX):
            token = unquote(ref[len(TYPES_PREFIX) :])
            kind = self._type_kinds.get(token)
            if kind is None:
                self.error(path, f"type {token} not found in package {self.spec.name}")
                return TypeRef(kind="any", plain=plain)
            if kind == "enum":
                return TypeRef(
                    kind="enum", token=token, name=self._enum_elements.get(token), plain=plain
                )
            return TypeRef(kind="object", token=token, plain=plain)
        if ref.startswith(RESOURCES_PREFIX):
            token = unquote(ref[len(RESOURCES_PREFIX) :])
            if token not in self.spec.resources:
                self.error(path, f"resource {token} not found in package {self.spec.name}")
                return TypeRef(kind="any", plain=plain)
            return TypeRef(kind="resource", token=token, plain=plain)
        if "#" in ref and not ref.startswith("#"):
            self.error(path, f"external reference '{ref}' is not supported")
        else:
            self.error(path, f"invalid $ref '{ref}'")
        return TypeRef(kind="any", plain=plain)

    def bind_type(self, ts: TypeSpec, path: str) -> TypeRef:
        if ts.ref is not None:
            return self.resolve_ref(ts.ref, f"{path}/$ref", ts.plain)

        if ts.one_of:
            elements = [self.bind_type(e, f"{path}/oneOf/{i}") for i, e in enumerate(ts.one_of)]
            return TypeRef(kind="union", elements=elements, plain=ts.plain)

        if ts.type is None:
            self.error(path, "type must specify one of 'type', '$ref' or 'oneOf'")
            return TypeRef(kind="any", plain=ts.plain)

        if ts.type in PRIMITIVE_TYPES:
            return TypeRef(kind="primitive", name=ts.type, plain=ts.plain)

        if ts.type == "array":
            if ts.items is None:
                self.error(path, "array type must specify 'items'")
                return TypeRef(kind="array", element=TypeRef(kind="any"), plain=ts.plain)
            element = self.bind_type(ts.items, f"{path}/items")
            return TypeRef(kind="array", element=element, plain=ts.plain)

        if ts.type == "object":
            if ts.additional_properties is None:
                element = TypeRef(kind="primitive", name="string")
            else:
                element = self.bind_type(ts.additional_properties, f"{path}/additionalProperties")
            return TypeRef(kind="map", element=element, plain=ts.plain)

        self.error(path, f"unknown primitive type '{ts.type}'")
        return TypeRef(kind="any", plain=ts.plain)

    def check_value(self, value: Any, type_ref: TypeRef, path: str, what: str) -> None:
        if type_ref.is_scalar and not _value_matches(value, type_ref.name):
            self.error(path, f"{what} value {value!r} is not a valid {type_ref.name}")

    # ---------- properties ----------
    def bind_properties(
        self,
        props: Mapping[str, PropertySpec],
        required: List[str],
        path: str,
    ) -> List[Property]:
        required_set = set(required)
        for name in required:
            if name not in props:
                self.error(path, f"required property '{name}' is not declared")

        bound = []
        for name in sorted(props):
            prop = props[name]
            prop_path = f"{path}/{name}"
            type_ref = self.bind_type(prop, prop_path)
            has_default = "default" in prop.model_fields_set and prop.default is not None
            if has_default:
                self.check_value(prop.default, type_ref, f"{prop_path}/default", "default")
            if prop.const is not None:
                self.check_value(prop.const, type_ref, f"{prop_path}/const", "const")
            bound.append(
                Property(
                    name=name,
                    type=type_ref,
                    description=prop.description,
                    required=name in required_set,
                    has_default=has_default,
                    default=prop.default,
                    default_env=list(prop.default_info.environment) if prop.default_info else [],
                    const=prop.const,
                    secret=prop.secret,
                    replace_on_changes=prop.replace_on_changes,
                    deprecation_message=prop.deprecation_message,
                )
            )
        return bound

    def bind_object(self, spec: Optional[ObjectTypeSpec], path: str) -> List[Property]:
        if spec is None:
            return []
        return self.bind_properties(spec.properties, spec.required, f"{path}/properties")

    # ---------- declarations ----------
    def declare_types(self) -> None:
        for token, t in self.spec.types.items():
            path = f"#/types/{token}"
            if not self.check_token(token, path):
                continue
            if t.enum is not None:
                if t.type not in PRIMITIVE_TYPES:
                    self.error(path, f"enum type must be one of {', '.join(PRIMITIVE_TYPES)}")
                    continue
                self._type_kinds[token] = "enum"
                self._enum_elements[token] = t.type
            elif t.type in (None, "object"):
                self._type_kinds[token] = "object"
            else:
                self.error(path, f"type '{t.type}' requires an 'enum' list")

    def bind_enum(self, token: str, t: ComplexTypeSpec) -> EnumType:
        path = f"#/types/{token}"
        element = self._enum_elements[token]
        values = []
        for i, v in enumerate(t.enum or []):
            if not _value_matches(v.value, element):
                self.error(f"{path}/enum/{i}", f"enum value {v.value!r} is not a valid {element}")
            values.append(
                EnumValue(
                    name=v.name if v.name else str(v.value),
                    value=v.value,
                    description=v.description,
                    deprecation_message=v.deprecation_message,
                )
            )
        return EnumType(
            token=token,
            name=parse_token(token)[2],
            module=self.module_of(token),
            element_type=element,
            description=t.description,
            values=values,
        )

    def bind_object_type(self, token: str, t: ComplexTypeSpec) -> ObjectType:
        path = f"#/types/{token}"
        return ObjectType(
            token=token,
            name=parse_token(token)[2],
            module=self.module_of(token),
            description=t.description,
            properties=self.bind_properties(t.properties, t.required, f"{path}/properties"),
        )

    def bind_resource(self, token: str, r: ResourceSpec, path: str, is_provider=False) -> Resource:
        aliases = [a.type or a.name or "" for a in r.aliases]
        return Resource(
            token=token,
            name=parse_token(token)[2],
            module="index" if is_provider else self.module_of(token),
            description=r.description,
            input_properties=self.bind_properties(
                r.input_properties, r.required_inputs, f"{path}/inputProperties"
            ),
            properties=self.bind_properties(r.properties, r.required, f"{path}/properties"),
            state_inputs=self.bind_object(r.state_inputs, f"{path}/stateInputs"),
            aliases=[a for a in aliases if a],
            deprecation_message=r.deprecation_message,
            is_component=r.is_component,
            is_provider=is_provider,
        )

    def bind_function(self, token: str, f: FunctionSpec, path: str) -> Function:
        return Function(
            token=token,
            name=parse_token(token)[2],
            module=self.module_of(token),
            description=f.description,
            inputs=self.bind_object(f.inputs, f"{path}/inputs"),
            outputs=self.bind_object(f.outputs, f"{path}/outputs"),
            deprecation_message=f.deprecation_message,
        )

    def bind(self) -> Package:
        spec = self.spec
        if self.module_format is not None:
            try:
                re.compile(self.module_format)
            except re.error as e:
                self.error("#/meta/moduleFormat", f"invalid module format: {e}")
                self.module_format = None

        self.declare_types()

        object_types: Dict[str, ObjectType] = {}
        enum_types: Dict[str, EnumType] = {}
        for token, t in spec.types.items():
            kind = self._type_kinds.get(token)
            if kind == "enum":
                enum_types[token] = self.bind_enum(token, t)
            elif kind == "object":
                object_types[token] = self.bind_object_type(token, t)

        config = self.bind_properties(spec.config.variables, [], "#/config/variables")
        for name in spec.config.defaults:
            if name not in spec.config.variables:
                self.error("#/config/defaults", f"config variable '{name}' is not declared")

        provider = None
        if spec.provider is not None:
            provider = self.bind_resource(
                provider_token(spec.name), spec.provider, "#/provider", is_provider=True
            )

        resources = []
        for token, r in spec.resources.items():
            path = f"#/resources/{token}"
            if self.check_token(token, path):
                resources.append(self.bind_resource(token, r, path))

        functions = []
        for token, f in spec.functions.items():
            path = f"#/functions/{token}"
            if self.check_token(token, path):
                functions.append(self.bind_function(token, f, path))

        return Package(
            name=spec.name,
            version=spec.version,
            description=spec.description,
            keywords=list(spec.keywords),
            homepage=spec.homepage,
            license=spec.license,
            attribution=spec.attribution,
            repository=spec.repository,
            publisher=spec.publisher,
            logo_url=spec.logo_url,
            plugin_download_url=spec.plugin_download_url,
            module_format=self.module_format,
            config=config,
            object_types=object_types,
            enum_types=enum_types,
            provider=provider,
            resources=resources,
            functions=functions,
            language=dict(spec.language),
        )


def import_spec(raw: Union[PackageSpec, Mapping[str, Any]], *, validate: bool = True) -> Package:
    """Import a package specification into a bound :class:`Package`.

    Args:
        raw: A parsed :class:`PackageSpec` or the decoded JSON document.
        validate: Check a raw document against the metaschema first.

    Raises:
        ImportSpecError: with every diagnostic found.
    """
    if isinstance(raw, PackageSpec):
        spec = raw
    else:
        if validate:
            ok, errors = validate_document(raw)
            if not ok:
                raise ImportSpecError(errors, package_name=_guess_name(raw))
        try:
            spec = PackageSpec.model_validate(raw)
        except PydanticValidationError as e:
            raise ImportSpecError(
                _pydantic_messages(e), package_name=_guess_name(raw), original_error=e
            ) from e

    binder = _Binder(spec)
    package = binder.bind()
    if binder.diagnostics:
        raise ImportSpecError(binder.diagnostics, package_name=spec.name)

    logger.debug(
        "imported package %s: %d resources, %d functions, %d types",
        package.name,
        len(package.resources),
        len(package.functions),
        len(package.object_types) + len(package.enum_types),
    )
    return package


def _guess_name(raw: Any) -> Optional[str]:
    if isinstance(raw, Mapping):
        name = raw.get("name")
        return name if isinstance(name, str) else None
    return None
