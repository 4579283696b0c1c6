"""
Resolution of the client's object/list configuration into schema pairs.

    process_configuration({
        "objects": {
            "people": True,                                   # standard fields
            "companies": {"tier": select_with("A", "B")},     # standard + extra
            "deals": False,                                   # excluded
            "projects": {"name": Text.Required},              # custom object
        },
        "lists": {
            "pipeline": {"stage": Status.Required},
        },
    })

Standard objects that are not mentioned are included, except the ones Attio
ships disabled (deals, users, workspaces).
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from attio_crm.core.exceptions import ConfigurationError
from attio_crm.schemas.attribute_builder import AttributeVariation
from attio_crm.schemas.helpers import ENTRY_ID_FIELD, RECORD_ID_FIELD, ObjectSchemas, create_schemas
from attio_crm.schemas.standard_objects import STANDARD_OBJECTS

logger = logging.getLogger(__name__)

DEFAULT_DISABLED_OBJECTS = frozenset({"deals", "users", "workspaces"})

FieldMap = Mapping[str, AttributeVariation]
ObjectSetting = Union[bool, FieldMap]


@dataclass(frozen=True)
class ObjectsConfig:
    """Which objects and lists a client exposes, and with which attributes."""
    objects: Mapping[str, ObjectSetting] = field(default_factory=dict)
    lists: Mapping[str, ObjectSetting] = field(default_factory=dict)

    def __post_init__(self):
        for key in ("objects", "lists"):
            value = getattr(self, key)
            if not isinstance(value, Mapping):
                raise ConfigurationError(
                    f"'{key}' must map names to settings, got {type(value).__name__}",
                    details={"key": key},
                )

    @classmethod
    def from_mapping(cls, config: Optional[Mapping[str, Any]]) -> "ObjectsConfig":
        if config is None:
            return cls()
        if not isinstance(config, Mapping):
            raise ConfigurationError(f"Configuration must be a mapping, got {type(config).__name__}")
        unknown = set(config) - {"objects", "lists"}
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration keys: {', '.join(sorted(unknown))}",
                details={"keys": sorted(unknown)},
            )
        return cls(objects=config.get("objects") or {}, lists=config.get("lists") or {})


@dataclass(frozen=True)
class ResolvedSchemaRegistry:
    """Schema pairs of every enabled object and list. Read-only once built."""
    objects: Mapping[str, ObjectSchemas]
    lists: Mapping[str, ObjectSchemas]

    def get_object(self, name: str) -> Optional[ObjectSchemas]:
        return self.objects.get(name)

    def get_list(self, name: str) -> Optional[ObjectSchemas]:
        return self.lists.get(name)

    def describe(self) -> Dict[str, Any]:
        return {
            "objects": {name: schemas.describe() for name, schemas in self.objects.items()},
            "lists": {name: schemas.describe() for name, schemas in self.lists.items()},
        }


def _check_field_map(kind: str, name: str, setting: Any) -> FieldMap:
    if not isinstance(setting, Mapping):
        raise ConfigurationError(
            f"{kind} '{name}' must be True, False or a mapping of attribute slugs, got {type(setting).__name__}",
            details={kind.lower(): name},
        )
    return setting


def _resolve_object(name: str, setting: ObjectSetting) -> Optional[Dict[str, AttributeVariation]]:
    """Field map for one explicitly configured object, or None when excluded."""
    if setting is False:
        return None
    standard = STANDARD_OBJECTS.get(name)
    if setting is True:
        if standard is None:
            raise ConfigurationError(
                f"Object '{name}' is not a standard object; provide its attributes instead of True",
                details={"object": name, "standard_objects": sorted(STANDARD_OBJECTS)},
            )
        return dict(standard)
    fields = _check_field_map("Object", name, setting)
    if standard is None:
        return dict(fields)
    # Caller attributes override standard ones of the same slug
    return {**standard, **fields}


def process_configuration(config: Union[ObjectsConfig, Mapping[str, Any], None] = None) -> ResolvedSchemaRegistry:
    """
    Resolve the client configuration into an immutable registry.

    Raises:
        ConfigurationError: unknown object enabled with True, a list given as
            True, malformed settings or reserved field names
    """
    if not isinstance(config, ObjectsConfig):
        config = ObjectsConfig.from_mapping(config)

    resolved_objects: Dict[str, ObjectSchemas] = {}
    for name, setting in config.objects.items():
        fields = _resolve_object(name, setting)
        if fields is None:
            logger.debug(f"[Attio Registry] Object '{name}' disabled by configuration")
            continue
        resolved_objects[name] = create_schemas(fields, id_field=RECORD_ID_FIELD, name=name)
        logger.debug(f"[Attio Registry] Object '{name}' resolved with {len(fields)} attributes")

    for name, fields in STANDARD_OBJECTS.items():
        if name in config.objects or name in DEFAULT_DISABLED_OBJECTS:
            continue
        resolved_objects[name] = create_schemas(fields, id_field=RECORD_ID_FIELD, name=name)
        logger.debug(f"[Attio Registry] Standard object '{name}' enabled by default")

    resolved_lists: Dict[str, ObjectSchemas] = {}
    for name, setting in config.lists.items():
        if setting is False:
            logger.debug(f"[Attio Registry] List '{name}' disabled by configuration")
            continue
        if setting is True:
            raise ConfigurationError(
                f"List '{name}' has no standard attributes; provide its entry attributes instead of True",
                details={"list": name},
            )
        fields = _check_field_map("List", name, setting)
        resolved_lists[name] = create_schemas(fields, id_field=ENTRY_ID_FIELD, name=name)
        logger.debug(f"[Attio Registry] List '{name}' resolved with {len(fields)} attributes")

    return ResolvedSchemaRegistry(
        objects=MappingProxyType(resolved_objects),
        lists=MappingProxyType(resolved_lists),
    )
