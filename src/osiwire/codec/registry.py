"""Schema registry: fully qualified type names to field catalogs.

The registry is filled once at start-up and frozen; after that it is only
read, so any number of threads may encode and decode against it at once.
Message nesting is a naming convention only (``osi3.VehicleClass.Wheel``):
every type, however deeply nested in the original schema, gets its own flat
entry.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, Iterator, List, Tuple, Type, Union

from ..exceptions import SchemaConflict, UnknownType
from ..models.base import BaseMessage
from .schema import MessageSchema

logger = logging.getLogger(__name__)

InterfaceVersionTuple = Tuple[int, int, int]

# Interface version of the vehicle schema shipped in osiwire.messages
COMPILED_INTERFACE_VERSION: InterfaceVersionTuple = (3, 1, 0)

VERSION_TYPE_NAME = "osi3.InterfaceVersion"

MessageRef = Union[str, Type[BaseMessage]]


class SchemaRegistry:
    """Process-wide mapping from message type name to MessageSchema.

    Example:
        >>> registry = SchemaRegistry()
        >>> registry.register(Traffic)   # also registers VehicleClass, Pedalry, ...
        >>> registry.freeze()
        >>> registry.catalog("osi3.Pedalry").fields[0].name
        'pedal_position_acceleration'
    """

    def __init__(
        self,
        interface_version: InterfaceVersionTuple = COMPILED_INTERFACE_VERSION,
        version_type: str = VERSION_TYPE_NAME,
    ) -> None:
        self.interface_version = interface_version
        self.version_type = version_type
        self._schemas: Dict[str, MessageSchema] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> SchemaRegistry:
        """Make the registry read-only. Returns self for chaining."""
        self._frozen = True
        return self

    def register(self, model_class: Type[BaseMessage]) -> MessageSchema:
        """Register a message model and every message type it references.

        Registration is all-or-nothing: if any type in the closure conflicts,
        nothing is added.

        Args:
            model_class: BaseMessage subclass to register

        Returns:
            The schema of ``model_class``

        Raises:
            SchemaConflict: If the registry is frozen, or a type name is already
                registered with a different field set
            SchemaError: If a model in the closure has an invalid schema
        """
        if self._frozen:
            raise SchemaConflict(
                f"Registry is frozen, cannot register {model_class.type_name()}"
            )

        staged: Dict[str, MessageSchema] = {}
        pending: List[Type[BaseMessage]] = [model_class]
        while pending:
            current = pending.pop()
            schema = MessageSchema.from_model(current)
            name = schema.type_name

            known = staged.get(name) or self._schemas.get(name)
            if known is not None:
                if known.signature() != schema.signature():
                    raise SchemaConflict(
                        f"Type {name} is already registered with a different field set "
                        f"({known.model_class.__qualname__} vs {current.__qualname__})"
                    )
                continue

            staged[name] = schema
            pending.extend(schema.nested_types())

        for name, schema in staged.items():
            logger.debug("Registered %s (%d fields)", name, len(schema.fields))
        self._schemas.update(staged)

        return self.catalog(model_class.type_name())

    def catalog(self, type_name: str) -> MessageSchema:
        """Return the field catalog of a registered type.

        Raises:
            UnknownType: If the name was never registered
        """
        try:
            return self._schemas[type_name]
        except KeyError:
            raise UnknownType(type_name) from None

    def model(self, type_name: str) -> Type[BaseMessage]:
        return self.catalog(type_name).model_class

    def resolve(self, ref: MessageRef) -> MessageSchema:
        """Look up a type by name or by model class.

        A model class that is not the registered one but shares its name and
        field set resolves to its own schema, so records of that class come back.

        Raises:
            UnknownType: If the type name was never registered
            SchemaConflict: If the class disagrees with the registered field set
        """
        if isinstance(ref, str):
            return self.catalog(ref)

        registered = self.catalog(ref.type_name())
        if registered.model_class is ref:
            return registered
        schema = MessageSchema.from_model(ref)
        if schema.signature() != registered.signature():
            raise SchemaConflict(
                f"{ref.__qualname__} does not match the registered {registered.type_name}"
            )
        return schema

    def names(self) -> List[str]:
        return sorted(self._schemas)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._schemas

    def __iter__(self) -> Iterator[MessageSchema]:
        return iter(self._schemas[name] for name in self.names())

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "open"
        return f"SchemaRegistry({len(self._schemas)} types, {state})"


@lru_cache(maxsize=None)
def default_registry() -> SchemaRegistry:
    """Return the frozen registry holding the osi3 vehicle schema.

    Built on first use and shared by the whole process.
    """
    # Imported here to keep the codec importable without the message set
    from ..messages import Traffic

    registry = SchemaRegistry()
    registry.register(Traffic)
    return registry.freeze()


@lru_cache(maxsize=None)
def registry_for(model_class: Type[BaseMessage]) -> SchemaRegistry:
    """Return a frozen registry holding ``model_class`` and its nested types.

    Used when encode/decode get a model class and no explicit registry.
    """
    defaults = default_registry()
    name = model_class.type_name()
    if name in defaults and defaults.model(name) is model_class:
        return defaults

    registry = SchemaRegistry()
    registry.register(model_class)
    return registry.freeze()


def resolve(ref: MessageRef, registry: SchemaRegistry | None = None) -> Tuple[SchemaRegistry, MessageSchema]:
    """Pick the registry for a call and look up the requested type in it."""
    if registry is None:
        registry = default_registry() if isinstance(ref, str) else registry_for(ref)
    return registry, registry.resolve(ref)
