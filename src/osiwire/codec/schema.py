"""Schema introspection for Pydantic message models.

This module turns a BaseMessage subclass into its field catalog: an ordered,
immutable list of FieldDescriptor entries keyed by tag, which the encoder and
decoder walk instead of looking at the model directly.
"""

from __future__ import annotations

import enum
import types
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, List, NamedTuple, Optional, Tuple, Type, Union, get_args, get_origin

from pydantic.fields import FieldInfo

from ..exceptions import SchemaConflict, SchemaError
from ..models.base import BaseMessage
from ..models.fields import SCALAR_KEY, TAG_KEY
from .wire import WireKind


class ScalarSpec(NamedTuple):
    """How a declared scalar type travels on the wire."""

    wire_kind: WireKind
    fmt: Optional[str]
    python_type: type


SCALAR_TYPES: Dict[str, ScalarSpec] = {
    "int32": ScalarSpec(WireKind.FIXED32, "<i", int),
    "uint32": ScalarSpec(WireKind.FIXED32, "<I", int),
    "float": ScalarSpec(WireKind.FIXED32, "<f", float),
    "int64": ScalarSpec(WireKind.FIXED64, "<q", int),
    "uint64": ScalarSpec(WireKind.FIXED64, "<Q", int),
    "double": ScalarSpec(WireKind.FIXED64, "<d", float),
    "bool": ScalarSpec(WireKind.VARINT, None, bool),
    "string": ScalarSpec(WireKind.LENGTH_DELIMITED, None, str),
    "bytes": ScalarSpec(WireKind.LENGTH_DELIMITED, None, bytes),
}

# Scalar types whose width is implied by the Python annotation
_IMPLIED_SCALARS = {bool: "bool", str: "string", bytes: "bytes"}

INTEGER_RANGES: Dict[str, Tuple[int, int]] = {
    "int32": (-(2**31), 2**31 - 1),
    "uint32": (0, 2**32 - 1),
    "int64": (-(2**63), 2**63 - 1),
    "uint64": (0, 2**64 - 1),
}


class FieldKind(str, enum.Enum):
    SCALAR = "scalar"
    ENUM = "enum"
    MESSAGE = "message"


@dataclass(frozen=True)
class EnumDescriptor:
    """Symbolic names and integer values of an enum type.

    Value 0 is the "unknown" sentinel: the decoder substitutes it for any
    integer the enum does not define.

    Attributes:
        name: Enum class name
        values: (member name, integer value) pairs in declaration order
        enum_type: The IntEnum class itself
    """

    name: str
    values: Tuple[Tuple[str, int], ...]
    enum_type: Type[enum.IntEnum]

    @classmethod
    def from_enum(cls, enum_type: Type[enum.Enum]) -> EnumDescriptor:
        """Build a descriptor, validating the enum for wire use.

        Raises:
            SchemaError: If the enum is not an IntEnum, has negative values
                or has no 0 value
        """
        if not issubclass(enum_type, enum.IntEnum):
            raise SchemaError(f"Enum {enum_type.__name__} must be an IntEnum")
        values = tuple((member.name, int(member.value)) for member in enum_type)
        if not values:
            raise SchemaError(f"Enum {enum_type.__name__} has no values")
        negative = [name for name, value in values if value < 0]
        if negative:
            raise SchemaError(f"Enum {enum_type.__name__} has negative values: {negative}")
        if all(value != 0 for _, value in values):
            raise SchemaError(
                f"Enum {enum_type.__name__} needs a 0 value to stand for unknown values"
            )
        return cls(name=enum_type.__name__, values=values, enum_type=enum_type)

    @property
    def sentinel(self) -> enum.IntEnum:
        return self.enum_type(0)

    def member(self, value: int) -> Optional[enum.IntEnum]:
        """Return the member for ``value``, or None if it is not defined."""
        try:
            return self.enum_type(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class FieldDescriptor:
    """Schema information for a single field.

    Attributes:
        name: Field name on the model
        tag: Field number on the wire
        kind: scalar, enum or message
        repeated: Whether the field holds a sequence of values
        scalar_type: Declared scalar type name (scalar fields)
        enum: Enum descriptor (enum fields)
        message_type: Nested model class (message fields)
    """

    name: str
    tag: int
    kind: FieldKind
    repeated: bool = False
    scalar_type: Optional[str] = None
    enum: Optional[EnumDescriptor] = None
    message_type: Optional[Type[BaseMessage]] = None

    @property
    def wire_kind(self) -> WireKind:
        if self.kind is FieldKind.ENUM:
            return WireKind.VARINT
        if self.kind is FieldKind.MESSAGE:
            return WireKind.LENGTH_DELIMITED
        assert self.scalar_type is not None
        return SCALAR_TYPES[self.scalar_type].wire_kind

    @property
    def message_name(self) -> Optional[str]:
        return self.message_type.type_name() if self.message_type is not None else None

    @property
    def type_label(self) -> str:
        """Short human readable type, e.g. ``double`` or ``repeated osi3.Vector2d``."""
        if self.kind is FieldKind.SCALAR:
            label = str(self.scalar_type)
        elif self.kind is FieldKind.ENUM:
            assert self.enum is not None
            label = self.enum.name
        else:
            label = str(self.message_name)
        return f"repeated {label}" if self.repeated else label

    def signature(self) -> Tuple[Any, ...]:
        """Comparable summary used to detect incompatible re-registration."""
        enum_values = self.enum.values if self.enum else None
        return (
            self.tag,
            self.name,
            self.kind.value,
            self.repeated,
            self.scalar_type,
            enum_values,
            self.message_name,
        )


class MessageSchema:
    """Field catalog for one message type.

    This class introspects a BaseMessage model and extracts the descriptor of
    each field, ordered by tag.

    Example:
        >>> schema = MessageSchema.from_model(Pedalry)
        >>> for field in schema.fields:
        ...     print(f"{field.tag}: {field.name} ({field.type_label})")
    """

    def __init__(self, model_class: Type[BaseMessage]) -> None:
        """Initialize schema from a message model.

        Args:
            model_class: BaseMessage subclass to introspect

        Raises:
            SchemaError: If a field cannot be described
            SchemaConflict: If two fields share a tag
        """
        if not (isinstance(model_class, type) and issubclass(model_class, BaseMessage)):
            raise SchemaError(f"{model_class!r} is not a BaseMessage subclass")
        self.model_class = model_class
        self.type_name = model_class.type_name()
        self.fields: List[FieldDescriptor] = []
        self._by_tag: Dict[int, FieldDescriptor] = {}
        self._by_name: Dict[str, FieldDescriptor] = {}
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseMessage]) -> MessageSchema:
        """Create (or fetch the cached) schema of a message model."""
        return _cached_schema(model_class)

    def _introspect(self) -> None:
        for field_name, field_info in self.model_class.model_fields.items():
            descriptor = self._extract_field(field_name, field_info)
            existing = self._by_tag.get(descriptor.tag)
            if existing is not None:
                raise SchemaConflict(
                    f"{self.type_name}: tag {descriptor.tag} used by both "
                    f"{existing.name} and {descriptor.name}"
                )
            self._by_tag[descriptor.tag] = descriptor
            self._by_name[descriptor.name] = descriptor

        self.fields = sorted(self._by_tag.values(), key=lambda field: field.tag)

    def _extract_field(self, name: str, field_info: FieldInfo) -> FieldDescriptor:
        extra = field_info.json_schema_extra
        if not isinstance(extra, dict) or TAG_KEY not in extra:
            raise SchemaError(
                f"{self.type_name}.{name}: no wire tag, declare it with "
                f"Scalar/EnumField/Nested/Repeated"
            )
        tag = extra[TAG_KEY]
        if not isinstance(tag, int) or isinstance(tag, bool) or tag < 1:
            raise SchemaError(f"{self.type_name}.{name}: tag must be an integer >= 1, got {tag!r}")
        declared_scalar = extra.get(SCALAR_KEY)

        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"{self.type_name}.{name} has no type annotation")

        annotation = _strip_optional(annotation, f"{self.type_name}.{name}")

        repeated = False
        if get_origin(annotation) in (list, List):
            args = get_args(annotation)
            if len(args) != 1:
                raise SchemaError(f"{self.type_name}.{name}: repeated field needs an element type")
            annotation = args[0]
            repeated = True

        if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
            return FieldDescriptor(
                name=name,
                tag=tag,
                kind=FieldKind.ENUM,
                repeated=repeated,
                enum=_enum_descriptor(annotation),
            )

        if isinstance(annotation, type) and issubclass(annotation, BaseMessage):
            return FieldDescriptor(
                name=name,
                tag=tag,
                kind=FieldKind.MESSAGE,
                repeated=repeated,
                message_type=annotation,
            )

        scalar_type = declared_scalar or _IMPLIED_SCALARS.get(annotation)  # type: ignore[arg-type]
        if scalar_type is None:
            raise SchemaError(
                f"{self.type_name}.{name}: {annotation} needs an explicit scalar type "
                f"(one of {', '.join(SCALAR_TYPES)})"
            )
        spec = SCALAR_TYPES.get(scalar_type)
        if spec is None:
            raise SchemaError(f"{self.type_name}.{name}: unknown scalar type {scalar_type!r}")
        if annotation is not spec.python_type:
            raise SchemaError(
                f"{self.type_name}.{name}: scalar type {scalar_type} needs a "
                f"{spec.python_type.__name__} annotation, got {annotation}"
            )

        return FieldDescriptor(
            name=name, tag=tag, kind=FieldKind.SCALAR, repeated=repeated, scalar_type=scalar_type
        )

    def field_by_tag(self, tag: int) -> Optional[FieldDescriptor]:
        return self._by_tag.get(tag)

    def field_by_name(self, name: str) -> Optional[FieldDescriptor]:
        return self._by_name.get(name)

    def nested_types(self) -> List[Type[BaseMessage]]:
        """Message models referenced directly by this schema's fields."""
        return [field.message_type for field in self.fields if field.message_type is not None]

    def signature(self) -> Tuple[Tuple[Any, ...], ...]:
        return tuple(field.signature() for field in self.fields)

    def __repr__(self) -> str:
        return f"MessageSchema({self.type_name!r}, fields={len(self.fields)})"


@lru_cache(maxsize=None)
def _cached_schema(model_class: Type[BaseMessage]) -> MessageSchema:
    return MessageSchema(model_class)


@lru_cache(maxsize=None)
def _enum_descriptor(enum_type: Type[enum.Enum]) -> EnumDescriptor:
    return EnumDescriptor.from_enum(enum_type)


def _strip_optional(annotation: Any, where: str) -> Any:
    """Unwrap ``Optional[T]`` / ``T | None`` to ``T``."""
    origin = get_origin(annotation)
    union_types: Tuple[Any, ...] = (Union,)
    if hasattr(types, "UnionType"):
        union_types += (types.UnionType,)
    if origin not in union_types:
        return annotation

    non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(non_none_args) != 1:
        raise SchemaError(f"{where}: complex Union types not supported")
    return non_none_args[0]
