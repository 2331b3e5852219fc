"""
Document base classes.

Documents are dataclasses. The ``id`` field is stored as ``_id``; nested
dataclasses are converted to and from sub-documents.

Example:
    @collection_name("people")
    @dataclass
    class Person(Document):
        name: str = ""
        age: int = 0

    @dataclass
    class Order(KeyedDocument[int]):
        total: float = 0.0
"""

import dataclasses
import types
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar, Union, get_args, get_origin, get_type_hints

from ..constants import COLLECTION_NAME_ATTRIBUTE, ID_FIELD

TKey = TypeVar("TKey")
D = TypeVar("D", bound="KeyedDocument")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def collection_name(name: str):
    """
    Class decorator giving a document type an explicit collection name.

    Without it, the collection name is the camelized plural of the class name.
    """

    def decorator(cls: type) -> type:
        setattr(cls, COLLECTION_NAME_ATTRIBUTE, name)
        return cls

    return decorator


def get_collection_name_attribute(document_type: type) -> str | None:
    """Explicit collection name declared with ``collection_name``, if any."""
    return getattr(document_type, COLLECTION_NAME_ATTRIBUTE, None)


def _to_bson_value(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        if isinstance(value, KeyedDocument):
            return value.to_dict()
        return {f.name: _to_bson_value(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, list | tuple | set | frozenset):
        return [_to_bson_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _to_bson_value(v) for k, v in value.items()}
    return value


def _from_bson_value(tp: Any, value: Any) -> Any:
    if value is None:
        return None

    origin = get_origin(tp)
    if origin in (Union, types.UnionType):
        candidates = [arg for arg in get_args(tp) if arg is not type(None)]
        if len(candidates) == 1:
            return _from_bson_value(candidates[0], value)
        return value

    if origin in (list, tuple, set, frozenset) and isinstance(value, list):
        args = get_args(tp)
        item_type = args[0] if args else Any
        return origin(_from_bson_value(item_type, v) for v in value)

    if isinstance(tp, type) and dataclasses.is_dataclass(tp) and isinstance(value, dict):
        return build_dataclass(tp, value)

    return value


def build_dataclass(cls: type, data: dict[str, Any]) -> Any:
    """
    Build a dataclass instance from a MongoDB document.

    ``_id`` maps onto an ``id`` field, unknown keys are ignored and nested
    dataclass fields are rebuilt recursively.
    """
    if issubclass(cls, KeyedDocument):
        return cls.from_dict(data)

    hints = get_type_hints(cls)
    values = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        key = ID_FIELD if f.name == "id" and ID_FIELD in data else f.name
        if key in data:
            values[f.name] = _from_bson_value(hints.get(f.name, Any), data[key])
    return cls(**values)


def to_projection(projection_type: type | None, data: dict[str, Any] | None) -> Any:
    """
    Convert a raw projected document into ``projection_type``.

    Dataclasses are rebuilt with ``build_dataclass``; any other callable is
    called with the document's keys as keyword arguments.
    """
    if data is None or projection_type is None:
        return data
    if dataclasses.is_dataclass(projection_type):
        return build_dataclass(projection_type, data)
    return projection_type(**data)


@dataclass(kw_only=True)
class KeyedDocument(Generic[TKey]):
    """
    Base class for documents with a key of type ``TKey``.

    The key type is read from the generic parameter of the subclass
    (``KeyedDocument[int]``) or from an explicit ``id_type`` class attribute.
    An unset id is generated on insert according to ``id_type``.
    """

    id_type: ClassVar[type] = str
    # Type variable still standing for the key in a generic subclass
    _key_parameter: ClassVar[Any] = TKey

    id: TKey | None = None
    added_at_utc: datetime = field(default_factory=_utcnow)
    version: int = 0

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for base in cls.__dict__.get("__orig_bases__", ()):
            origin = get_origin(base)
            if not (isinstance(origin, type) and issubclass(origin, KeyedDocument)):
                continue
            bound = dict(zip(origin.__parameters__, get_args(base)))
            key = bound.get(origin._key_parameter, origin._key_parameter)
            if isinstance(key, TypeVar):
                cls._key_parameter = key
            elif isinstance(key, type) and "id_type" not in cls.__dict__:
                cls.id_type = key

    def to_dict(self) -> dict[str, Any]:
        """Convert the document to a dictionary for storage."""
        data: dict[str, Any] = {}
        for f in dataclasses.fields(self):
            value = _to_bson_value(getattr(self, f.name))
            if f.name == "id":
                data[ID_FIELD] = value
            else:
                data[f.name] = value
        return data

    @classmethod
    def from_dict(cls: type[D], data: dict[str, Any] | None) -> D | None:
        """Create a document from a dictionary read from the database."""
        if data is None:
            return None

        hints = get_type_hints(cls)
        values: dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            if not f.init:
                continue
            key = ID_FIELD if f.name == "id" else f.name
            if key in data:
                values[f.name] = _from_bson_value(hints.get(f.name, Any), data[key])
        return cls(**values)


@dataclass(kw_only=True)
class Document(KeyedDocument[uuid.UUID]):
    """
    Document keyed by a UUID, generated when the document is constructed.
    """

    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass(kw_only=True)
class PartitionedDocument(Document):
    """
    Document stored in the collection named by its partition key.
    """

    partition_key: str | None = None


def get_partition_key(document: Any) -> str | None:
    """Partition key of a document, ``None`` for non-partitioned documents."""
    if isinstance(document, PartitionedDocument):
        return document.partition_key or None
    return None
