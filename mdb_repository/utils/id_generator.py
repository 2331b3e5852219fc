"""
Id generation for documents whose key has not been set.
"""

import random
import uuid
from collections.abc import Callable
from typing import Any

from bson import ObjectId

from ..constants import MAX_GENERATED_INT_ID
from ..exceptions import UnsupportedIdTypeError

_random = random.Random()

_GENERATORS: dict[type, Callable[[], Any]] = {
    uuid.UUID: uuid.uuid4,
    int: lambda: _random.randrange(1, MAX_GENERATED_INT_ID),
    str: lambda: str(uuid.uuid4()),
    ObjectId: ObjectId,
}


def generate_id(id_type: type) -> Any:
    """
    Generate a new id of the given key type.

    Supported key types are ``uuid.UUID``, ``int``, ``str`` and
    ``bson.ObjectId``.

    Raises:
        UnsupportedIdTypeError: If no generator exists for ``id_type``
    """
    generator = _GENERATORS.get(id_type)
    if generator is None:
        raise UnsupportedIdTypeError(id_type)
    return generator()


def is_default_id(value: Any) -> bool:
    """True when an id is unset: ``None`` or the zero value of its type."""
    if value is None:
        return True
    if isinstance(value, uuid.UUID):
        return value.int == 0
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, str)):
        return not value
    return False
