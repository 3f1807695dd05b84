# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections.abc import Mapping
from dataclasses import dataclass, is_dataclass
from enum import Enum
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Annotated, Any, NamedTuple, Optional, TypeAlias, Union, get_args, get_origin

from structlog import get_logger

from nbtserde.utils.typing import is_subclass, resolve_new_type
from nbtserde.value import Tag

if TYPE_CHECKING:
    from nbtserde.nbt_types import NBTType


logger = get_logger()

TypeAliasMap: TypeAlias = Mapping[Any, type]
TypeToNBTTypeMap: TypeAlias = Mapping[Any, type['NBTType']]


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(int)
    'int'
    >>> pretty_type(list[int])
    'list[int]'
    >>> pretty_type(None)
    'None'
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__') or not hasattr(type_, '__name__'):
        return str(type_)
    else:
        return type_.__name__


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its alias, the type's arguments are mapped too.

    >>> from collections import OrderedDict
    >>> get_aliased_type(list[OrderedDict[str, bytearray]], {OrderedDict: dict, bytearray: bytes}, _verbose=False)
    list[dict[str, bytes]]
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    origin_type = get_origin(type_) or type_

    if origin_type is Annotated:
        # metadata is kept as is, only the annotated type can be replaced
        annotated, *metadata = type_.__origin__, *type_.__metadata__
        new_annotated, replaced = _get_aliased_type(annotated, alias_map)
        return Annotated[new_annotated, *metadata], replaced

    replaced = False
    if origin_type is Union:
        aliased_origin = UnionType
    elif _is_hashable(origin_type) and origin_type in alias_map:
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    type_args = get_args(type_)
    if not type_args:
        return aliased_origin, replaced

    aliased_args_replaced = [_get_aliased_type(arg, alias_map) for arg in type_args]
    aliased_args, args_replaced = zip(*aliased_args_replaced)
    replaced |= any(args_replaced)

    # XXX: special case, UnionType can't be instantiated directly
    if aliased_origin is UnionType:
        return reduce(or_, aliased_args), replaced

    assert hasattr(aliased_origin, '__class_getitem__'), 'we must have an indexable class at this point'
    return aliased_origin[*aliased_args], replaced


def _is_hashable(obj: Any) -> bool:
    try:
        hash(obj)
    except TypeError:
        return False
    return True


def get_usable_origin_type(type_: Any, /, *, type_map: 'NBTType.TypeMap', _verbose: bool = True) -> Any:
    """ Map a type into the key of the `type_map.nbt_types_map` entry that handles it.

    Parametrized types are looked up by their origin, records and enums by the kind of class they are, NewTypes that
    are not in the map by the type they wrap. A `TypeError` is raised when no entry can handle the type.

    >>> from nbtserde.nbt_types import DEFAULT_TYPE_MAP as type_map
    >>> get_usable_origin_type(dict[str, int], type_map=type_map, _verbose=False)
    <class 'dict'>
    >>> get_usable_origin_type(int | None, type_map=type_map, _verbose=False)
    typing.Optional
    """
    if isinstance(type_, str):
        raise TypeError(f'unresolved string annotation {type_!r}')

    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin = get_origin(aliased_type) or aliased_type

    if origin is UnionType or origin is Union:
        origin = Optional if NoneType in get_args(aliased_type) else UnionType

    if _is_hashable(origin) and origin in type_map.nbt_types_map:
        return origin

    # XXX: tags are dataclasses too, so they must be matched first
    if Tag in type_map.nbt_types_map and is_subclass(origin, Tag):
        return Tag

    if NamedTuple in type_map.nbt_types_map and NamedTuple in getattr(origin, '__orig_bases__', tuple()):
        return NamedTuple

    if dataclass in type_map.nbt_types_map and isinstance(origin, type) and is_dataclass(origin):
        return dataclass

    if Enum in type_map.nbt_types_map and is_subclass(origin, Enum):
        return Enum

    resolved = resolve_new_type(origin)
    if resolved is not origin:
        return get_usable_origin_type(resolved, type_map=type_map, _verbose=_verbose)

    raise TypeError(f'type {pretty_type(type_)} is not supported by any NBTType class')
