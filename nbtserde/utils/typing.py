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

from types import UnionType


def is_subclass(cls: type, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for NewType classes, which are resolved to the class they wrap.

    >>> is_subclass(bool, int)
    True
    >>> is_subclass(str, int | bytes)
    False

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> M = NewType('M', N)
    >>> is_subclass(M, int)
    True
    >>> is_subclass(M, str)
    False

    Anything that does not resolve to a class is simply not a subclass of anything, unlike with `issubclass`:

    >>> F = NewType('F', 'not a class')
    >>> is_subclass(F, str)
    False
    """
    while (super_type := getattr(cls, '__supertype__', None)) is not None:
        cls = super_type
    if not isinstance(cls, type):
        return False
    return issubclass(cls, class_or_tuple)


def resolve_new_type(type_: object, /) -> object:
    """ Follow a chain of NewType definitions down to the type they were made from.

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> resolve_new_type(NewType('M', N))
    <class 'int'>
    >>> resolve_new_type(str)
    <class 'str'>
    """
    while (super_type := getattr(type_, '__supertype__', None)) is not None:
        type_ = super_type
    return type_
