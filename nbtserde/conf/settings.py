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

from pathlib import Path
from typing import Optional, Union

from pydantic import field_validator

from nbtserde.utils import pydantic
from nbtserde.utils.yaml import dict_from_yaml


class NbtSettings(pydantic.BaseModel):
    # Maximum number of nested compounds and lists, the root compound counts as one level.
    MAX_DEPTH: int = 512

    # When set, a key repeated inside one compound fails decoding instead of overwriting the earlier value.
    STRICT_DUPLICATE_KEYS: bool = False

    # When set, a document made only of an END tag decodes as an unnamed empty compound instead of failing.
    ALLOW_EMPTY_DOCUMENT: bool = False

    # Root name used when encoding a document and no name is given.
    DEFAULT_ROOT_NAME: str = ''

    # Hard limit on the size of a document, in bytes, both when encoding and decoding. No limit when None.
    MAX_DOCUMENT_BYTES: Optional[int] = None

    @field_validator('MAX_DEPTH')
    @classmethod
    def _validate_max_depth(cls, max_depth: int) -> int:
        if max_depth < 1:
            raise ValueError('MAX_DEPTH must be at least 1, the root compound is one level')
        return max_depth

    @field_validator('MAX_DOCUMENT_BYTES')
    @classmethod
    def _validate_max_document_bytes(cls, max_document_bytes: Optional[int]) -> Optional[int]:
        if max_document_bytes is not None and max_document_bytes < 0:
            raise ValueError('MAX_DOCUMENT_BYTES cannot be negative')
        return max_document_bytes

    @classmethod
    def from_yaml(cls, *, filepath: Union[Path, str]) -> 'NbtSettings':
        """Takes a filepath to a yaml file and returns a validated NbtSettings instance."""
        settings_dict = dict_from_yaml(filepath=filepath)
        return cls.model_validate(settings_dict)
