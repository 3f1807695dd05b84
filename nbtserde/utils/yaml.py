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
from typing import Any, Union

import yaml


def dict_from_yaml(*, filepath: Union[Path, str]) -> dict[str, Any]:
    """Load a yaml mapping from `filepath`, an empty file gives an empty dict."""
    path = Path(filepath)
    if not path.is_file():
        raise ValueError(f"'{filepath}' is not a file")

    with path.open('r') as stream:
        contents = yaml.safe_load(stream) or {}

    if not isinstance(contents, dict):
        raise ValueError(f"'{filepath}' does not hold a mapping")

    return contents
