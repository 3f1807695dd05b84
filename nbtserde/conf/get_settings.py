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

import os
from typing import NamedTuple, Optional

from structlog import get_logger

from nbtserde.conf.settings import NbtSettings

logger = get_logger()

NBTSERDE_CONFIG_YAML_ENV = 'NBTSERDE_CONFIG_YAML'


class _SettingsMetadata(NamedTuple):
    source: Optional[str]
    settings: NbtSettings


_settings_singleton: Optional[_SettingsMetadata] = None


def get_global_settings() -> NbtSettings:
    """
    Returns the settings used when a call does not pass its own.

    The settings are read once from the yaml file named by the 'NBTSERDE_CONFIG_YAML' env var, when it is set, and
    the defaults of `NbtSettings` are used otherwise.
    """
    return _load_settings_singleton(os.environ.get(NBTSERDE_CONFIG_YAML_ENV))


def _load_settings_singleton(source: Optional[str]) -> NbtSettings:
    global _settings_singleton

    if _settings_singleton is not None:
        if _settings_singleton.source != source:
            raise Exception('loading config twice with a different file')
        return _settings_singleton.settings

    if source is None:
        settings = NbtSettings()
    else:
        settings = NbtSettings.from_yaml(filepath=source)
    logger.debug('settings loaded', source=source or 'defaults')

    _settings_singleton = _SettingsMetadata(source=source, settings=settings)
    return settings


def _reset_settings_singleton() -> None:
    """Forget the loaded settings, only meant for tests that change the env var."""
    global _settings_singleton
    _settings_singleton = None
