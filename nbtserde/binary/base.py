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

from contextlib import contextmanager
from typing import Generator, Optional

from structlog import get_logger

from nbtserde.conf import NbtSettings, get_global_settings
from nbtserde.exceptions import NestingTooDeepError, SerializationError
from nbtserde.serialization.exceptions import PathSegment

logger = get_logger()


class NbtStream:
    """ State shared by `NbtReader` and `NbtWriter`: the settings in use and the current nesting depth.

    Both sides also know how to attach a location to the errors that cross them, see `at`.
    """

    def __init__(self, settings: Optional[NbtSettings] = None, *, depth: int = 0) -> None:
        self.settings = settings if settings is not None else get_global_settings()
        self.log = logger.new()
        self._depth = depth

    @property
    def depth(self) -> int:
        return self._depth

    def cur_pos(self) -> int:
        raise NotImplementedError

    def _enter(self) -> None:
        if self._depth >= self.settings.MAX_DEPTH:
            raise NestingTooDeepError(
                f'nesting deeper than {self.settings.MAX_DEPTH} levels',
                offset=self.cur_pos(),
            )
        self._depth += 1

    def _leave(self) -> None:
        assert self._depth > 0
        self._depth -= 1

    @contextmanager
    def nested(self) -> Generator[None, None, None]:
        """Account for one more level of compound or list while the context is active."""
        self._enter()
        try:
            yield
        finally:
            self._leave()

    @contextmanager
    def at(self, segment: PathSegment) -> Generator[None, None, None]:
        """Prefix the path of any serialization error raised inside the context with `segment`."""
        try:
            yield
        except SerializationError as e:
            self.locate(e)
            e.path.insert(0, segment)
            raise

    def locate(self, error: SerializationError) -> SerializationError:
        """Fill in the offset of an error that was raised without one."""
        if error.offset is None:
            error.offset = self.cur_pos()
        return error
