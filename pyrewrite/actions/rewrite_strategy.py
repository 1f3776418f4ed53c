################################################################################
#  Licensed to the Apache Software Foundation (ASF) under one
#  or more contributor license agreements.  See the NOTICE file
#  distributed with this work for additional information
#  regarding copyright ownership.  The ASF licenses this file
#  to you under the Apache License, Version 2.0 (the
#  "License"); you may not use this file except in compliance
#  with the License.  You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
#  Unless required by applicable law or agreed to in writing, software
#  distributed under the License is distributed on an "AS IS" BASIS,
#  WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#  See the License for the specific language governing permissions and
# limitations under the License.
################################################################################

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Set

from pyrewrite.common.exceptions import ConfigurationError, UnknownOptionError
from pyrewrite.common.options import ConfigOption, Options
from pyrewrite.scan.file_scan_task import FileScanTask
from pyrewrite.table.table import Table


class RewriteStrategy(ABC):
    """
    Decides which data files of a table to rewrite and how to group them.

    A strategy is configured once through ``options`` and is read-only from
    then on; selection and grouping never fail on a configured strategy.
    """

    def __init__(self, table: Table):
        self._table = table

    def table(self) -> Table:
        return self._table

    @abstractmethod
    def name(self) -> str:
        """Returns the name of this rewrite strategy."""

    @abstractmethod
    def valid_options(self) -> Set[str]:
        """Returns the option keys this strategy accepts."""

    @abstractmethod
    def options(self, options: Dict[str, str]) -> 'RewriteStrategy':
        """
        Validates and applies the options.

        Raises:
            ConfigurationError: If a key is unknown, a value cannot be parsed or
                the resulting configuration is invalid
        """

    @abstractmethod
    def select_files_to_rewrite(self, data_files: Iterable[FileScanTask]) -> Iterable[FileScanTask]:
        """
        Selects the files this strategy wants to rewrite.

        Args:
            data_files: All candidate files

        Returns:
            The files to rewrite
        """

    @abstractmethod
    def plan_file_groups(self, data_files: Iterable[FileScanTask]) -> List[List[FileScanTask]]:
        """
        Groups the selected files into units that are rewritten independently.

        Args:
            data_files: Files returned by select_files_to_rewrite

        Returns:
            The file groups to rewrite
        """

    def _check_valid_options(self, options: Optional[Dict[str, str]]) -> Options:
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise TypeError(f"Options must be a dict, got {type(options)}")

        valid = self.valid_options()
        for key in options:
            if key not in valid:
                raise UnknownOptionError(key, self.name(), self._table.name(), valid)
        return Options(dict(options))

    def _get_option(self, options: Options, option: ConfigOption, default: Any = None) -> Any:
        try:
            return options.get(option, default)
        except ValueError as e:
            raise self._configuration_error(
                f"Invalid value {options.to_map().get(option.key())!r} for option "
                f"{option.key()!r}: {e}") from e

    def _configuration_error(self, message: str) -> ConfigurationError:
        return ConfigurationError(message, strategy_name=self.name(), table_name=self._table.name())

    def _not_configured_error(self) -> ConfigurationError:
        return self._configuration_error(
            f"{self.name()} strategy for table {self._table.name()} is not configured, "
            f"options must be set before planning")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name()}, table={self._table.name()})"
