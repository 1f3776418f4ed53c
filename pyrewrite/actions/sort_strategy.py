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

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

from pyrewrite.actions.bin_pack_strategy import BinPackConfig, BinPackStrategy, task_length
from pyrewrite.actions.rewrite_options import RewriteOptions
from pyrewrite.actions.rewrite_strategy import RewriteStrategy
from pyrewrite.common.exceptions import ConfigurationError, ValidationError
from pyrewrite.scan.file_scan_task import FileScanTask
from pyrewrite.schema.sort_order import SortOrder
from pyrewrite.table.table import Table
from pyrewrite.utils.bin_packing import ListPacker

logger = logging.getLogger(__name__)


class RewriteMode(str, Enum):
    """How a sort rewrite picks and groups files."""

    # Every candidate file is rewritten, packed only by group size
    REWRITE_ALL = "rewrite-all"
    # Selection and grouping are left to the bin-pack strategy
    DELEGATE = "delegate"


@dataclass(frozen=True)
class SortStrategyConfig:
    mode: RewriteMode
    sort_order: SortOrder
    bin_pack: BinPackConfig


class SortStrategy(RewriteStrategy):
    """
    A rewrite strategy which reorders data to lay it out by a sort order.

    For example, if files are sorted by column x and File A (x: 0 - 50),
    File B (x: 10 - 40) and File C (x: 30 - 60) are rewritten, the result is
    File A' (x: 0 - 20), File B' (x: 21 - 40) and File C' (x: 41 - 60).

    There is no file overlap detection: with ``rewrite-all`` every file is
    rewritten, otherwise exactly the files the bin-pack strategy would choose
    are rewrite candidates.
    """

    _VALID_OPTIONS = frozenset([
        RewriteOptions.REWRITE_ALL.key(),
    ])

    def __init__(self, table: Table, bin_pack: Optional[BinPackStrategy] = None):
        super().__init__(table)
        self._bin_pack = bin_pack if bin_pack is not None else BinPackStrategy(table)
        self._requested_sort_order: Optional[SortOrder] = None
        self._config: Optional[SortStrategyConfig] = None

    def name(self) -> str:
        return "SORT"

    def with_sort_order(self, sort_order: SortOrder) -> 'SortStrategy':
        """
        Sets the sort order used when rewriting files, instead of the table's.

        Options have to be applied again afterwards.
        """
        self._requested_sort_order = sort_order
        self._config = None
        return self

    def sort_order(self) -> SortOrder:
        return self.config().sort_order

    def mode(self) -> RewriteMode:
        return self.config().mode

    def config(self) -> SortStrategyConfig:
        if self._config is None:
            raise self._not_configured_error()
        return self._config

    def valid_options(self) -> Set[str]:
        return self._bin_pack.valid_options() | self._VALID_OPTIONS

    def options(self, options: Dict[str, str]) -> 'SortStrategy':
        opts = self._check_valid_options(options)

        try:
            bin_pack_config = self._bin_pack.build_config(opts.without(self._VALID_OPTIONS).to_map())
        except ConfigurationError as e:
            raise self._configuration_error(str(e)) from e

        rewrite_all = self._get_option(opts, RewriteOptions.REWRITE_ALL)

        sort_order = self._requested_sort_order
        if sort_order is None:
            sort_order = self._table.sort_order()

        self._validate_sort_order(sort_order)

        self._bin_pack.configure(bin_pack_config)
        self._config = SortStrategyConfig(
            mode=RewriteMode.REWRITE_ALL if rewrite_all else RewriteMode.DELEGATE,
            sort_order=sort_order,
            bin_pack=bin_pack_config,
        )
        logger.debug(
            "Configured %s strategy for table %s: mode=%s, sort_order=%s",
            self.name(), self._table.name(), self._config.mode.value, sort_order
        )
        return self

    def _validate_sort_order(self, sort_order: Optional[SortOrder]) -> None:
        if sort_order is None or sort_order.is_unsorted():
            raise self._configuration_error(
                f"Can't use {self.name()} when there is no sort order, either define table "
                f"{self._table.name()}'s sort order or set sort order in the action")

        try:
            SortOrder.check_compatibility(sort_order, self._table.schema())
        except ValidationError as e:
            raise self._configuration_error(
                f"Can't use {self.name()} on table {self._table.name()}: {e}") from e

    def select_files_to_rewrite(self, data_files: Iterable[FileScanTask]) -> Iterable[FileScanTask]:
        config = self.config()
        if config.mode == RewriteMode.REWRITE_ALL:
            logger.info("Sort Strategy for table %s set to rewrite all data files", self._table.name())
            return data_files
        return self._bin_pack.select_files_to_rewrite(data_files)

    def plan_file_groups(self, data_files: Iterable[FileScanTask]) -> List[List[FileScanTask]]:
        config = self.config()
        if config.mode == RewriteMode.REWRITE_ALL:
            packer = ListPacker(config.bin_pack.max_group_size, 1, False)
            return packer.pack(data_files, task_length)
        return self._bin_pack.plan_file_groups(data_files)
