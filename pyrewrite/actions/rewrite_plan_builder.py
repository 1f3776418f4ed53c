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
from collections import OrderedDict
from typing import Dict, Iterable, List, Optional, Tuple

from pyrewrite.actions.file_group import FileGroupInfo, RewriteFileGroup
from pyrewrite.actions.rewrite_strategy import RewriteStrategy
from pyrewrite.actions.rewrite_strategy_factory import RewriteStrategyFactory
from pyrewrite.schema.sort_order import SortOrder
from pyrewrite.scan.file_scan_task import FileScanTask
from pyrewrite.table.table import Table

logger = logging.getLogger(__name__)


class RewritePlan:
    """The file groups chosen for rewriting, in planning order."""

    def __init__(self, strategy_name: str, file_groups: List[RewriteFileGroup]):
        self.strategy_name = strategy_name
        self.file_groups = file_groups

    def is_empty(self) -> bool:
        return not self.file_groups

    def total_group_count(self) -> int:
        return len(self.file_groups)

    def group_count_by_partition(self) -> Dict[Tuple, int]:
        counts: Dict[Tuple, int] = OrderedDict()
        for group in self.file_groups:
            counts[group.info.partition] = counts.get(group.info.partition, 0) + 1
        return counts

    def total_size_in_bytes(self) -> int:
        return sum(group.size_in_bytes() for group in self.file_groups)

    def __repr__(self) -> str:
        return (
            f"RewritePlan(strategy={self.strategy_name}, groups={self.total_group_count()}, "
            f"size_in_bytes={self.total_size_in_bytes()})"
        )


class RewritePlanBuilder:
    """
    Builder for configuring a rewrite strategy and planning file groups with it.

    Example:
        >>> plan = (RewritePlanBuilder(table)
        ...         .with_sort_order(SortOrder.builder().asc('id').build())
        ...         .with_options({'rewrite-all': 'true'})
        ...         .plan(tasks))
    """

    def __init__(self, table: Table):
        self.table = table
        self._strategy = RewriteStrategyFactory.BINPACK
        self._sort_order: Optional[SortOrder] = None
        self._options: Dict[str, str] = {}

    def with_strategy(self, strategy: str) -> 'RewritePlanBuilder':
        """
        Set the rewrite strategy, either 'binpack' (default) or 'sort'.
        """
        if not strategy or not isinstance(strategy, str):
            raise ValueError("Strategy must be a non-empty string")

        self._strategy = strategy.lower().strip()
        logger.debug("Set rewrite strategy to: %s", self._strategy)
        return self

    def with_sort_order(self, sort_order: SortOrder) -> 'RewritePlanBuilder':
        """
        Sort by the given order instead of the table's. Switches to the sort strategy.
        """
        if not isinstance(sort_order, SortOrder):
            raise TypeError(f"Sort order must be a SortOrder, got {type(sort_order)}")

        self._sort_order = sort_order
        self._strategy = RewriteStrategyFactory.SORT
        logger.debug("Set sort order for rewrite: %s", sort_order)
        return self

    def with_options(self, options: Dict[str, str]) -> 'RewritePlanBuilder':
        """
        Add strategy options, e.g. 'rewrite-all' or 'max-file-group-size-bytes'.
        """
        if not options:
            return self

        if not isinstance(options, dict):
            raise TypeError(f"Options must be a dict, got {type(options)}")

        self._options.update(options)
        logger.debug("Added options for rewrite: %s", options)
        return self

    def build_strategy(self) -> RewriteStrategy:
        """
        Create and configure the strategy.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        strategy = RewriteStrategyFactory.create_strategy(self._strategy, self.table, self._sort_order)
        return strategy.options(dict(self._options))

    def plan(self, data_files: Iterable[FileScanTask]) -> RewritePlan:
        """
        Select and group files of each partition separately.

        Args:
            data_files: All candidate files of the table

        Returns:
            RewritePlan with groups numbered globally and per partition

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        strategy = self.build_strategy()

        files_by_partition: Dict[Tuple, List[FileScanTask]] = OrderedDict()
        for task in data_files:
            files_by_partition.setdefault(task.partition(), []).append(task)

        file_groups: List[RewriteFileGroup] = []
        for partition, tasks in files_by_partition.items():
            selected = strategy.select_files_to_rewrite(tasks)
            groups = strategy.plan_file_groups(selected)
            if not groups:
                logger.debug("No file groups to rewrite in partition %s", partition)
                continue

            for partition_index, group in enumerate(groups, start=1):
                info = FileGroupInfo(len(file_groups) + 1, partition_index, partition)
                file_groups.append(RewriteFileGroup(info, group))

            logger.debug(
                "Planned %d file groups out of %d files in partition %s",
                len(groups), len(tasks), partition
            )

        plan = RewritePlan(strategy.name(), file_groups)
        logger.info(
            "Planned %d file groups (%d bytes) for table %s with %s strategy",
            plan.total_group_count(), plan.total_size_in_bytes(), self.table.name(), strategy.name()
        )
        return plan

    def __repr__(self) -> str:
        return (
            f"RewritePlanBuilder(strategy={self._strategy}, "
            f"sort_order={self._sort_order}, options={self._options})"
        )
