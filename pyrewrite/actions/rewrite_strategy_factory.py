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
from typing import Optional

from pyrewrite.actions.bin_pack_strategy import BinPackStrategy
from pyrewrite.actions.rewrite_strategy import RewriteStrategy
from pyrewrite.actions.sort_strategy import SortStrategy
from pyrewrite.common.exceptions import ConfigurationError
from pyrewrite.schema.sort_order import SortOrder
from pyrewrite.table.table import Table

logger = logging.getLogger(__name__)


class RewriteStrategyFactory:
    """Factory for creating rewrite strategies."""

    BINPACK = "binpack"
    SORT = "sort"

    @staticmethod
    def create_strategy(
        strategy_name: str,
        table: Table,
        sort_order: Optional[SortOrder] = None
    ) -> RewriteStrategy:
        """
        Create an unconfigured rewrite strategy by name.

        Args:
            strategy_name: Strategy name ('binpack' or 'sort')
            table: Table the strategy plans for
            sort_order: Sort order for the sort strategy, the table's when None

        Returns:
            RewriteStrategy instance

        Raises:
            ConfigurationError: If the strategy name is unknown, or a sort order
                is given to a strategy that does not sort
        """
        normalized = strategy_name.lower().strip()

        if normalized == RewriteStrategyFactory.BINPACK:
            if sort_order is not None:
                raise ConfigurationError(
                    f"Cannot set a sort order for the BINPACK strategy of table {table.name()}",
                    strategy_name="BINPACK", table_name=table.name())
            logger.debug("Creating BinPackStrategy for table %s", table.name())
            return BinPackStrategy(table)
        elif normalized == RewriteStrategyFactory.SORT:
            logger.debug("Creating SortStrategy for table %s", table.name())
            strategy = SortStrategy(table)
            if sort_order is not None:
                strategy.with_sort_order(sort_order)
            return strategy
        else:
            raise ConfigurationError(
                f"Unknown rewrite strategy: {strategy_name}", table_name=table.name())
