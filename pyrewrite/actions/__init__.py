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

# flake8: noqa: F401

from pyrewrite.actions.rewrite_options import RewriteOptions, TableProperties
from pyrewrite.actions.rewrite_strategy import RewriteStrategy
from pyrewrite.actions.bin_pack_strategy import BinPackConfig, BinPackStrategy
from pyrewrite.actions.sort_strategy import RewriteMode, SortStrategy, SortStrategyConfig
from pyrewrite.actions.rewrite_strategy_factory import RewriteStrategyFactory
from pyrewrite.actions.file_group import FileGroupInfo, RewriteFileGroup
from pyrewrite.actions.rewrite_plan_builder import RewritePlan, RewritePlanBuilder

__all__ = [
    'RewriteOptions',
    'TableProperties',
    'RewriteStrategy',
    'BinPackConfig',
    'BinPackStrategy',
    'RewriteMode',
    'SortStrategy',
    'SortStrategyConfig',
    'RewriteStrategyFactory',
    'FileGroupInfo',
    'RewriteFileGroup',
    'RewritePlan',
    'RewritePlanBuilder',
]
