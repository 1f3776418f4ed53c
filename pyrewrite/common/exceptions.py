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

from typing import Optional


class RewriteException(Exception):
    """Base rewrite planning exception"""


class ValidationError(RewriteException, ValueError):
    """A sort order or schema check failed"""


class ConfigurationError(RewriteException, ValueError):
    """
    A rewrite strategy could not be configured.

    Raised eagerly while options are applied, never while files are selected
    or grouped by a configured strategy.
    """

    def __init__(self, message: str, strategy_name: Optional[str] = None,
                 table_name: Optional[str] = None):
        self.strategy_name = strategy_name
        self.table_name = table_name
        super().__init__(message)


class UnknownOptionError(ConfigurationError):
    """An option key is not accepted by the strategy"""

    def __init__(self, key: str, strategy_name: str, table_name: str, valid_options):
        self.key = key
        super().__init__(
            f"Cannot use options {key!r}, they are not supported by the action or the "
            f"{strategy_name} strategy for table {table_name}. "
            f"Valid options: {sorted(valid_options)}",
            strategy_name=strategy_name,
            table_name=table_name,
        )
