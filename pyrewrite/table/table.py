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
from typing import Dict, Optional

import pyarrow

from pyrewrite.schema.sort_order import SortOrder


class Table(ABC):
    """The table metadata a rewrite strategy plans against."""

    @abstractmethod
    def name(self) -> str:
        """Fully qualified table name, used in log and error messages."""

    @abstractmethod
    def schema(self) -> pyarrow.Schema:
        """Current table schema."""

    @abstractmethod
    def sort_order(self) -> SortOrder:
        """Current table sort order, unsorted when the table defines none."""

    @abstractmethod
    def properties(self) -> Dict[str, str]:
        """Table properties."""


class StaticTable(Table):
    """Table backed by metadata the caller already holds in memory."""

    def __init__(
        self,
        name: str,
        schema: pyarrow.Schema,
        sort_order: Optional[SortOrder] = None,
        properties: Optional[Dict[str, str]] = None
    ):
        self._name = name
        self._schema = schema
        self._sort_order = sort_order or SortOrder.unsorted()
        self._properties = dict(properties or {})

    def name(self) -> str:
        return self._name

    def schema(self) -> pyarrow.Schema:
        return self._schema

    def sort_order(self) -> SortOrder:
        return self._sort_order

    def properties(self) -> Dict[str, str]:
        return self._properties

    def __repr__(self) -> str:
        return f"StaticTable(name={self._name}, sort_order={self._sort_order})"
