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

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

import pyarrow

from pyrewrite.common.exceptions import ValidationError
from pyrewrite.schema.transforms import Transform


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class NullOrder(str, Enum):
    NULLS_FIRST = "nulls-first"
    NULLS_LAST = "nulls-last"

    @staticmethod
    def default_for(direction: SortDirection) -> 'NullOrder':
        return NullOrder.NULLS_FIRST if direction == SortDirection.ASC else NullOrder.NULLS_LAST


@dataclass(frozen=True)
class SortField:
    """One sort key: a source column, the transform applied to it, and its ordering."""

    source_name: str
    transform: Transform = field(default_factory=Transform.identity)
    direction: SortDirection = SortDirection.ASC
    null_order: NullOrder = NullOrder.NULLS_FIRST

    def __str__(self) -> str:
        return f"{self.transform}({self.source_name}) {self.direction.value} {self.null_order.value}"


@dataclass(frozen=True)
class SortOrder:
    """
    An ordered sequence of sort keys attached to a table or given to a rewrite.

    The unsorted order has id 0 and no fields.
    """

    order_id: int = 0
    fields: Tuple[SortField, ...] = ()

    @staticmethod
    def unsorted() -> 'SortOrder':
        return _UNSORTED_ORDER

    @staticmethod
    def builder() -> 'SortOrderBuilder':
        return SortOrderBuilder()

    def is_unsorted(self) -> bool:
        return len(self.fields) == 0

    def is_sorted(self) -> bool:
        return not self.is_unsorted()

    def source_names(self) -> List[str]:
        return [f.source_name for f in self.fields]

    def __str__(self) -> str:
        if self.is_unsorted():
            return "unsorted"
        return f"[{self.order_id}: " + ", ".join(str(f) for f in self.fields) + "]"

    @staticmethod
    def check_compatibility(sort_order: 'SortOrder', schema: pyarrow.Schema) -> None:
        """
        Check that every sort field resolves against the schema and that its
        transform accepts the column type.

        Raises:
            ValidationError: Listing every field that is incompatible
        """
        problems = []
        for sort_field in sort_order.fields:
            source_type = find_type(schema, sort_field.source_name)
            if source_type is None:
                problems.append(f"Cannot find source column for sort field: {sort_field}")
            elif pyarrow.types.is_nested(source_type):
                problems.append(f"Cannot sort by non-primitive source field: {source_type}")
            elif not sort_field.transform.can_transform(source_type):
                problems.append(
                    f"Invalid source type {source_type} for transform: {sort_field.transform}")

        if problems:
            raise ValidationError(
                f"Sort order {sort_order} is not compatible with schema: " + "; ".join(problems))


_UNSORTED_ORDER = SortOrder(0, ())


def find_type(schema: pyarrow.Schema, name: str) -> Optional[pyarrow.DataType]:
    """
    Resolve a column by name; dotted names descend into struct columns.

    Returns None when the name is missing or ambiguous.
    """
    if schema.get_field_index(name) >= 0:
        return schema.field(name).type

    parts = name.split('.')
    index = schema.get_field_index(parts[0])
    if index < 0:
        return None

    current = schema.field(index).type
    for part in parts[1:]:
        if not pyarrow.types.is_struct(current):
            return None
        child_index = current.get_field_index(part)
        if child_index < 0:
            return None
        current = current.field(child_index).type
    return current


class SortOrderBuilder:
    """Builder for SortOrder objects."""

    def __init__(self):
        self._fields: List[SortField] = []
        self._order_id: Optional[int] = None

    def with_order_id(self, order_id: int) -> 'SortOrderBuilder':
        self._order_id = order_id
        return self

    def asc(self, name: str, null_order: Optional[NullOrder] = None) -> 'SortOrderBuilder':
        return self.sort_by(name, Transform.identity(), SortDirection.ASC, null_order)

    def desc(self, name: str, null_order: Optional[NullOrder] = None) -> 'SortOrderBuilder':
        return self.sort_by(name, Transform.identity(), SortDirection.DESC, null_order)

    def sort_by(
        self,
        name: str,
        transform: Union[Transform, str],
        direction: SortDirection = SortDirection.ASC,
        null_order: Optional[NullOrder] = None
    ) -> 'SortOrderBuilder':
        if not name:
            raise ValueError("Sort field name must not be empty")
        if isinstance(transform, str):
            transform = Transform.parse(transform)
        direction = SortDirection(direction)
        null_order = NullOrder(null_order) if null_order is not None else NullOrder.default_for(direction)
        self._fields.append(SortField(name, transform, direction, null_order))
        return self

    def build(self) -> SortOrder:
        if not self._fields:
            if self._order_id not in (None, 0):
                raise ValueError(f"Unsorted order ID must be 0, got {self._order_id}")
            return SortOrder.unsorted()

        order_id = 1 if self._order_id is None else self._order_id
        if order_id == 0:
            raise ValueError("Sort order ID 0 is reserved for unsorted order")
        return SortOrder(order_id, tuple(self._fields))
