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

"""
Transforms a sort field applies to its source column before ordering.

Only the type checks are needed for planning: a transform is valid for a sort
order when it accepts the type of the column it is applied to.
"""

import re
from dataclasses import dataclass
from typing import Optional

import pyarrow

_PARAMETERIZED = re.compile(r'^(bucket|truncate)\[(\d+)\]$')
_SIMPLE = ('identity', 'year', 'month', 'day', 'hour', 'void')


def _value_type(data_type: pyarrow.DataType) -> pyarrow.DataType:
    if pyarrow.types.is_dictionary(data_type):
        return data_type.value_type
    return data_type


def _is_text(data_type: pyarrow.DataType) -> bool:
    return pyarrow.types.is_string(data_type) or pyarrow.types.is_large_string(data_type)


def _is_bytes(data_type: pyarrow.DataType) -> bool:
    return (pyarrow.types.is_binary(data_type)
            or pyarrow.types.is_large_binary(data_type)
            or pyarrow.types.is_fixed_size_binary(data_type))


@dataclass(frozen=True)
class Transform:
    name: str
    param: Optional[int] = None

    @staticmethod
    def identity() -> 'Transform':
        return Transform('identity')

    @staticmethod
    def bucket(num_buckets: int) -> 'Transform':
        if num_buckets <= 0:
            raise ValueError(f"Invalid number of buckets: {num_buckets} (must be > 0)")
        return Transform('bucket', num_buckets)

    @staticmethod
    def truncate(width: int) -> 'Transform':
        if width <= 0:
            raise ValueError(f"Invalid truncate width: {width} (must be > 0)")
        return Transform('truncate', width)

    @staticmethod
    def parse(text: str) -> 'Transform':
        """Parse a transform from its string form, e.g. ``identity`` or ``bucket[16]``."""
        normalized = text.strip().lower()
        if normalized in _SIMPLE:
            return Transform(normalized)
        match = _PARAMETERIZED.match(normalized)
        if match is None:
            raise ValueError(f"Unknown transform: {text}")
        if match.group(1) == 'bucket':
            return Transform.bucket(int(match.group(2)))
        return Transform.truncate(int(match.group(2)))

    def can_transform(self, data_type: pyarrow.DataType) -> bool:
        t = _value_type(data_type)
        if pyarrow.types.is_nested(t):
            return False
        if self.name in ('identity', 'void'):
            return True
        if self.name == 'bucket':
            return (pyarrow.types.is_integer(t) or pyarrow.types.is_decimal(t)
                    or pyarrow.types.is_date(t) or pyarrow.types.is_time(t)
                    or pyarrow.types.is_timestamp(t) or _is_text(t) or _is_bytes(t))
        if self.name == 'truncate':
            return (pyarrow.types.is_integer(t) or pyarrow.types.is_decimal(t)
                    or _is_text(t) or _is_bytes(t))
        if self.name in ('year', 'month', 'day'):
            return pyarrow.types.is_date(t) or pyarrow.types.is_timestamp(t)
        if self.name == 'hour':
            return pyarrow.types.is_timestamp(t)
        return False

    def __str__(self) -> str:
        if self.param is None:
            return self.name
        return f"{self.name}[{self.param}]"
