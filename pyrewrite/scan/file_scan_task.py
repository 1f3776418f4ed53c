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
from typing import Optional, Tuple


class FileScanTask(ABC):
    """A single data file, or a slice of one, produced by a table scan."""

    @abstractmethod
    def length(self) -> int:
        """Number of bytes this task reads; used as its weight when packing."""

    @abstractmethod
    def file_path(self) -> str:
        """Location of the data file."""

    def partition(self) -> Tuple:
        """Partition values of the data file, empty for unpartitioned tables."""
        return ()


class DataFileScanTask(FileScanTask):
    """
    Scan task over a whole data file or a byte range of it.

    Tasks are compared by identity: two tasks over the same file are still
    distinct units of work.
    """

    def __init__(
        self,
        file_path: str,
        file_size_in_bytes: int,
        record_count: int = 0,
        partition: Tuple = (),
        start: int = 0,
        split_length: Optional[int] = None
    ):
        if file_size_in_bytes < 0:
            raise ValueError(f"File size must not be negative: {file_size_in_bytes}")
        if split_length is not None and (start < 0 or start + split_length > file_size_in_bytes):
            raise ValueError(
                f"Split [{start}, {start + split_length}) is outside of file {file_path} "
                f"of {file_size_in_bytes} bytes"
            )

        self._file_path = file_path
        self.file_size_in_bytes = file_size_in_bytes
        self.record_count = record_count
        self._partition = tuple(partition or ())
        self.start = start
        self.split_length = split_length

    def length(self) -> int:
        if self.split_length is not None:
            return self.split_length
        return self.file_size_in_bytes

    def file_path(self) -> str:
        return self._file_path

    def partition(self) -> Tuple:
        return self._partition

    def __repr__(self) -> str:
        return (
            f"DataFileScanTask(file_path={self._file_path}, length={self.length()}, "
            f"partition={self._partition})"
        )
