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

from dataclasses import dataclass
from typing import List, Tuple

from pyrewrite.scan.file_scan_task import FileScanTask


@dataclass(frozen=True)
class FileGroupInfo:
    """Position of a file group within a rewrite plan."""

    global_index: int
    partition_index: int
    partition: Tuple


class RewriteFileGroup:
    """A set of files that is rewritten as one independent unit of work."""

    def __init__(self, info: FileGroupInfo, tasks: List[FileScanTask]):
        self.info = info
        self.tasks = tasks

    def num_files(self) -> int:
        return len(self.tasks)

    def size_in_bytes(self) -> int:
        return sum(task.length() for task in self.tasks)

    def __repr__(self) -> str:
        return (
            f"RewriteFileGroup(global_index={self.info.global_index}, "
            f"partition_index={self.info.partition_index}, partition={self.info.partition}, "
            f"files_count={self.num_files()}, size_in_bytes={self.size_in_bytes()})"
        )
