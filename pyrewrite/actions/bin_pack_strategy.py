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
import math
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Set

from pyrewrite.actions.rewrite_options import RewriteOptions, TableProperties
from pyrewrite.actions.rewrite_strategy import RewriteStrategy
from pyrewrite.common.memory_size import MemorySize
from pyrewrite.common.options import Options
from pyrewrite.scan.file_scan_task import FileScanTask
from pyrewrite.utils.bin_packing import ListPacker

logger = logging.getLogger(__name__)


def task_length(task: FileScanTask) -> int:
    return task.length()


@dataclass(frozen=True)
class BinPackConfig:
    """Validated size thresholds of a bin-pack rewrite, all sizes in bytes."""

    target_file_size: int
    min_file_size: int
    max_file_size: int
    min_input_files: int
    max_group_size: int

    def is_mis_sized(self, task: FileScanTask) -> bool:
        length = task.length()
        return length < self.min_file_size or length > self.max_file_size


class BinPackStrategy(RewriteStrategy):
    """
    Rewrites files whose size is outside of [min-file-size-bytes, max-file-size-bytes].

    Selected files are packed in input order into groups of at most
    max-file-group-size-bytes. A group is kept when it has at least
    min-input-files files, when it holds more data than the target file size,
    or when it contains a file over the max file size.
    """

    # Extra bytes added to each read split so that a file is not split just below its length
    SPLIT_OVERHEAD = 5 * 1024

    _VALID_OPTIONS = frozenset([
        RewriteOptions.TARGET_FILE_SIZE_BYTES.key(),
        RewriteOptions.MIN_FILE_SIZE_BYTES.key(),
        RewriteOptions.MAX_FILE_SIZE_BYTES.key(),
        RewriteOptions.MIN_INPUT_FILES.key(),
        RewriteOptions.MAX_FILE_GROUP_SIZE_BYTES.key(),
    ])

    def __init__(self, table):
        super().__init__(table)
        self._config: Optional[BinPackConfig] = None

    def name(self) -> str:
        return "BINPACK"

    def valid_options(self) -> Set[str]:
        return set(self._VALID_OPTIONS)

    def config(self) -> BinPackConfig:
        if self._config is None:
            raise self._not_configured_error()
        return self._config

    def options(self, options: Dict[str, str]) -> 'BinPackStrategy':
        self.configure(self.build_config(options))
        return self

    def build_config(self, options: Dict[str, str]) -> BinPackConfig:
        """Parses and validates the options without changing this strategy."""
        opts = self._check_valid_options(options)

        target_file_size = self._get_option(
            opts, RewriteOptions.TARGET_FILE_SIZE_BYTES, self._table_target_file_size()).get_bytes()
        min_file_size = self._get_option(
            opts, RewriteOptions.MIN_FILE_SIZE_BYTES,
            MemorySize(int(target_file_size * RewriteOptions.MIN_FILE_SIZE_DEFAULT_RATIO))).get_bytes()
        max_file_size = self._get_option(
            opts, RewriteOptions.MAX_FILE_SIZE_BYTES,
            MemorySize(int(target_file_size * RewriteOptions.MAX_FILE_SIZE_DEFAULT_RATIO))).get_bytes()
        min_input_files = self._get_option(opts, RewriteOptions.MIN_INPUT_FILES)
        max_group_size = self._get_option(opts, RewriteOptions.MAX_FILE_GROUP_SIZE_BYTES).get_bytes()

        config = BinPackConfig(
            target_file_size=target_file_size,
            min_file_size=min_file_size,
            max_file_size=max_file_size,
            min_input_files=min_input_files,
            max_group_size=max_group_size,
        )
        self._validate(config)
        return config

    def configure(self, config: BinPackConfig) -> 'BinPackStrategy':
        self._validate(config)
        self._config = config
        logger.debug("Configured %s strategy for table %s: %s", self.name(), self._table.name(), config)
        return self

    def _table_target_file_size(self) -> MemorySize:
        table_options = Options(self._table.properties())
        try:
            return table_options.get(TableProperties.WRITE_TARGET_FILE_SIZE_BYTES)
        except ValueError as e:
            raise self._configuration_error(
                f"Invalid table property {TableProperties.WRITE_TARGET_FILE_SIZE_BYTES.key()!r} "
                f"for table {self._table.name()}: {e}") from e

    def _validate(self, config: BinPackConfig) -> None:
        min_key = RewriteOptions.MIN_FILE_SIZE_BYTES.key()
        max_key = RewriteOptions.MAX_FILE_SIZE_BYTES.key()
        target_key = RewriteOptions.TARGET_FILE_SIZE_BYTES.key()

        if config.min_file_size < 0:
            raise self._configuration_error(
                f"Cannot set {min_key} to a negative number, {config.min_file_size} < 0")
        if config.max_file_size <= config.min_file_size:
            raise self._configuration_error(
                f"Cannot set {min_key} greater than or equal to {max_key}, "
                f"{config.min_file_size} >= {config.max_file_size}")
        if config.target_file_size <= config.min_file_size:
            raise self._configuration_error(
                f"Cannot set {target_key} less than or equal to {min_key}, all files written "
                f"will be smaller than the threshold, {config.target_file_size} <= {config.min_file_size}")
        if config.target_file_size >= config.max_file_size:
            raise self._configuration_error(
                f"Cannot set {target_key} greater than or equal to {max_key}, all files written "
                f"will be larger than the threshold, {config.target_file_size} >= {config.max_file_size}")
        if config.min_input_files <= 0:
            raise self._configuration_error(
                f"Cannot set {RewriteOptions.MIN_INPUT_FILES.key()} to less than 1. All values less "
                f"than 1 have the same effect as 1. {config.min_input_files} < 1")
        if config.max_group_size <= 0:
            raise self._configuration_error(
                f"Cannot set {RewriteOptions.MAX_FILE_GROUP_SIZE_BYTES.key()} to less than 1, "
                f"{config.max_group_size} < 1")

    def select_files_to_rewrite(self, data_files: Iterable[FileScanTask]) -> Iterator[FileScanTask]:
        config = self.config()
        return (task for task in data_files if config.is_mis_sized(task))

    def plan_file_groups(self, data_files: Iterable[FileScanTask]) -> List[List[FileScanTask]]:
        config = self.config()
        packer = ListPacker(config.max_group_size, 1, False)
        potential_groups = packer.pack(data_files, task_length)

        groups = [group for group in potential_groups if self._should_rewrite(group, config)]
        logger.debug(
            "%s strategy for table %s kept %d of %d potential file groups",
            self.name(), self._table.name(), len(groups), len(potential_groups)
        )
        return groups

    @staticmethod
    def _should_rewrite(group: List[FileScanTask], config: BinPackConfig) -> bool:
        if len(group) >= config.min_input_files:
            return True
        if sum(task.length() for task in group) > config.target_file_size:
            return True
        return any(task.length() > config.max_file_size for task in group)

    def expected_output_files(self, total_size_in_bytes: int) -> int:
        """
        Number of files a group of the given size should be written to.

        The last file is dropped when it would be smaller than min-file-size-bytes
        and spreading its data over the others keeps them below 110% of the target
        file size (and below the write max file size).
        """
        config = self.config()
        if total_size_in_bytes < config.target_file_size:
            return 1

        with_remainder = math.ceil(total_size_in_bytes / config.target_file_size)
        if total_size_in_bytes % config.target_file_size > config.min_file_size:
            return with_remainder

        without_remainder = total_size_in_bytes // config.target_file_size
        avg_file_size = total_size_in_bytes // without_remainder
        if avg_file_size < min(1.1 * config.target_file_size, self._write_max_file_size(config)):
            return without_remainder
        return with_remainder

    def split_size(self, total_size_in_bytes: int) -> int:
        """Size of the read splits used when rewriting a group of the given size."""
        config = self.config()
        estimated = total_size_in_bytes // self.expected_output_files(total_size_in_bytes) + self.SPLIT_OVERHEAD
        return min(estimated, self._write_max_file_size(config))

    @staticmethod
    def _write_max_file_size(config: BinPackConfig) -> int:
        # Halfway between target and max
        return int(config.target_file_size + (config.max_file_size - config.target_file_size) * 0.5)
