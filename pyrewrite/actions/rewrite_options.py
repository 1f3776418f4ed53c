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

from pyrewrite.common.memory_size import MemorySize
from pyrewrite.common.options.config_option import ConfigOption
from pyrewrite.common.options.config_options import ConfigOptions


class TableProperties:
    """Table properties a rewrite falls back to."""

    WRITE_TARGET_FILE_SIZE_BYTES: ConfigOption[MemorySize] = (
        ConfigOptions.key("write.target-file-size-bytes")
        .memory_type()
        .default_value(MemorySize.of_mebi_bytes(512))
        .with_description("Target size of data files written to the table.")
    )


class RewriteOptions:
    """Options accepted by the rewrite strategies."""

    MIN_FILE_SIZE_DEFAULT_RATIO: float = 0.75
    MAX_FILE_SIZE_DEFAULT_RATIO: float = 1.80

    TARGET_FILE_SIZE_BYTES: ConfigOption[MemorySize] = (
        ConfigOptions.key("target-file-size-bytes")
        .memory_type()
        .no_default_value()
        .with_description(
            "Target output file size. Defaults to the table's write.target-file-size-bytes.")
    )

    MIN_FILE_SIZE_BYTES: ConfigOption[MemorySize] = (
        ConfigOptions.key("min-file-size-bytes")
        .memory_type()
        .no_default_value()
        .with_description(
            "Files smaller than this are rewritten. Defaults to 75% of the target file size.")
    )

    MAX_FILE_SIZE_BYTES: ConfigOption[MemorySize] = (
        ConfigOptions.key("max-file-size-bytes")
        .memory_type()
        .no_default_value()
        .with_description(
            "Files larger than this are rewritten. Defaults to 180% of the target file size.")
    )

    MIN_INPUT_FILES: ConfigOption[int] = (
        ConfigOptions.key("min-input-files")
        .int_type()
        .default_value(5)
        .with_description(
            "A file group is only rewritten when it has at least this many files, unless "
            "it holds more data than the target file size or contains an over-sized file.")
    )

    MAX_FILE_GROUP_SIZE_BYTES: ConfigOption[MemorySize] = (
        ConfigOptions.key("max-file-group-size-bytes")
        .memory_type()
        .default_value(MemorySize.of_gibi_bytes(100))
        .with_description(
            "Largest amount of data a single file group may hold. Each file group is "
            "rewritten independently.")
    )

    REWRITE_ALL: ConfigOption[bool] = (
        ConfigOptions.key("rewrite-all")
        .boolean_type()
        .default_value(False)
        .with_description(
            "Rewrites all files, regardless of their size. Defaults to false, rewriting "
            "only mis-sized files.")
    )
