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

from typing import Type, TypeVar, Generic

from .config_option import ConfigOption
from ..memory_size import MemorySize

T = TypeVar('T')


class ConfigOptions:
    """
    ConfigOptions are used to build a ConfigOption. The option is typically built in
    one of the following pattern:

    Examples:
        # boolean option with a default value
        rewrite_all = ConfigOptions.key("rewrite-all").boolean_type().default_value(False)

        # byte size option with a default value
        target = ConfigOptions.key("target-file-size-bytes").memory_type().default_value(
            MemorySize.of_mebi_bytes(512))

        # option with no default value
        target = ConfigOptions.key("target-file-size-bytes").memory_type().no_default_value()
    """

    @staticmethod
    def key(key: str) -> 'OptionBuilder':
        """
        Starts building a new ConfigOption.

        Args:
            key: The key for the config option.

        Returns:
            The builder for the config option with the given key.
        """
        if not key:
            raise ValueError("Key must not be None or empty.")
        return ConfigOptions.OptionBuilder(key)

    class OptionBuilder:
        """
        The option builder is used to create a ConfigOption. It is instantiated via
        ConfigOptions.key(String).
        """

        def __init__(self, key: str):
            self.key = key

        def boolean_type(self) -> 'TypedConfigOptionBuilder[bool]':
            """Defines that the value of the option should be of bool type."""
            return ConfigOptions.TypedConfigOptionBuilder(self.key, bool)

        def int_type(self) -> 'TypedConfigOptionBuilder[int]':
            """Defines that the value of the option should be of int type."""
            return ConfigOptions.TypedConfigOptionBuilder(self.key, int)

        def long_type(self) -> 'TypedConfigOptionBuilder[int]':
            """Defines that the value of the option should be of long (int) type."""
            return ConfigOptions.TypedConfigOptionBuilder(self.key, int)

        def string_type(self) -> 'TypedConfigOptionBuilder[str]':
            """Defines that the value of the option should be of str type."""
            return ConfigOptions.TypedConfigOptionBuilder(self.key, str)

        def memory_type(self) -> 'TypedConfigOptionBuilder[MemorySize]':
            """Defines that the value of the option should be of MemorySize type."""
            return ConfigOptions.TypedConfigOptionBuilder(self.key, MemorySize)

    class TypedConfigOptionBuilder(Generic[T]):
        """
        Builder for ConfigOption with a defined atomic type.
        """

        def __init__(self, key: str, clazz: Type[T]):
            self.key = key
            self.clazz = clazz

        def default_value(self, value: T) -> ConfigOption[T]:
            """Creates a ConfigOption with the given default value."""
            return ConfigOption(
                key=self.key,
                clazz=self.clazz,
                description=ConfigOption.EMPTY_DESCRIPTION,
                default_value=value
            )

        def no_default_value(self) -> ConfigOption[T]:
            """Creates a ConfigOption without a default value."""
            return ConfigOption(
                key=self.key,
                clazz=self.clazz,
                description=ConfigOption.EMPTY_DESCRIPTION,
                default_value=None
            )
