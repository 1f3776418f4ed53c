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

import unittest

from parameterized import parameterized

from pyrewrite.actions.rewrite_options import RewriteOptions, TableProperties
from pyrewrite.common.memory_size import MemorySize
from pyrewrite.common.options import ConfigOptions, Options, OptionsUtils


class TestMemorySize(unittest.TestCase):
    """Test cases for MemorySize parsing."""

    @parameterized.expand([
        ("1234", 1234),
        ("100 bytes", 100),
        ("1k", 1024),
        ("2kb", 2048),
        ("512mb", 512 * 1024 * 1024),
        ("1G", 1024 * 1024 * 1024),
        ("3 gibibytes", 3 * 1024 * 1024 * 1024),
        ("1t", 1024 ** 4),
    ])
    def test_parse(self, text, expected):
        """Test parsing of supported expressions."""
        self.assertEqual(MemorySize.parse_bytes(text), expected)

    @parameterized.expand([
        ("",),
        ("   ",),
        ("-1",),
        ("1.5mb",),
        ("12 parsecs",),
        ("99999999999t",),
    ])
    def test_parse_invalid(self, text):
        """Test that invalid expressions are rejected."""
        with self.assertRaises(ValueError):
            MemorySize.parse(text)

    def test_str(self):
        """Test the string form uses the largest exact unit."""
        self.assertEqual(str(MemorySize.of_mebi_bytes(512)), "512 mb")
        self.assertEqual(str(MemorySize(1000)), "1000 bytes")
        self.assertEqual(str(MemorySize.ZERO), "0 bytes")


class TestOptions(unittest.TestCase):
    """Test cases for Options and OptionsUtils."""

    def test_boolean_conversion(self):
        """Test boolean option values."""
        for value in ("true", "TRUE", " yes ", "on", "1"):
            self.assertTrue(OptionsUtils.convert_value(value, bool))
        for value in ("false", "No", "off", "0"):
            self.assertFalse(OptionsUtils.convert_value(value, bool))
        with self.assertRaises(ValueError):
            OptionsUtils.convert_value("maybe", bool)

    def test_int_conversion(self):
        """Test integer option values."""
        self.assertEqual(OptionsUtils.convert_value(" 7 ", int), 7)
        with self.assertRaises(ValueError):
            OptionsUtils.convert_value("seven", int)
        with self.assertRaises(ValueError):
            OptionsUtils.convert_value(True, int)

    def test_memory_size_conversion(self):
        """Test byte size option values."""
        self.assertEqual(OptionsUtils.convert_value("1kb", MemorySize), MemorySize(1024))
        self.assertEqual(OptionsUtils.convert_value(10, MemorySize), MemorySize(10))
        self.assertEqual(OptionsUtils.convert_to_string(MemorySize(10)), "10")

    def test_get_with_defaults(self):
        """Test that absent keys fall back to the given or declared default."""
        options = Options({"rewrite-all": "true"})
        self.assertTrue(options.get(RewriteOptions.REWRITE_ALL))
        self.assertEqual(options.get(RewriteOptions.MIN_INPUT_FILES), 5)
        self.assertEqual(options.get(RewriteOptions.MIN_INPUT_FILES, 3), 3)
        self.assertIsNone(options.get(RewriteOptions.TARGET_FILE_SIZE_BYTES))
        self.assertEqual(
            Options.from_none().get(TableProperties.WRITE_TARGET_FILE_SIZE_BYTES),
            MemorySize.of_mebi_bytes(512))

    def test_set_and_without(self):
        """Test setting options and removing keys."""
        options = Options.from_none()
        options.set(RewriteOptions.REWRITE_ALL, True)
        options.set(RewriteOptions.MIN_INPUT_FILES, 2)
        self.assertEqual(options.to_map(), {"rewrite-all": "true", "min-input-files": "2"})

        without = options.without(["rewrite-all"])
        self.assertEqual(without.keys(), {"min-input-files"})
        self.assertTrue(options.contains(RewriteOptions.REWRITE_ALL))

    def test_config_option(self):
        """Test building config options."""
        option = ConfigOptions.key("a.b").int_type().default_value(3).with_description("desc")
        self.assertEqual(option.key(), "a.b")
        self.assertEqual(option.default_value(), 3)
        self.assertEqual(option.description().text, "desc")
        self.assertFalse(ConfigOptions.key("c").string_type().no_default_value().has_default_value())
        with self.assertRaises(ValueError):
            ConfigOptions.key("")


if __name__ == '__main__':
    unittest.main()
