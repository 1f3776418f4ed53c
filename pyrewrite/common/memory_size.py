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
MemorySize is a number of bytes, parsed from option values.

If the expression is a pure number, the value is interpreted as bytes.

Supported formats:
- 1b or 1bytes (bytes)
- 1k or 1kb or 1kibibytes (interpreted as kibibytes = 1024 bytes)
- 1m or 1mb or 1mebibytes (interpreted as mebibytes = 1024 kibibytes)
- 1g or 1gb or 1gibibytes (interpreted as gibibytes = 1024 mebibytes)
- 1t or 1tb or 1tebibytes (interpreted as tebibytes = 1024 gibibytes)
"""

import re

LONG_MAX_VALUE = 2 ** 63 - 1


class MemorySize:
    """A number of bytes, viewable in different units."""

    ZERO = None  # Will be set after class definition
    MAX_VALUE = None  # Will be set after class definition

    def __init__(self, bytes: int):
        if bytes < 0:
            raise ValueError("bytes must be >= 0")
        self.bytes = bytes

    @staticmethod
    def of_mebi_bytes(mebi_bytes: int) -> 'MemorySize':
        return MemorySize(mebi_bytes << 20)

    @staticmethod
    def of_gibi_bytes(gibi_bytes: int) -> 'MemorySize':
        return MemorySize(gibi_bytes << 30)

    def get_bytes(self) -> int:
        return self.bytes

    def get_mebi_bytes(self) -> int:
        return self.bytes >> 20

    def __eq__(self, other) -> bool:
        if not isinstance(other, MemorySize):
            return False
        return self.bytes == other.bytes

    def __hash__(self) -> int:
        return hash(self.bytes)

    def __str__(self) -> str:
        if self.bytes == 0:
            return "0 bytes"

        for unit in [MemoryUnit.TERA_BYTES, MemoryUnit.GIGA_BYTES, MemoryUnit.MEGA_BYTES,
                     MemoryUnit.KILO_BYTES]:
            if self.bytes % unit.multiplier == 0:
                return f"{self.bytes // unit.multiplier} {unit.units[1]}"

        return f"{self.bytes} bytes"

    def __repr__(self) -> str:
        return f"MemorySize({self.bytes})"

    def __lt__(self, other: 'MemorySize') -> bool:
        return self.bytes < other.bytes

    def __le__(self, other: 'MemorySize') -> bool:
        return self.bytes <= other.bytes

    @staticmethod
    def parse(text: str) -> 'MemorySize':
        """
        Parses the given string as a MemorySize.

        Raises:
            ValueError: If the expression cannot be parsed.
        """
        return MemorySize(MemorySize.parse_bytes(text))

    @staticmethod
    def parse_bytes(text: str) -> int:
        """
        Parses the given string as bytes. The supported expressions are listed
        in the module documentation.

        Raises:
            ValueError: If the expression cannot be parsed or overflows a 64bit long.
        """
        if text is None:
            raise ValueError("text cannot be None")

        trimmed = text.strip()
        if not trimmed:
            raise ValueError("argument is an empty- or whitespace-only string")

        match = re.match(r'^(\d+)\s*([a-zA-Z]*)$', trimmed)
        if not match:
            raise ValueError(f"cannot parse memory size: '{text}'")

        value = int(match.group(1))
        unit_str = match.group(2).lower() if match.group(2) else ""

        result = value * MemoryUnit.parse_unit(unit_str).multiplier
        if result > LONG_MAX_VALUE:
            raise ValueError(
                f"The value '{text}' cannot be represented as 64bit number of bytes (numeric overflow).")

        return result


class MemoryUnit:
    """Memory units accepted when parsing sizes from options."""

    def __init__(self, units: list, multiplier: int):
        self.units = units
        self.multiplier = multiplier

    BYTES = None  # Will be set after class definition
    KILO_BYTES = None
    MEGA_BYTES = None
    GIGA_BYTES = None
    TERA_BYTES = None

    @staticmethod
    def all_units() -> list:
        return [MemoryUnit.BYTES, MemoryUnit.KILO_BYTES, MemoryUnit.MEGA_BYTES,
                MemoryUnit.GIGA_BYTES, MemoryUnit.TERA_BYTES]

    @staticmethod
    def parse_unit(unit_str: str) -> 'MemoryUnit':
        """
        Parse a unit string, defaulting to BYTES when empty.

        Raises:
            ValueError: If the unit is not recognized
        """
        unit_str = unit_str.strip().lower()

        if not unit_str:
            return MemoryUnit.BYTES

        for unit in MemoryUnit.all_units():
            if unit_str in unit.units:
                return unit

        recognized = " / ".join("(" + " | ".join(unit.units) + ")" for unit in MemoryUnit.all_units())
        raise ValueError(
            f"Memory size unit '{unit_str}' does not match any of the recognized units: {recognized}")


MemoryUnit.BYTES = MemoryUnit(["b", "bytes"], 1)
MemoryUnit.KILO_BYTES = MemoryUnit(["k", "kb", "kibibytes"], 1024)
MemoryUnit.MEGA_BYTES = MemoryUnit(["m", "mb", "mebibytes"], 1024 * 1024)
MemoryUnit.GIGA_BYTES = MemoryUnit(["g", "gb", "gibibytes"], 1024 * 1024 * 1024)
MemoryUnit.TERA_BYTES = MemoryUnit(["t", "tb", "tebibytes"], 1024 * 1024 * 1024 * 1024)

MemorySize.ZERO = MemorySize(0)
MemorySize.MAX_VALUE = MemorySize(LONG_MAX_VALUE)
