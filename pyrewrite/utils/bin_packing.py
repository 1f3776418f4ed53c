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
Greedy bin packing with a bounded lookback window.

Items are consumed in input order, in a single forward pass. Up to ``lookback``
bins stay open; an item goes into the most recently touched open bin that has
room for it, otherwise into a new bin. Opening a bin beyond the lookback closes
one of the open bins (the least recently touched one, or the heaviest one when
``largest_bin_first`` is set) and emits it. A closed bin is never reopened.

An item heavier than the target weight ends up alone in its bin: no bin that is
already over the target accepts anything else.
"""

import logging
from collections import deque
from typing import Callable, Deque, Generic, Iterable, Iterator, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Bin(Generic[T]):

    def __init__(self, target_weight: int):
        self.target_weight = target_weight
        self.items: List[T] = []
        self.weight = 0

    def can_add(self, weight: int) -> bool:
        return self.weight + weight <= self.target_weight

    def add(self, item: T, weight: int) -> None:
        self.items.append(item)
        self.weight += weight

    def __repr__(self) -> str:
        return f"Bin(items={len(self.items)}, weight={self.weight})"


class PackingIterable(Generic[T]):
    """
    Lazily packs items into bins.

    Every iteration starts a fresh pass over ``items``; bins are yielded as
    soon as they are closed, so the input is never materialized as a whole.
    """

    def __init__(
        self,
        items: Iterable[T],
        target_weight: int,
        lookback: int,
        weight_func: Callable[[T], int],
        largest_bin_first: bool = False
    ):
        if target_weight <= 0:
            raise ValueError(f"Target weight must be positive: {target_weight}")
        if lookback < 1:
            raise ValueError(f"Bin look-back size must be greater than 0: {lookback}")

        self.items = items
        self.target_weight = target_weight
        self.lookback = lookback
        self.weight_func = weight_func
        self.largest_bin_first = largest_bin_first

    def __iter__(self) -> Iterator[List[T]]:
        # Ordered from least to most recently touched
        bins: Deque[Bin[T]] = deque()
        item_count = 0
        bin_count = 0

        for item in self.items:
            item_count += 1
            weight = self.weight_func(item)
            bin_ = self._find_bin(bins, weight)

            if bin_ is not None:
                bins.remove(bin_)
                bin_.add(item, weight)
                bins.append(bin_)
                continue

            bin_ = Bin(self.target_weight)
            bin_.add(item, weight)
            bins.append(bin_)

            if len(bins) > self.lookback:
                bin_count += 1
                yield self._remove_bin(bins).items

        while bins:
            bin_count += 1
            yield bins.popleft().items

        logger.debug(
            "Packed %d items into %d bins (target weight: %d, lookback: %d)",
            item_count, bin_count, self.target_weight, self.lookback
        )

    @staticmethod
    def _find_bin(bins: Deque[Bin[T]], weight: int) -> Optional[Bin[T]]:
        for bin_ in reversed(bins):
            if bin_.can_add(weight):
                return bin_
        return None

    def _remove_bin(self, bins: Deque[Bin[T]]) -> Bin[T]:
        if self.largest_bin_first:
            largest = max(bins, key=lambda b: b.weight)
            bins.remove(largest)
            return largest
        return bins.popleft()


class ListPacker(Generic[T]):
    """Packs items into a list of bins."""

    def __init__(self, target_weight: int, lookback: int, largest_bin_first: bool = False):
        self.target_weight = target_weight
        self.lookback = lookback
        self.largest_bin_first = largest_bin_first

    def pack(self, items: Iterable[T], weight_func: Callable[[T], int]) -> List[List[T]]:
        return list(PackingIterable(
            items, self.target_weight, self.lookback, weight_func, self.largest_bin_first))

    def pack_end(self, items: Sequence[T], weight_func: Callable[[T], int]) -> List[List[T]]:
        """
        Pack starting from the end of the items, so that a partially filled
        bin ends up first. Items keep their input order inside each bin.
        """
        packed = PackingIterable(
            list(reversed(items)), self.target_weight, self.lookback, weight_func, self.largest_bin_first)
        return [list(reversed(bin_items)) for bin_items in reversed(list(packed))]
