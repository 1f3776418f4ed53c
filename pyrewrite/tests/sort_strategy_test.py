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
from typing import List, Optional

import pyarrow as pa
from parameterized import parameterized

from pyrewrite.actions import BinPackStrategy, RewriteMode, SortStrategy
from pyrewrite.common.exceptions import ConfigurationError
from pyrewrite.scan import DataFileScanTask
from pyrewrite.schema import SortOrder
from pyrewrite.table import StaticTable

SIZE_OPTIONS = {
    'target-file-size-bytes': '100',
    'min-file-size-bytes': '75',
    'max-file-size-bytes': '180',
    'min-input-files': '2',
}


def create_table(sort_order: Optional[SortOrder] = None) -> StaticTable:
    schema = pa.schema([
        ('id', pa.int64()),
        ('ts', pa.timestamp('us')),
        ('category', pa.string()),
        ('tags', pa.list_(pa.string())),
    ])
    return StaticTable('db.events', schema, sort_order=sort_order)


def create_tasks(*sizes: int) -> List[DataFileScanTask]:
    return [DataFileScanTask(f"data/file-{i}.parquet", size) for i, size in enumerate(sizes)]


def lengths(groups) -> List[List[int]]:
    return [[task.length() for task in group] for group in groups]


class TestSortStrategyOptions(unittest.TestCase):
    """Test cases for configuring SortStrategy."""

    def setUp(self):
        """Set up test fixtures."""
        self.table_order = SortOrder.builder().asc('id').build()
        self.table = create_table(self.table_order)

    def test_name(self):
        """Test that the sort strategy is named apart from bin-pack."""
        self.assertEqual(SortStrategy(self.table).name(), "SORT")

    def test_valid_options(self):
        """Test that valid options include the bin-pack options."""
        strategy = SortStrategy(self.table)
        self.assertEqual(
            strategy.valid_options(),
            BinPackStrategy(self.table).valid_options() | {'rewrite-all'})

    def test_rewrite_all_defaults_to_false(self):
        """Test that the delegate mode is the default."""
        strategy = SortStrategy(self.table).options({})
        self.assertEqual(strategy.mode(), RewriteMode.DELEGATE)

    @parameterized.expand([
        ("true", RewriteMode.REWRITE_ALL),
        ("TRUE", RewriteMode.REWRITE_ALL),
        ("false", RewriteMode.DELEGATE),
    ])
    def test_rewrite_all_option(self, value, expected):
        """Test that rewrite-all selects the mode."""
        strategy = SortStrategy(self.table).options({'rewrite-all': value})
        self.assertEqual(strategy.mode(), expected)

    def test_unknown_option(self):
        """Test that an unknown key fails before any planning happens."""
        strategy = SortStrategy(self.table)
        with self.assertRaises(ConfigurationError) as context:
            strategy.options({'foo': 'bar'})
        self.assertIn('foo', str(context.exception))
        self.assertEqual(context.exception.strategy_name, 'SORT')
        self.assertEqual(context.exception.table_name, 'db.events')

        with self.assertRaises(ConfigurationError):
            strategy.select_files_to_rewrite(create_tasks(10))

    def test_invalid_rewrite_all_value(self):
        """Test that an unparsable boolean fails configuration."""
        with self.assertRaises(ConfigurationError):
            SortStrategy(self.table).options({'rewrite-all': 'maybe'})

    def test_invalid_size_options_reported_for_sort(self):
        """Test that bin-pack validation errors name the sort strategy."""
        with self.assertRaises(ConfigurationError) as context:
            SortStrategy(self.table).options({'min-input-files': '0'})
        self.assertEqual(context.exception.strategy_name, 'SORT')
        self.assertIn('min-input-files', str(context.exception))

    def test_defaults_to_table_sort_order(self):
        """Test that the table's sort order is used when none is given."""
        strategy = SortStrategy(self.table).options({})
        self.assertEqual(strategy.sort_order(), self.table_order)

    def test_explicit_sort_order(self):
        """Test that an explicit sort order replaces the table's."""
        order = SortOrder.builder().desc('ts').asc('category').build()
        strategy = SortStrategy(self.table).with_sort_order(order).options({})
        self.assertEqual(strategy.sort_order(), order)

    def test_missing_sort_order(self):
        """Test that a table without sort order needs an explicit one."""
        with self.assertRaises(ConfigurationError) as context:
            SortStrategy(create_table()).options({})
        self.assertIn("no sort order", str(context.exception))
        self.assertIn("db.events", str(context.exception))
        self.assertEqual(context.exception.strategy_name, 'SORT')

    def test_explicit_unsorted_order(self):
        """Test that an explicit unsorted order is rejected."""
        strategy = SortStrategy(self.table).with_sort_order(SortOrder.unsorted())
        with self.assertRaises(ConfigurationError):
            strategy.options({})

    @parameterized.expand([
        ("missing_column", SortOrder.builder().asc('missing').build()),
        ("nested_column", SortOrder.builder().asc('tags').build()),
        ("invalid_transform", SortOrder.builder().sort_by('category', 'hour').build()),
    ])
    def test_incompatible_sort_order(self, _name, order):
        """Test that sort orders not matching the schema are rejected."""
        with self.assertRaises(ConfigurationError) as context:
            SortStrategy(self.table).with_sort_order(order).options({})
        self.assertEqual(context.exception.table_name, 'db.events')

    def test_incompatible_table_sort_order(self):
        """Test that the table's own sort order is validated too."""
        table = create_table(SortOrder.builder().asc('dropped_column').build())
        with self.assertRaises(ConfigurationError):
            SortStrategy(table).options({'rewrite-all': 'true'})

    def test_options_idempotent(self):
        """Test that applying the same options twice gives the same configuration."""
        options = dict(SIZE_OPTIONS, **{'rewrite-all': 'true'})
        strategy = SortStrategy(self.table).options(options)
        first = strategy.config()
        strategy.options(options)
        self.assertEqual(strategy.config(), first)

        tasks = create_tasks(10, 20, 15)
        self.assertEqual(
            lengths(strategy.plan_file_groups(tasks)),
            lengths(SortStrategy(self.table).options(options).plan_file_groups(tasks)))

    def test_failed_options_keep_previous_configuration(self):
        """Test that configuration is all or nothing."""
        strategy = SortStrategy(self.table).options({'rewrite-all': 'true'})
        with self.assertRaises(ConfigurationError):
            strategy.options({'foo': 'bar'})
        with self.assertRaises(ConfigurationError):
            strategy.options({'rewrite-all': 'false', 'min-input-files': '0'})
        self.assertEqual(strategy.mode(), RewriteMode.REWRITE_ALL)

    def test_planning_requires_configuration(self):
        """Test that planning without options is a configuration error."""
        strategy = SortStrategy(self.table)
        with self.assertRaises(ConfigurationError):
            strategy.select_files_to_rewrite(create_tasks(10))
        with self.assertRaises(ConfigurationError):
            strategy.plan_file_groups(create_tasks(10))

    def test_changing_sort_order_requires_new_options(self):
        """Test that setting a sort order discards the previous configuration."""
        strategy = SortStrategy(self.table).options({})
        strategy.with_sort_order(SortOrder.builder().asc('ts').build())
        with self.assertRaises(ConfigurationError):
            strategy.plan_file_groups(create_tasks(10))


class TestSortStrategyRewriteAll(unittest.TestCase):
    """Test cases for SortStrategy with rewrite-all enabled."""

    def setUp(self):
        """Set up test fixtures."""
        table = create_table(SortOrder.builder().asc('id').build())
        self.strategy = SortStrategy(table).options(
            dict(SIZE_OPTIONS, **{'rewrite-all': 'true', 'max-file-group-size-bytes': '25'}))

    def test_select_returns_candidates_unchanged(self):
        """Test that every candidate is selected, as the same iterable."""
        tasks = create_tasks(1, 100, 500)
        self.assertIs(self.strategy.select_files_to_rewrite(tasks), tasks)

        empty = []
        self.assertIs(self.strategy.select_files_to_rewrite(empty), empty)

    def test_select_does_not_consume_lazy_candidates(self):
        """Test that selection is a pass-through for lazy inputs."""
        consumed = []

        def candidates():
            for task in create_tasks(10, 20):
                consumed.append(task)
                yield task

        generator = candidates()
        selected = self.strategy.select_files_to_rewrite(generator)
        self.assertIs(selected, generator)
        self.assertEqual(consumed, [])
        self.assertEqual([t.length() for t in selected], [10, 20])

    def test_select_logs_rewrite_all(self):
        """Test that selecting every file is logged with the table name."""
        with self.assertLogs('pyrewrite.actions.sort_strategy', level='INFO') as logs:
            self.strategy.select_files_to_rewrite(create_tasks(10))
        self.assertIn('db.events', logs.output[0])

    def test_plan_sequential_packing(self):
        """Test that files are packed in order with a single open group."""
        groups = self.strategy.plan_file_groups(create_tasks(10, 20, 15))
        self.assertEqual(lengths(groups), [[10], [20], [15]])

    def test_plan_does_not_filter_groups(self):
        """Test that small groups are kept, unlike bin-pack planning."""
        groups = self.strategy.plan_file_groups(create_tasks(5, 5, 5, 90))
        self.assertEqual(lengths(groups), [[5, 5, 5], [90]])

    def test_plan_respects_group_size(self):
        """Test that every group stays within the max group size unless it is a single file."""
        groups = self.strategy.plan_file_groups(create_tasks(*[(i * 7) % 23 + 1 for i in range(100)]))
        self.assertEqual(sum(len(group) for group in groups), 100)
        for group in groups:
            if len(group) > 1:
                self.assertLessEqual(sum(t.length() for t in group), 25)

    def test_plan_empty(self):
        """Test planning no files."""
        self.assertEqual(self.strategy.plan_file_groups([]), [])

    def test_select_then_plan(self):
        """Test selection and planning together on a lazy input."""
        tasks = create_tasks(10, 20, 15)
        selected = self.strategy.select_files_to_rewrite(iter(tasks))
        groups = self.strategy.plan_file_groups(selected)
        self.assertEqual([task for group in groups for task in group], tasks)


class TestSortStrategyDelegate(unittest.TestCase):
    """Test cases for SortStrategy delegating to bin-pack."""

    def setUp(self):
        """Set up test fixtures."""
        table = create_table(SortOrder.builder().asc('id').build())
        self.strategy = SortStrategy(table).options(SIZE_OPTIONS)
        self.bin_pack = BinPackStrategy(table).options(SIZE_OPTIONS)

    def test_select_matches_bin_pack(self):
        """Test that selection is the bin-pack selection."""
        tasks = create_tasks(10, 80, 100, 200, 50, 180, 181)
        selected = list(self.strategy.select_files_to_rewrite(tasks))
        self.assertEqual(selected, list(self.bin_pack.select_files_to_rewrite(tasks)))
        self.assertEqual([t.length() for t in selected], [10, 200, 50, 181])

    def test_plan_matches_bin_pack(self):
        """Test that grouping is the bin-pack grouping."""
        tasks = create_tasks(10, 20, 300, 5)
        self.assertEqual(
            self.strategy.plan_file_groups(tasks),
            self.bin_pack.plan_file_groups(tasks))

    def test_delegate_configured_with_same_options(self):
        """Test that the wrapped bin-pack strategy receives the size options."""
        bin_pack = BinPackStrategy(create_table(SortOrder.builder().asc('id').build()))
        strategy = SortStrategy(bin_pack.table(), bin_pack).options(
            dict(SIZE_OPTIONS, **{'rewrite-all': 'false'}))
        self.assertEqual(bin_pack.config(), strategy.config().bin_pack)
        self.assertEqual(bin_pack.config().min_input_files, 2)


if __name__ == '__main__':
    unittest.main()
