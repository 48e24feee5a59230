"""End-to-end tests for the distributed pipeline."""
import unittest
from collections import Counter
from unittest import mock

from mrindex import (
    ConfigurationError,
    PipelineConfig,
    StageFailedError,
    build_index,
    run_distributed,
    sweep,
    sweep_configs,
)
from mrindex.tokenizer import tokenize

EXAMPLE = {"a.txt": "The cat sat. The dog ran!", "b.txt": "cat dog cat"}

CORPUS = {
    "tale.txt": (
        "It was the best of times, it was the worst of times,\n"
        "it was the age of wisdom, it was the age of foolishness,\r\n"
        "it was the epoch of belief, it was the epoch of incredulity, "
        "it was the season of Light, it was the season of Darkness,\n"
        "\n"
        "it was the spring of hope, it was the winter of despair.\n"
    ),
    "moby.txt": "Call me Ishmael. Some years ago -- never mind how long precisely --\n" * 7,
    "numbers.txt": "1 2 3\n4.5 six 7\nseven8eight\n",
    "empty.txt": "",
}


def expected_index(documents):
    """Count words of every document with the tokenizer, document by document."""
    table = {}
    for document, content in documents.items():
        for word, count in Counter(tokenize(content)).items():
            table.setdefault(word, {})[document] = count
    return table


class TestDistributedPipeline(unittest.TestCase):

    def test_worked_example(self):
        table = build_index(EXAMPLE)
        self.assertEqual(table, {
            "the": {"a.txt": 2},
            "cat": {"a.txt": 1, "b.txt": 2},
            "sat": {"a.txt": 1},
            "dog": {"a.txt": 1, "b.txt": 1},
            "ran": {"a.txt": 1},
        })
        self.assertEqual(len(table), 5)

    def test_word_count_conservation(self):
        self.assertEqual(build_index(CORPUS, PipelineConfig(lines_per_chunk=2, words_per_batch=3)),
                         expected_index(CORPUS))

    def test_configuration_invariance(self):
        reference = build_index(CORPUS)
        for lines in (1, 2, 3, 1000):
            for words in (1, 2, 7, 1000):
                for max_line_length in (10, 80):
                    config = PipelineConfig(max_line_length=max_line_length,
                                            lines_per_chunk=lines, words_per_batch=words)
                    with self.subTest(config=config):
                        self.assertEqual(build_index(CORPUS, config), reference)

    def test_bounded_worker_pool(self):
        config = PipelineConfig(lines_per_chunk=1, words_per_batch=2, max_workers=2)
        self.assertEqual(build_index(CORPUS, config), expected_index(CORPUS))

    def test_counts_positive(self):
        for counts in build_index(CORPUS).values():
            self.assertTrue(counts)
            self.assertTrue(all(c >= 1 for c in counts.values()))

    def test_empty_input(self):
        run = run_distributed({})
        self.assertEqual(run.table, {})
        self.assertEqual(run.stats.map_units, 0)
        self.assertEqual(run.stats.reduce_units, 0)
        self.assertEqual(build_index({"blank.txt": "", "punct.txt": "... 123 !!!"}), {})

    def test_range_warning_logged_once(self):
        with self.assertLogs("mrindex.config", level="WARNING") as logs:
            run_distributed(EXAMPLE, PipelineConfig(lines_per_chunk=5))
        self.assertEqual(len(logs.records), 1)

    def test_stats(self):
        run = run_distributed({"a.txt": "one\ntwo\nthree"}, PipelineConfig(lines_per_chunk=1, words_per_batch=2))
        self.assertEqual(run.stats.map_units, 3)
        self.assertEqual(run.stats.reduce_units, 2)
        self.assertEqual(run.stats.words, 3)
        self.assertGreaterEqual(run.stats.total_ms, 0.0)

    def test_invalid_config_rejected_before_stages(self):
        with mock.patch("mrindex.pipeline.chunk_documents") as chunker:
            for config in (PipelineConfig(lines_per_chunk=0), PipelineConfig(words_per_batch=-1),
                           PipelineConfig(max_line_length=0)):
                with self.assertRaises(ConfigurationError):
                    build_index(EXAMPLE, config)
            chunker.assert_not_called()

    def test_map_failure_aborts_run(self):
        with mock.patch("mrindex.mapper.map_chunk", side_effect=RuntimeError("interrupted")):
            with self.assertRaises(StageFailedError) as ctx:
                build_index(EXAMPLE)
        self.assertEqual(ctx.exception.stage, "map")
        self.assertEqual(set(ctx.exception.failures), {"chunk-0", "chunk-1"})

    def test_reduce_failure_aborts_run(self):
        with mock.patch("mrindex.reducer.reduce_batch", side_effect=RuntimeError("worker died")):
            with self.assertRaises(StageFailedError) as ctx:
                build_index(EXAMPLE, PipelineConfig(words_per_batch=2))
        self.assertEqual(ctx.exception.stage, "reduce")
        self.assertEqual(len(ctx.exception.failures), 3)


class TestSweep(unittest.TestCase):

    def test_each_setting_validated_once(self):
        with self.assertLogs("mrindex.config", level="WARNING") as logs:
            stats = sweep(CORPUS, lines_per_chunk=[5, 6], words_per_batch=[100])
        self.assertEqual(len(stats), 2)
        self.assertEqual(len(logs.records), 2)

    def test_invalid_setting_rejected_before_any_run(self):
        with mock.patch("mrindex.pipeline.execute") as execute:
            with self.assertRaises(ConfigurationError):
                sweep(CORPUS, lines_per_chunk=[1000, 0], words_per_batch=[100])
            execute.assert_not_called()

    def test_sweep_configs(self):
        configs = sweep_configs([1000], [100, 200], base=PipelineConfig(max_workers=2))
        self.assertEqual([(c.lines_per_chunk, c.words_per_batch, c.max_workers) for c in configs],
                         [(1000, 100, 2), (1000, 200, 2)])

    def test_one_run_per_setting(self):
        stats = sweep(CORPUS, lines_per_chunk=[1, 2], words_per_batch=[1, 3])
        self.assertEqual([(s.lines_per_chunk, s.words_per_batch) for s in stats],
                         [(1, 1), (1, 3), (2, 1), (2, 3)])
        self.assertEqual(len({s.words for s in stats}), 1)


if __name__ == '__main__':
    unittest.main()
