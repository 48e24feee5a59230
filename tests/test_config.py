"""Tests for pipeline settings."""
import unittest

from mrindex.config import PipelineConfig
from mrindex.errors import ConfigurationError


class TestPipelineConfig(unittest.TestCase):

    def test_defaults(self):
        config = PipelineConfig().validate()
        self.assertEqual(config.max_line_length, 80)
        self.assertEqual(config.lines_per_chunk, 1000)
        self.assertEqual(config.words_per_batch, 100)
        self.assertIsNone(config.max_workers)

    def test_rejects_non_positive(self):
        for kwargs in ({"lines_per_chunk": 0}, {"words_per_batch": -5}, {"max_line_length": 0},
                       {"max_workers": 0}, {"lines_per_chunk": True}, {"words_per_batch": 2.5}):
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ConfigurationError):
                    PipelineConfig(**kwargs).validate()

    def test_configuration_error_is_value_error(self):
        with self.assertRaises(ValueError):
            PipelineConfig(lines_per_chunk=-1).validate()

    def test_outside_recommended_range_warns(self):
        with self.assertLogs("mrindex.config", level="WARNING") as logs:
            PipelineConfig(lines_per_chunk=10, words_per_batch=5000).validate()
        self.assertEqual(len(logs.records), 2)

    def test_with_overrides_ignores_none(self):
        config = PipelineConfig(lines_per_chunk=2000).with_overrides(lines_per_chunk=None, words_per_batch=500)
        self.assertEqual(config.lines_per_chunk, 2000)
        self.assertEqual(config.words_per_batch, 500)

    def test_from_env(self):
        config = PipelineConfig.from_env({
            "MRINDEX_LINES_PER_CHUNK": "5000",
            "MRINDEX_MAX_WORKERS": "4",
            "MRINDEX_WORDS_PER_BATCH": "",
        })
        self.assertEqual(config, PipelineConfig(lines_per_chunk=5000, max_workers=4))

    def test_from_env_bad_value(self):
        with self.assertRaises(ConfigurationError):
            PipelineConfig.from_env({"MRINDEX_WORDS_PER_BATCH": "lots"})


if __name__ == '__main__':
    unittest.main()
