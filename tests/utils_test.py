import sys
import os
import json
import logging
import tempfile
import unittest

current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.append(parent_dir)

from cinput.tokens import Position, Token
from cinput.utils import (
    Config,
    EndOfStreamException,
    MalformedEncodingException,
    StreamException,
    configure_logging,
)


class TestConfig(unittest.TestCase):

    def test_defaults(self):
        config = Config()
        self.assertEqual(config.buffer_size, 8192)
        self.assertIsNone(config.max_retries)
        self.assertEqual(config.retry_interval, 0.01)
        self.assertTrue(config.flush_stdout)

    def test_from_json_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with open(path, "w") as f:
                json.dump({"buffer_size": 16, "max_retries": 5, "flush_stdout": False}, f)
            config = Config.from_json_file(path)
        self.assertEqual(config, Config(buffer_size=16, max_retries=5, flush_stdout=False))

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            Config(buffer_size=0)
        with self.assertRaises(ValueError):
            Config(max_retries=0)
        with self.assertRaises(ValueError):
            Config(retry_interval=-1)

    def test_unknown_key(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "config.json")
            with open(path, "w") as f:
                json.dump({"buffer": 16}, f)
            with self.assertRaises(TypeError):
                Config.from_json_file(path)


class TestExceptions(unittest.TestCase):

    def test_messages(self):
        error = MalformedEncodingException(b"\xff", 12)
        self.assertIsInstance(error, StreamException)
        self.assertEqual(str(error), "ERROR Malformed UTF-8 sequence b'\\xff' at byte 12")
        self.assertEqual(str(EndOfStreamException("<stdin>")), "ERROR No more input available from <stdin>")

    def test_position_prefix(self):
        error = StreamException("bad", Position(2, 4))
        self.assertEqual(str(error), "[2, 4] ERROR bad")


class TestTokenAndLogging(unittest.TestCase):

    def test_token_copies_position(self):
        position = Position(1, 1)
        token = Token("abc", position)
        position.column = 9
        self.assertEqual(token.position, Position(1, 1))
        self.assertEqual(str(token), "abc")

    def test_configure_logging(self):
        configure_logging("debug")
        self.assertEqual(logging.getLogger("cinput").level, logging.DEBUG)
        configure_logging(logging.WARNING)
        self.assertEqual(logging.getLogger("cinput").level, logging.WARNING)
        with self.assertRaises(ValueError):
            configure_logging("loud")


if __name__ == '__main__':
    unittest.main()
