import sys
import os
import json
import subprocess
import tempfile
import unittest

current_dir = os.path.dirname(os.path.abspath(__file__))
parent_dir = os.path.dirname(current_dir)
sys.path.append(parent_dir)

SHIFT_OP = os.path.join(parent_dir, "examples", "shift_op.py")
SUM_NUMBERS = os.path.join(parent_dir, "examples", "sum_numbers.py")
MAIN = os.path.join(parent_dir, "main.py")


def run_script(args, stdin: bytes = b"") -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, *args],
        input=stdin,
        capture_output=True,
        cwd=parent_dir,
        timeout=30,
    )


class TestExamplePrograms(unittest.TestCase):

    def test_shift_op_reads_one(self):
        self.assertEqual(run_script([SHIFT_OP], b"1\n").returncode, 0)

    def test_shift_op_reads_the_right_number(self):
        self.assertNotEqual(run_script([SHIFT_OP], b"2\n").returncode, 0)

    def test_shift_op_does_not_read_char_by_char(self):
        self.assertNotEqual(run_script([SHIFT_OP], b"1GARBAGE\n").returncode, 0)

    def test_shift_op_empty_input(self):
        self.assertNotEqual(run_script([SHIFT_OP], b"").returncode, 0)

    def test_prompts_are_visible_before_reading(self):
        result = run_script([SUM_NUMBERS], b"3\n1 2\nx 3\n\n")
        self.assertEqual(result.returncode, 0, result.stderr)
        output = result.stdout.decode("utf-8")
        self.assertIn("How many numbers? Number 1: Number 2: Number 3: Sum: 6", output)
        self.assertTrue(output.endswith("Press enter to exit..."))


class TestCommandLine(unittest.TestCase):

    def test_tokens_from_string(self):
        result = run_script([MAIN, "-s", "ab  cd\n e"])
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertEqual(result.stdout.decode("utf-8").splitlines(), [
            "Token('ab', Ln 1, Col 1)",
            "Token('cd', Ln 1, Col 5)",
            "Token('e', Ln 2, Col 2)",
        ])

    def test_values_from_stdin(self):
        result = run_script([MAIN, "-v", "int"], b"1 2\n3 four 5")
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertEqual(result.stdout.decode("utf-8").split(), ["1", "2", "3"])

    def test_lines_from_file_with_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            data_path = os.path.join(tmp, "data.txt")
            with open(data_path, "wb") as f:
                f.write("pierwsza linia\r\ndruga\n".encode("utf-8"))
            config_path = os.path.join(tmp, "config.json")
            with open(config_path, "w") as f:
                json.dump({"buffer_size": 3}, f)

            result = run_script([MAIN, "-c", config_path, "-f", data_path, "-l"])
        self.assertEqual(result.returncode, 0, result.stderr)
        self.assertEqual(result.stdout.decode("utf-8").splitlines(), ["pierwsza linia", "druga"])

    def test_malformed_input_is_reported(self):
        result = run_script([MAIN, "-v", "str"], b"ok \xff")
        self.assertEqual(result.returncode, 1)
        self.assertEqual(result.stdout.decode("utf-8").split(), ["ok"])
        self.assertIn("Malformed UTF-8", result.stderr.decode("utf-8"))

    def test_missing_file(self):
        result = run_script([MAIN, "-f", "does/not/exist.txt"])
        self.assertEqual(result.returncode, 1)
        self.assertIn("Error reading file", result.stderr.decode("utf-8"))

    def test_bad_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            config_path = os.path.join(tmp, "config.json")
            with open(config_path, "w") as f:
                json.dump({"buffer_size": 0}, f)
            result = run_script([MAIN, "-c", config_path, "-s", "x"])
        self.assertEqual(result.returncode, 1)
        self.assertIn("Failed to load config", result.stderr.decode("utf-8"))


if __name__ == '__main__':
    unittest.main()
