import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from phobos import cmdline
from phobos.codegen import SinkWriteFailure

GOOD = """[
	{"node": "Function", "name": "foo", "params": [{"name": "n", "type": "Number"}], "ret": "Number",
	 "body": [{"node": "Return", "expr": {"node": "BinExp", "op": "+", "lhs": {"node": "Lookup", "name": "n"}, "rhs": {"node": "Number", "value": 1}}}]}
]"""

BAD_TYPE = """[
	{"node": "Function", "name": "bad", "params": [{"name": "n", "type": "Number"}], "ret": "String",
	 "body": [{"node": "Return", "expr": {"node": "Lookup", "name": "n"}}]}
]"""

class CommandLineTests(unittest.TestCase):

	def setUp(self) -> None:
		self._folder = tempfile.TemporaryDirectory()
		self.folder = Path(self._folder.name)

	def tearDown(self) -> None:
		self._folder.cleanup()

	def _run(self, *argv, stdin=""):
		args = cmdline.parser.parse_args(argv)
		with patch("sys.stdout", new_callable=io.StringIO) as out, \
				patch("sys.stderr", new_callable=io.StringIO) as err, \
				patch("sys.stdin", io.StringIO(stdin)):
			code = cmdline.run(args)
		return code, out.getvalue(), err.getvalue()

	def _file(self, text, name="program.json"):
		path = self.folder / name
		path.write_text(text, encoding="utf-8")
		return str(path)

	def test_translate_to_stdout(self):
		code, out, err = self._run(self._file(GOOD))
		self.assertEqual(0, code)
		self.assertEqual("function foo(n)\n    return (n + 1)\nend\n", out)

	def test_translate_from_stdin(self):
		code, out, err = self._run("-", "--indent", "2", stdin=GOOD)
		self.assertEqual(0, code)
		self.assertEqual("function foo(n)\n  return (n + 1)\nend\n", out)

	def test_translate_to_file(self):
		target = self.folder / "out.lua"
		code, out, err = self._run(self._file(GOOD), "-o", str(target))
		self.assertEqual(0, code)
		self.assertEqual("", out)
		self.assertTrue(target.read_text(encoding="utf-8").startswith("function foo(n)"))

	def test_check_only(self):
		code, out, err = self._run("-c", self._file(GOOD))
		self.assertEqual(0, code)
		self.assertEqual("", out)
		self.assertIn("Looks plausible", err)
		self.assertIn("foo", err)

	def test_type_error(self):
		code, out, err = self._run(self._file(BAD_TYPE))
		self.assertEqual(1, code)
		self.assertEqual("", out)
		self.assertIn("Type mismatch in return", err)

	def test_missing_file(self):
		code, out, err = self._run(str(self.folder / "nowhere.json"))
		self.assertEqual(1, code)
		self.assertIn("I see no file called", err)

	def test_garbled_document(self):
		code, out, err = self._run(self._file('[\n  {"node": "Extern",,}\n]'))
		self.assertEqual(1, code)
		self.assertIn("garbled", err)

	def test_malformed_tree(self):
		code, out, err = self._run(self._file('[{"node": "Widget"}]'))
		self.assertEqual(1, code)
		self.assertIn("Widget", err)

	def test_odd_node_tag(self):
		code, out, err = self._run("-", stdin='[{"node": ["x"]}]')
		self.assertEqual(1, code)
		self.assertIn("does not describe a program", err)

	def test_unwritable_output(self):
		target = self.folder / "no such folder" / "out.lua"
		code, out, err = self._run(self._file(GOOD), "-o", str(target))
		self.assertEqual(1, code)
		self.assertIn("trying to write", err)
		self.assertFalse(target.exists())

	def test_output_fails_midway(self):
		target = self.folder / "out.lua"
		with patch("phobos.codegen.generate", side_effect=SinkWriteFailure(28, "No space left on device")):
			code, out, err = self._run(self._file(GOOD), "-o", str(target))
		self.assertEqual(1, code)
		self.assertIn("No space left on device", err)

	def test_no_arguments_prints_help(self):
		with patch("sys.argv", ["phobos"]), patch("sys.stdout", new_callable=io.StringIO) as out:
			cmdline.main()
		self.assertIn("usage: phobos", out.getvalue())

if __name__ == '__main__':
	unittest.main()
