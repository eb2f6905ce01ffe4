import io
import unittest
from unittest.mock import patch

from phobos.syntax import (
	Program, Function, Extern, Record, Game, Parameter, TypeName, Block,
	Let, Assign, If, Return, ExprStmt, Number, String, Lookup, BinExp, Call,
)
from phobos.codegen import generate, translate, quote, lua_number, UnsupportedConstruct, SinkWriteFailure, EXPRESSION

def _fn(name, params, *stmts):
	return Function(name, [Parameter(p, TypeName("Number")) for p in params], TypeName("Number"), Block(stmts))

def _lua(*decls, indent=4) -> str:
	sink = io.StringIO()
	generate(Program(decls), sink, indent)
	return sink.getvalue()

class ExpressionTests(unittest.TestCase):

	def test_every_binary_node_gets_parentheses(self):
		expr = BinExp(Lookup("a"), "+", BinExp(Lookup("b"), "*", Lookup("c")))
		self.assertEqual("(a + (b * c))", EXPRESSION.visit(expr))
		expr = BinExp(BinExp(Lookup("a"), "+", Lookup("b")), "*", Lookup("c"))
		self.assertEqual("((a + b) * c)", EXPRESSION.visit(expr))

	def test_operators(self):
		for glyph, lua in [
			("+", "+"), ("-", "-"), ("*", "*"), ("/", "/"),
			("==", "=="), ("!=", "~="), ("<", "<"), ("<=", "<="), (">", ">"), (">=", ">="),
		]:
			with self.subTest(glyph):
				self.assertEqual("(x %s 1)"%lua, EXPRESSION.visit(BinExp(Lookup("x"), glyph, Number(1))))

	def test_numbers(self):
		for value, text in [(1, "1"), (0, "0"), (-3, "-3"), (2.5, "2.5"), (0.1, "0.1"), (1e20, "1e+20")]:
			with self.subTest(value):
				self.assertEqual(text, EXPRESSION.visit(Number(value)))
		self.assertEqual("math.huge", lua_number(float("inf")))
		self.assertEqual("-math.huge", lua_number(float("-inf")))
		self.assertEqual("(0/0)", lua_number(float("nan")))
		self.assertEqual("-0.0", lua_number(-0.0))

	def test_strings(self):
		self.assertEqual('"hello"', EXPRESSION.visit(String("hello")))
		self.assertEqual(r'"say \"hi\"\n"', quote('say "hi"\n'))
		self.assertEqual(r'"back\\slash"', quote("back\\slash"))
		self.assertEqual(r'"\000\027"', quote("\x00\x1b"))

	def test_call(self):
		self.assertEqual("f()", EXPRESSION.visit(Call("f", [])))
		call = Call("f", [Number(1), Call("g", [Lookup("x")]), BinExp(Number(1), "-", Number(2))])
		self.assertEqual("f(1, g(x), (1 - 2))", EXPRESSION.visit(call))

class LoweringTests(unittest.TestCase):

	def test_scenario_2(self):
		text = _lua(_fn("foo", ["n"], Return(BinExp(Lookup("n"), "+", Number(1)))))
		self.assertEqual("function foo(n)\n    return (n + 1)\nend\n", text)

	def test_statements(self):
		text = _lua(_fn(
			"f", ["a", "b"],
			Let("x", TypeName("Number"), Lookup("a")),
			Assign("x", BinExp(Lookup("x"), "/", Lookup("b"))),
			ExprStmt(Call("print", [Lookup("x")])),
			Return(Lookup("x")),
		))
		self.assertEqual(
			"function f(a, b)\n"
			"    local x = a\n"
			"    x = (x / b)\n"
			"    print(x)\n"
			"    return x\n"
			"end\n",
			text,
		)

	def test_if_without_else_is_closed(self):
		text = _lua(_fn("f", ["n"], If(BinExp(Lookup("n"), "<", Number(0)), Block([Return(Number(0))])), Return(Lookup("n"))))
		self.assertEqual(
			"function f(n)\n"
			"    if (n < 0) then\n"
			"        return 0\n"
			"    end\n"
			"    return n\n"
			"end\n",
			text,
		)

	def test_if_with_else_and_nesting(self):
		inner = If(BinExp(Lookup("n"), "!=", Number(1)), Block([Return(Number(1))]), Block([Return(Number(2))]))
		text = _lua(_fn("f", ["n"], If(BinExp(Lookup("n"), ">", Number(0)), Block([inner]), Block())), indent=2)
		self.assertEqual(
			"function f(n)\n"
			"  if (n > 0) then\n"
			"    if (n ~= 1) then\n"
			"      return 1\n"
			"    else\n"
			"      return 2\n"
			"    end\n"
			"  else\n"
			"  end\n"
			"end\n",
			text,
		)

	def test_declarations_without_code(self):
		text = _lua(
			Extern("print", [Parameter("s", TypeName("String"))], TypeName("Number")),
			Record("Point", [Parameter("x", TypeName("Number"))]),
		)
		self.assertEqual("", text)

	def test_game_lowers_its_functions(self):
		game = Game("Pong", [_fn("a", []), _fn("b", ["x"], Return(Lookup("x")))])
		self.assertEqual("function a()\nend\nfunction b(x)\n    return x\nend\n", _lua(game))

	def test_repeated_calls_are_independent(self):
		program = (_fn("f", [], Return(Number(1))),)
		self.assertEqual(_lua(*program), _lua(*program))

	def test_binary_sink_gets_utf8(self):
		sink = io.BytesIO()
		generate(Program([_fn("f", [], ExprStmt(Call("say", [String("héllo")])))]), sink)
		self.assertEqual('function f()\n    say("héllo")\nend\n'.encode("utf-8"), sink.getvalue())

	def test_translate_writes_to_stdout(self):
		with patch("sys.stdout", new_callable=io.StringIO) as out:
			translate(Program([_fn("f", [])]))
		self.assertEqual("function f()\nend\n", out.getvalue())

class FailureTests(unittest.TestCase):

	def test_unsupported_statement(self):
		with self.assertRaises(UnsupportedConstruct):
			_lua(_fn("f", [], "not a statement"))

	def test_unsupported_expression(self):
		with self.assertRaises(UnsupportedConstruct):
			_lua(_fn("f", [], Return(object())))

	def test_sink_failure_stops_the_walk(self):
		class Broken:
			calls = 0
			def write(self, text):
				self.calls += 1
				raise OSError(28, "No space left on device")
		sink = Broken()
		with self.assertRaises(SinkWriteFailure):
			generate(Program([_fn("f", []), _fn("g", [])]), sink)
		self.assertEqual(1, sink.calls)

	def test_closed_sink(self):
		sink = io.StringIO()
		sink.close()
		with self.assertRaises(SinkWriteFailure):
			generate(Program([_fn("f", [])]), sink)

if __name__ == '__main__':
	unittest.main()
