"""
Lower a (type-checked) Phobos program into Lua source text.

This is a straight syntax-directed tree-walk: one rule per kind of node.
It trusts that the type-checker already ran, so it re-derives nothing.
Expressions come out fully parenthesized, which means Lua's own ideas
about operator precedence never enter into it.

Anything the walk does not know how to lower is UnsupportedConstruct.
If the sink refuses a write (an OSError, or a ValueError such as writing to a closed file)
that's SinkWriteFailure and the walk stops there.
"""

import io, math, sys
from boozetools.support.foundation import Visitor
from . import syntax

class UnsupportedConstruct(Exception):
	pass

class SinkWriteFailure(OSError):
	pass

LUA_OPERATOR = {
	'+': '+',
	'-': '-',
	'*': '*',
	'/': '/',
	'==': '==',
	'!=': '~=',
	'<': '<',
	'<=': '<=',
	'>': '>',
	'>=': '>=',
}

_LUA_ESCAPE = {
	'\\': '\\\\',
	'"': '\\"',
	'\a': '\\a',
	'\b': '\\b',
	'\f': '\\f',
	'\n': '\\n',
	'\r': '\\r',
	'\t': '\\t',
	'\v': '\\v',
}

def _escape(c:str) -> str:
	if c in _LUA_ESCAPE: return _LUA_ESCAPE[c]
	if ord(c) < 32 or ord(c) == 127: return '\\%03d'%ord(c)
	return c

def quote(text:str) -> str:
	return '"' + ''.join(map(_escape, text)) + '"'

def lua_number(value:float) -> str:
	if math.isnan(value): return "(0/0)"
	if math.isinf(value): return "math.huge" if value > 0 else "-math.huge"
	return syntax.render_number(value)

class Sink:
	""" Text goes in; it comes out as text or as UTF-8 bytes, depending on the stream. """
	def __init__(self, stream):
		self._stream = stream
		self._binary = isinstance(stream, (io.RawIOBase, io.BufferedIOBase))

	def write(self, text:str):
		try:
			self._stream.write(text.encode("utf-8") if self._binary else text)
		except (OSError, ValueError) as ex:
			raise SinkWriteFailure(*ex.args) from ex

class Rendering(Visitor):
	""" Expressions become strings. They're always one line, so this is simple. """

	@staticmethod
	def visit_Number(num:syntax.Number) -> str:
		return lua_number(num.value)

	@staticmethod
	def visit_String(s:syntax.String) -> str:
		return quote(s.text)

	@staticmethod
	def visit_Lookup(lu:syntax.Lookup) -> str:
		return lu.name

	def visit_BinExp(self, expr:syntax.BinExp) -> str:
		return "(%s %s %s)"%(self.visit(expr.lhs), LUA_OPERATOR[expr.glyph], self.visit(expr.rhs))

	def visit_Call(self, call:syntax.Call) -> str:
		return "%s(%s)"%(call.callee, ', '.join(map(self.visit, call.args)))

	@staticmethod
	def visit_object(it, *_):
		raise UnsupportedConstruct("No way to render %s as an expression"%type(it).__name__)

EXPRESSION = Rendering()

class Lowering(Visitor):
	""" Declarations and statements become lines, indented by nesting depth. """

	def __init__(self, sink:Sink, indent:int=4):
		self._sink = sink
		self._indent = indent

	def line(self, depth:int, text:str):
		self._sink.write(" " * (depth * self._indent) + text + "\n")

	def block(self, stmts, depth:int):
		for s in stmts: self.visit(s, depth)

	def visit_Program(self, program:syntax.Program, depth:int=0):
		for decl in program.decls: self.visit(decl, depth)

	def visit_Function(self, fn:syntax.Function, depth:int):
		self.line(depth, "function %s(%s)"%(fn.name, ', '.join(p.name for p in fn.params)))
		self.block(fn.body, depth + 1)
		self.line(depth, "end")

	def visit_Extern(self, ext:syntax.Extern, depth:int):
		# Somebody else supplies the body, so there is nothing to write.
		pass

	def visit_Record(self, rec:syntax.Record, depth:int):
		# Lua has no use for a record's shape.
		pass

	def visit_Game(self, game:syntax.Game, depth:int):
		for fn in game.functions: self.visit(fn, depth)

	def visit_Let(self, let:syntax.Let, depth:int):
		self.line(depth, "local %s = %s"%(let.name, EXPRESSION.visit(let.expr)))

	def visit_Assign(self, assign:syntax.Assign, depth:int):
		self.line(depth, "%s = %s"%(assign.name, EXPRESSION.visit(assign.expr)))

	def visit_Return(self, ret:syntax.Return, depth:int):
		self.line(depth, "return "+EXPRESSION.visit(ret.expr))

	def visit_ExprStmt(self, es:syntax.ExprStmt, depth:int):
		self.line(depth, EXPRESSION.visit(es.expr))

	def visit_If(self, it:syntax.If, depth:int):
		self.line(depth, "if %s then"%EXPRESSION.visit(it.condition))
		self.block(it.then_part, depth + 1)
		if it.else_part is not None:
			self.line(depth, "else")
			self.block(it.else_part, depth + 1)
		self.line(depth, "end")

	@staticmethod
	def visit_object(it, *_):
		raise UnsupportedConstruct("No lowering rule for %s"%type(it).__name__)

def generate(program:syntax.Program, sink, indent:int=4) -> None:
	""" Write the Lua rendition of `program` to `sink`, which is anything with a write method. """
	Lowering(Sink(sink), indent).visit(program)

def translate(program:syntax.Program, indent:int=4):
	generate(program, sys.stdout, indent)
	sys.stdout.flush()
