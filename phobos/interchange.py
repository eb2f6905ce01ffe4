"""
The parser lives elsewhere. What it hands over is a JSON document describing the tree.

Every node is an object with a "node" key naming its class in phobos.syntax.
The remaining keys are that node's parts, so for example:

    {"node": "Function", "name": "foo",
     "params": [{"name": "n", "type": "Number"}], "ret": "Number",
     "body": [{"node": "Return", "expr": {"node": "BinExp", "op": "+",
               "lhs": {"node": "Lookup", "name": "n"}, "rhs": {"node": "Number", "value": 1}}}]}

A whole program is {"node": "Program", "decls": [...]}, or just the bare list of declarations.
Type names are plain strings. Blocks are plain lists of statements.
An if-statement's "else" may be absent or null.
"""
import json
from typing import Any
from boozetools.support.foundation import Visitor
from . import syntax

class MalformedTree(ValueError):
	pass

def _part(obj:dict, key:str):
	try: return obj[key]
	except KeyError: raise MalformedTree("%s node lacks %r"%(obj.get("node", "A"), key)) from None

def _list(obj:dict, key:str) -> list:
	it = _part(obj, key)
	if not isinstance(it, list): raise MalformedTree("%r of %s should be a list"%(key, obj["node"]))
	return it

def _text(obj:dict, key:str) -> str:
	it = _part(obj, key)
	if not isinstance(it, str): raise MalformedTree("%r of %s should be a string"%(key, obj["node"]))
	return it

def _params(obj, key) -> list[syntax.Parameter]:
	result = []
	for p in _list(obj, key):
		if not isinstance(p, dict): raise MalformedTree("Parameters and fields are objects with a name and type")
		p = dict(p, node="Parameter")
		result.append(syntax.Parameter(_text(p, "name"), syntax.TypeName(_text(p, "type"))))
	return result

def _block(obj, key) -> syntax.Block:
	return syntax.Block(map(statement, _list(obj, key)))

def _function(obj):
	return syntax.Function(_text(obj, "name"), _params(obj, "params"), syntax.TypeName(_text(obj, "ret")), _block(obj, "body"))

def _number(obj):
	value = _part(obj, "value")
	if isinstance(value, bool) or not isinstance(value, (int, float)):
		raise MalformedTree("A Number node needs a numeric value, not %r"%(value,))
	try: return syntax.Number(float(value))
	except OverflowError: raise MalformedTree("A Number node's value is too big for a float") from None

def _bin_exp(obj):
	try: return syntax.BinExp(expression(_part(obj, "lhs")), _text(obj, "op"), expression(_part(obj, "rhs")))
	except MalformedTree: raise
	except ValueError as ex: raise MalformedTree(str(ex)) from ex

def _if(obj):
	else_part = obj.get("else")
	return syntax.If(
		expression(_part(obj, "condition")),
		_block(obj, "then"),
		None if else_part is None else _block(obj, "else"),
	)

DECLARATION = {
	"Function": _function,
	"Extern": lambda obj: syntax.Extern(_text(obj, "name"), _params(obj, "params"), syntax.TypeName(_text(obj, "ret"))),
	"Record": lambda obj: syntax.Record(_text(obj, "name"), _params(obj, "fields")),
	"Game": lambda obj: syntax.Game(_text(obj, "name"), [_expect(DECLARATION_FN, f, "function") for f in _list(obj, "functions")]),
}

DECLARATION_FN = {"Function": _function}

STATEMENT = {
	"Let": lambda obj: syntax.Let(_text(obj, "name"), syntax.TypeName(_text(obj, "type")), expression(_part(obj, "expr"))),
	"Assign": lambda obj: syntax.Assign(_text(obj, "name"), expression(_part(obj, "expr"))),
	"If": _if,
	"Return": lambda obj: syntax.Return(expression(_part(obj, "expr"))),
	"ExprStmt": lambda obj: syntax.ExprStmt(expression(_part(obj, "expr"))),
}

EXPRESSION = {
	"Number": _number,
	"String": lambda obj: syntax.String(_text(obj, "text")),
	"Lookup": lambda obj: syntax.Lookup(_text(obj, "name")),
	"BinExp": _bin_exp,
	"Call": lambda obj: syntax.Call(_text(obj, "callee"), map(expression, _list(obj, "args"))),
}

def _expect(table:dict, obj:Any, what:str):
	tag = obj.get("node") if isinstance(obj, dict) else type(obj).__name__
	if not (isinstance(tag, str) and isinstance(obj, dict) and tag in table):
		raise MalformedTree("Expected a %s; got %r"%(what, tag))
	return table[tag](obj)

def declaration(obj) -> syntax.Declaration: return _expect(DECLARATION, obj, "declaration")
def statement(obj) -> syntax.Statement: return _expect(STATEMENT, obj, "statement")
def expression(obj) -> syntax.ValueExpression: return _expect(EXPRESSION, obj, "expression")

def load_program(document) -> syntax.Program:
	if isinstance(document, dict) and document.get("node") == "Program":
		document = _list(document, "decls")
	if not isinstance(document, list):
		raise MalformedTree("A program is a list of declarations")
	return syntax.Program(map(declaration, document))

def loads(text:str) -> syntax.Program:
	""" May raise json.JSONDecodeError before it gets as far as MalformedTree. """
	try: document = json.loads(text)
	except json.JSONDecodeError: raise
	except ValueError as ex: raise MalformedTree(str(ex)) from ex
	return load_program(document)

class Dumper(Visitor):
	""" The other direction: tree to JSON-ready dictionaries. """

	def tour(self, items): return [self.visit(i) for i in items]

	@staticmethod
	def _params(params): return [{"name": p.name, "type": p.type_name.name} for p in params]

	def visit_Program(self, p:syntax.Program):
		return {"node": "Program", "decls": self.tour(p.decls)}

	def visit_Function(self, fn:syntax.Function):
		return {"node": "Function", "name": fn.name, "params": self._params(fn.params), "ret": fn.ret.name, "body": self.tour(fn.body)}

	def visit_Extern(self, ext:syntax.Extern):
		return {"node": "Extern", "name": ext.name, "params": self._params(ext.params), "ret": ext.ret.name}

	def visit_Record(self, rec:syntax.Record):
		return {"node": "Record", "name": rec.name, "fields": self._params(rec.fields)}

	def visit_Game(self, game:syntax.Game):
		return {"node": "Game", "name": game.name, "functions": self.tour(game.functions)}

	def visit_Let(self, let:syntax.Let):
		return {"node": "Let", "name": let.name, "type": let.type_name.name, "expr": self.visit(let.expr)}

	def visit_Assign(self, a:syntax.Assign):
		return {"node": "Assign", "name": a.name, "expr": self.visit(a.expr)}

	def visit_If(self, it:syntax.If):
		else_part = None if it.else_part is None else self.tour(it.else_part)
		return {"node": "If", "condition": self.visit(it.condition), "then": self.tour(it.then_part), "else": else_part}

	def visit_Return(self, r:syntax.Return):
		return {"node": "Return", "expr": self.visit(r.expr)}

	def visit_ExprStmt(self, es:syntax.ExprStmt):
		return {"node": "ExprStmt", "expr": self.visit(es.expr)}

	@staticmethod
	def visit_Number(n:syntax.Number):
		return {"node": "Number", "value": n.value}

	@staticmethod
	def visit_String(s:syntax.String):
		return {"node": "String", "text": s.text}

	@staticmethod
	def visit_Lookup(lu:syntax.Lookup):
		return {"node": "Lookup", "name": lu.name}

	def visit_BinExp(self, b:syntax.BinExp):
		return {"node": "BinExp", "op": b.glyph, "lhs": self.visit(b.lhs), "rhs": self.visit(b.rhs)}

	def visit_Call(self, c:syntax.Call):
		return {"node": "Call", "callee": c.callee, "args": self.tour(c.args)}

def dumps(program:syntax.Program, indent=None) -> str:
	return json.dumps(Dumper().visit(program), indent=indent)
