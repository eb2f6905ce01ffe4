"""
The set of tree-nodes that an (external) parser hands to this compiler.
These are plain data: the checker and the code generator each walk them separately.
Each node also renders back to Phobos source text by str(), which is handy in a debugger
and is the form the parser's own test-suite compares against.
Class-level type annotations make peace with the IDE.
"""
import math
from typing import Optional, Sequence, Union

ARITHMETIC = frozenset("+ - * /".split())
COMPARISON = frozenset("== != < <= > >=".split())
OPERATORS = ARITHMETIC | COMPARISON

def render_number(value:float) -> str:
	""" Shared between source-rendering and the code generator. Integral values lose the ".0" """
	if value == 0 and math.copysign(1, value) < 0:
		return "-0.0"
	if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
		return str(int(value))
	return repr(value)

def _comma(items) -> str:
	return ', '.join(map(str, items))

class TypeName:
	""" A type as written in a signature: just a name, to be resolved by the checker. """
	def __init__(self, name:str):
		assert isinstance(name, str), type(name)
		self.name = name
	def __str__(self): return self.name
	def __repr__(self): return "<type %s>"%self.name

class Parameter:
	name: str
	type_name: TypeName
	def __init__(self, name:str, type_name:TypeName):
		self.name, self.type_name = name, type_name
	def __str__(self): return "%s: %s"%(self.name, self.type_name)

Field = Parameter

#######################################################################
# Expressions

class Expr:
	pass

class Number(Expr):
	def __init__(self, value:float):
		self.value = float(value)
	def __str__(self): return render_number(self.value)

class String(Expr):
	def __init__(self, text:str):
		self.text = text
	def __str__(self): return '"%s"'%self.text.replace("\\", "\\\\").replace('"', '\\"')

class Lookup(Expr):
	""" An identifier in expression position """
	def __init__(self, name:str):
		self.name = name
	def __str__(self): return self.name

class BinExp(Expr):
	lhs: Expr
	glyph: str
	rhs: Expr
	def __init__(self, lhs:Expr, glyph:str, rhs:Expr):
		if glyph not in OPERATORS:
			raise ValueError("Not a binary operator: %r"%glyph)
		self.lhs, self.glyph, self.rhs = lhs, glyph, rhs
	def is_comparison(self): return self.glyph in COMPARISON
	def __str__(self): return "(%s %s %s)"%(self.lhs, self.glyph, self.rhs)

class Call(Expr):
	callee: str
	args: Sequence[Expr]
	def __init__(self, callee:str, args:Sequence[Expr]=()):
		self.callee, self.args = callee, tuple(args)
	def __str__(self): return "%s(%s)"%(self.callee, _comma(self.args))

ValueExpression = Union[Number, String, Lookup, BinExp, Call]

#######################################################################
# Statements

class Block:
	stmts: Sequence["Stmt"]
	def __init__(self, stmts:Sequence["Stmt"]=()):
		self.stmts = list(stmts)
	def __iter__(self): return iter(self.stmts)
	def __len__(self): return len(self.stmts)
	def __str__(self):
		if not self.stmts: return "{ }"
		return "{ %s }"%' '.join(map(str, self.stmts))

class Stmt:
	pass

class Let(Stmt):
	def __init__(self, name:str, type_name:TypeName, expr:Expr):
		self.name, self.type_name, self.expr = name, type_name, expr
	def __str__(self): return "let %s: %s = %s;"%(self.name, self.type_name, self.expr)

class Assign(Stmt):
	def __init__(self, name:str, expr:Expr):
		self.name, self.expr = name, expr
	def __str__(self): return "%s = %s;"%(self.name, self.expr)

class If(Stmt):
	condition: Expr
	then_part: Block
	else_part: Optional[Block]
	def __init__(self, condition:Expr, then_part:Block, else_part:Optional[Block]=None):
		self.condition, self.then_part, self.else_part = condition, then_part, else_part
	def __str__(self):
		text = "if %s %s"%(self.condition, self.then_part)
		if self.else_part is None: return text
		return "%s else %s"%(text, self.else_part)

class Return(Stmt):
	def __init__(self, expr:Expr):
		self.expr = expr
	def __str__(self): return "return %s;"%self.expr

class ExprStmt(Stmt):
	""" An expression evaluated for its effect; the value is dropped. """
	def __init__(self, expr:Expr):
		self.expr = expr
	def __str__(self): return "%s;"%self.expr

Statement = Union[Let, Assign, If, Return, ExprStmt]

#######################################################################
# Declarations

class Signature:
	name: str
	params: Sequence[Parameter]
	ret: TypeName
	def __init__(self, name:str, params:Sequence[Parameter], ret:TypeName):
		self.name, self.params, self.ret = name, tuple(params), ret
	def head(self): return "%s(%s): %s"%(self.name, _comma(self.params), self.ret)

class Function(Signature):
	body: Block
	def __init__(self, name:str, params:Sequence[Parameter], ret:TypeName, body:Block):
		super().__init__(name, params, ret)
		self.body = body
	def __str__(self): return "fn %s %s"%(self.head(), self.body)

class Extern(Signature):
	""" Somebody else provides the body. """
	def __str__(self): return "extern "+self.head()

class Record:
	name: str
	fields: Sequence[Field]
	def __init__(self, name:str, fields:Sequence[Field]):
		self.name, self.fields = name, tuple(fields)
	def __str__(self): return "type %s { %s }"%(self.name, _comma(self.fields))

class Game:
	""" A named group of functions. For now that's all it is. """
	name: str
	functions: Sequence[Function]
	def __init__(self, name:str, functions:Sequence[Function]):
		self.name, self.functions = name, tuple(functions)
	def __str__(self):
		inner = ' '.join(map(str, self.functions))
		return "game %s { %s }"%(self.name, inner) if inner else "game %s { }"%self.name

Declaration = Union[Function, Extern, Record, Game]

class Program:
	decls: list[Declaration]
	def __init__(self, decls:Sequence[Declaration]=()):
		self.decls = list(decls)
	def __iter__(self): return iter(self.decls)
	def __str__(self): return '\n'.join(map(str, self.decls))
