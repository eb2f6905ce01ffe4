"""
The type-checker makes one forward pass over the program.

Each declaration's bindings become visible to everything after it (and a function
is visible within its own body, so direct recursion works) but nothing is hoisted.
The first problem found is raised as a TypeCheckError; there is no attempt to recover.

Scope is nothing but a mark on the environment: note its length on the way in,
chop it back on the way out. Notice that the branches of an if-statement do NOT
get a scope of their own, so a let-binding inside a branch outlives the branch.
That is how the language has always behaved, so it stays that way for now.
"""
# ----------------------------------------------------------------

from typing import Optional
from boozetools.support.foundation import Visitor
from .. import syntax
from ..environment import TypeEnvironment
from ..diagnostics import Report
from .domain import PhobosType, FunctionType, RecordType, Field, NUMBER, STRING, BOOL, is_assignable
from .manifest import Translator
from .issues import (
	UndefinedIdentifier, UndefinedFunction, NotAFunction, ArityMismatch,
	TypeMismatch, ConditionNotBoolean, UnknownNode,
)

def typecheck(program:syntax.Program, report:Optional[Report]=None) -> None:
	""" Returns quietly if all is well; raises the first TypeCheckError otherwise. """
	TypeChecker(report or Report(verbose=0)).check_program(program)

class TypeChecker(Visitor):
	_env: TypeEnvironment
	_manifest: Translator

	def __init__(self, report: Report):
		self._report = report

	def _reset(self):
		self._env = TypeEnvironment()
		self._manifest = Translator(self._env)

	def check(self, expr:syntax.Expr) -> PhobosType:
		typ = self.visit(expr)
		assert isinstance(typ, PhobosType), ("Failed to return a type from %r"%type(expr))
		return typ

	def tour(self, stmts, expected:Optional[PhobosType]) -> None:
		for s in stmts: self.visit(s, expected)

	def check_program(self, program:syntax.Program) -> TypeEnvironment:
		self._reset()
		for decl in program.decls:
			self._report.info("Type-Check", type(decl).__name__, getattr(decl, "name", ""))
			self.visit(decl)
		if self._report.verbosity() > 1:
			for name, typ in self._env:
				self._report.info("   ", name, ":", typ, level=2)
		return self._env

	###################################################################
	# Declarations

	def visit_Function(self, fn:syntax.Function):
		fn_type = self._register(fn)
		mark = self._env.snapshot()
		# The signature was resolved before the name was bound, so reuse it.
		for param, typ in zip(fn.params, fn_type.param_types):
			self._env.bind(param.name, typ)
		self.tour(fn.body, fn_type.result_type)
		self._env.restore(mark)

	def visit_Extern(self, ext:syntax.Extern):
		self._register(ext)

	def _register(self, sig:syntax.Signature) -> FunctionType:
		fn_type = self._manifest.signature(sig)
		self._env.bind(sig.name, fn_type)
		return fn_type

	def visit_Record(self, rec:syntax.Record):
		fields = [Field(f.name, self._manifest.translate(f.type_name)) for f in rec.fields]
		self._env.bind(rec.name, RecordType(rec.name, fields))

	def visit_Game(self, game:syntax.Game):
		# The game itself is just a bag of functions. It needs no binding of its own.
		for fn in game.functions:
			self.visit(fn)

	###################################################################
	# Statements

	def visit_Let(self, let:syntax.Let, expected):
		declared = self._manifest.translate(let.type_name)
		derived = self.check(let.expr)
		if not is_assignable(declared, derived):
			raise TypeMismatch("let "+let.name, declared, derived)
		self._env.bind(let.name, declared)

	def visit_Assign(self, assign:syntax.Assign, expected):
		target = self._env.lookup(assign.name)
		if target is None:
			raise UndefinedIdentifier(assign.name)
		derived = self.check(assign.expr)
		if not is_assignable(target, derived):
			raise TypeMismatch("assignment to "+assign.name, target, derived)

	def visit_If(self, it:syntax.If, expected):
		condition = self.check(it.condition)
		if condition != BOOL:
			raise ConditionNotBoolean(condition)
		# Same environment, no snapshot, and no expected return type inside the branches.
		self.tour(it.then_part, None)
		if it.else_part is not None:
			self.tour(it.else_part, None)

	def visit_Return(self, ret:syntax.Return, expected):
		typ = self.check(ret.expr)
		if expected is not None and typ != expected:
			raise TypeMismatch("return", expected, typ)

	def visit_ExprStmt(self, es:syntax.ExprStmt, expected):
		self.check(es.expr)

	###################################################################
	# Expressions

	@staticmethod
	def visit_Number(_:syntax.Number) -> PhobosType: return NUMBER

	@staticmethod
	def visit_String(_:syntax.String) -> PhobosType: return STRING

	def visit_Lookup(self, lu:syntax.Lookup) -> PhobosType:
		typ = self._env.lookup(lu.name)
		if typ is None:
			raise UndefinedIdentifier(lu.name)
		return typ

	def visit_BinExp(self, expr:syntax.BinExp) -> PhobosType:
		lhs, rhs = self.check(expr.lhs), self.check(expr.rhs)
		if lhs == NUMBER and rhs == NUMBER:
			return BOOL if expr.is_comparison() else NUMBER
		raise TypeMismatch("operator "+expr.glyph, lhs, rhs)

	def visit_Call(self, site:syntax.Call) -> PhobosType:
		callee = self._env.lookup(site.callee)
		if callee is None:
			raise UndefinedFunction(site.callee)
		if not isinstance(callee, FunctionType):
			raise NotAFunction(site.callee, callee)
		need, got = callee.value_arity(), len(site.args)
		if need != got:
			raise ArityMismatch(site.callee, need, got)
		for index, (formal, arg) in enumerate(zip(callee.param_types, site.args), 1):
			actual = self.check(arg)
			if not is_assignable(formal, actual):
				raise TypeMismatch("argument %d of %s"%(index, site.callee), formal, actual)
		return callee.result_type

	@staticmethod
	def visit_object(it, *_):
		raise UnknownNode(it)
