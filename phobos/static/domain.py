"""
The Algebra of Type Checking
=============================

The PhobosType class hierarchy represents type judgements.
There are four atoms, plus function-types and record-types.
All of them compare structurally: two FunctionType objects with
the same parameter and result types are the same type, and a
record is known by its name and the types of its fields.

---------------------------------------------------------------------------
"""

from typing import Sequence, NamedTuple

class PhobosType:
	def _key(self) -> tuple:
		raise NotImplementedError(type(self))
	def __eq__(self, other):
		return isinstance(other, PhobosType) and self._key() == other._key()
	def __hash__(self):
		return hash(self._key())
	def __repr__(self) -> str:
		return self.render()
	def render(self) -> str:
		raise NotImplementedError(type(self))
	def value_arity(self) -> int:
		# Most things are not callable.
		return -1

class Atom(PhobosType):
	def __init__(self, name:str):
		self.name = name
	def _key(self): return ("atom", self.name)
	def render(self): return self.name

VOID = Atom("Void")
NUMBER = Atom("Number")
STRING = Atom("String")
BOOL = Atom("Bool")

class FunctionType(PhobosType):
	param_types: tuple[PhobosType, ...]
	result_type: PhobosType
	def __init__(self, param_types:Sequence[PhobosType], result_type:PhobosType):
		assert all(isinstance(p, PhobosType) for p in param_types), param_types
		assert isinstance(result_type, PhobosType), result_type
		self.param_types, self.result_type = tuple(param_types), result_type
	def _key(self): return ("fn", self.param_types, self.result_type)
	def render(self):
		return "(%s) -> %s"%(', '.join(p.render() for p in self.param_types), self.result_type.render())
	def value_arity(self):
		return len(self.param_types)

class Field(NamedTuple):
	name: str
	typ: PhobosType

class RecordType(PhobosType):
	""" Nominal in spirit: it renders as just its name. """
	name: str
	fields: tuple[Field, ...]
	def __init__(self, name:str, fields:Sequence[Field]):
		self.name, self.fields = name, tuple(fields)
	def _key(self): return ("record", self.name, self.fields)
	def render(self): return self.name
	def field_type(self, name:str):
		for f in self.fields:
			if f.name == name: return f.typ

def is_assignable(target:PhobosType, source:PhobosType) -> bool:
	"""
	May a value of the source type be stored where the target type is declared?
	At present the only such pair is Number onto Number. Not even String onto String.
	"""
	return target == NUMBER and source == NUMBER
