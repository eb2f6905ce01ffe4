"""
Type names, as written in signatures, fields, and let-statements,
stand for PhobosType objects. This maps the one into the other.

Number and String are spelled out here. Anything else must be a record
already bound in the environment. (That includes "Bool": there is no
way to write it down unless somebody declares a record by that name.)
"""
from typing import Sequence
from ..syntax import TypeName, Parameter, Signature
from ..environment import TypeEnvironment
from .domain import PhobosType, NUMBER, STRING, RecordType, FunctionType
from .issues import UnresolvedTypeName

WELL_KNOWN = {
	"Number": NUMBER,
	"String": STRING,
}

class Translator:
	def __init__(self, env:TypeEnvironment):
		self._env = env

	def translate(self, tn:TypeName) -> PhobosType:
		assert isinstance(tn, TypeName), tn
		if tn.name in WELL_KNOWN:
			return WELL_KNOWN[tn.name]
		typ = self._env.lookup(tn.name)
		if isinstance(typ, RecordType):
			return typ
		raise UnresolvedTypeName(tn.name)

	def tour(self, params:Sequence[Parameter]) -> tuple[PhobosType, ...]:
		return tuple(self.translate(p.type_name) for p in params)

	def signature(self, sig:Signature) -> FunctionType:
		return FunctionType(self.tour(sig.params), self.translate(sig.ret))
