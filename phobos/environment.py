"""
Simplest possible environment concept.

This is the canonical list-structured search: bindings go on the end,
lookup scans from the end, and leaving a scope means chopping the list
back to the length it had when the scope began. Shadowing falls out for free.

"""
from typing import Iterator, Optional
from .static.domain import PhobosType

Mark = int

class TypeEnvironment:
	_bindings: list[tuple[str, PhobosType]]

	def __init__(self):
		self._bindings = []

	def __len__(self): return len(self._bindings)
	def __iter__(self) -> Iterator[tuple[str, PhobosType]]: return iter(self._bindings)

	def bind(self, name:str, typ:PhobosType):
		assert isinstance(typ, PhobosType), typ
		self._bindings.append((name, typ))

	def lookup(self, name:str) -> Optional[PhobosType]:
		for key, typ in reversed(self._bindings):
			if key == name: return typ

	def snapshot(self) -> Mark:
		return len(self._bindings)

	def restore(self, mark:Mark):
		assert 0 <= mark <= len(self._bindings), (mark, len(self._bindings))
		del self._bindings[mark:]
