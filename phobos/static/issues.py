"""
The ways a program can fail to type-check.

The checker stops at the first of these. Each carries the particulars as attributes,
and str() of each is a sentence fit for a person to read.
"""
from .domain import PhobosType

class TypeCheckError(Exception):
	""" Base class for everything the type-checker complains about. """
	phase = "Type-Check"

class UndefinedIdentifier(TypeCheckError):
	def __init__(self, name:str):
		super().__init__("Undefined identifier: %s"%name)
		self.name = name

class UndefinedFunction(TypeCheckError):
	def __init__(self, name:str):
		super().__init__("Undefined function: %s"%name)
		self.name = name

class NotAFunction(TypeCheckError):
	def __init__(self, name:str, actual:PhobosType):
		super().__init__("%s is not a function; it is %s"%(name, actual))
		self.name, self.actual = name, actual

class ArityMismatch(TypeCheckError):
	def __init__(self, name:str, expected:int, actual:int):
		plural = '' if expected == 1 else 's'
		super().__init__("%s takes %d argument%s, but got %d instead"%(name, expected, plural, actual))
		self.name, self.expected, self.actual = name, expected, actual

class TypeMismatch(TypeCheckError):
	def __init__(self, context:str, expected:PhobosType, actual:PhobosType):
		super().__init__("Type mismatch in %s: %s versus %s"%(context, expected, actual))
		self.context, self.expected, self.actual = context, expected, actual

class ConditionNotBoolean(TypeCheckError):
	def __init__(self, actual:PhobosType):
		super().__init__("Condition must be a Bool, got %s"%actual)
		self.actual = actual

class UnresolvedTypeName(TypeCheckError):
	def __init__(self, name:str):
		super().__init__("I do not know a type called %s"%name)
		self.name = name

class UnknownNode(TypeCheckError):
	def __init__(self, node:object):
		super().__init__("There is no type rule for a %s"%type(node).__name__)
		self.node = node
