import sys, random
from pathlib import Path
from boozetools.support.failureprone import SourceText, illustration

from .static.issues import TypeCheckError

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Blasted Thing',
		'Confound it', 'Crud', 'Curses', "Crikey",
		'Dag Nabbit', 'Drat', 'Fiddlesticks',
		'Gack', 'Good Grief', "Great Scott",
		'Jeepers', 'Heavens', 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects issues for the console, and prints progress when asked to be verbose. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	def verbosity(self): return self._verbose

	def issue(self, it:"Pic"):
		self._issues.append(it)

	def info(self, *args, level=1):
		if self._verbose >= level:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	# Methods the command-line driver is likely to call:

	def _file_error(self, path:Path, prefix:str, hint:str=""):
		self.issue(Pic(prefix+" "+str(path), [hint] if hint else []))

	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")

	def broken_file(self, path:Path, hint:str):
		self._file_error(path, "Something went pear-shaped while trying to read", hint)

	def unwritable_file(self, path, hint:str):
		self._file_error(path, "Something went pear-shaped while trying to write", hint)

	def broken_document(self, path, text:str, offset:int, hint:str):
		""" The tree document is not even well-formed JSON. Show where. """
		source = SourceText(text, filename=str(path))
		row, col = source.find_row_col(offset)
		single_line = source.line_of_text(row)
		picture = illustration(single_line, col, 1, prefix='% 6d |' % row, caption=hint)
		intro = "The tree in %s got garbled here:"%path
		self.issue(Pic(intro, [picture]))

	def malformed_tree(self, path, hint:str):
		intro = "The document in %s does not describe a program I recognize."%path
		self.issue(Pic(intro, [hint]))

	# Methods specific to report type-checking issues.

	def type_error(self, ex:TypeCheckError):
		intro = "Type-checking found a problem:"
		self.issue(Pic(intro, [str(ex)]))

class Pic:
	def __init__(self, intro:str, lines:list[str], footer=()):
		self._intro, self._lines, self._footer = intro, lines, footer
	def as_text(self):
		lines = [self._intro, ""]
		lines.extend(self._lines)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
