"""
This is a compiler from Phobos to Lua.

{0}

The parser is a separate program. Its output is a JSON document describing the tree,
and that document is the input here. For example:

    phobos program.json

will type-check the program and, if that goes well, write the Lua translation to standard output.

    phobos -c program.json

will only check it, and say what it's doing along the way. Use "-" to read the document from standard input.

    phobos -h

will explain all the arguments.
"""
import sys, argparse, json
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="phobos",
	description="Compiler from Phobos (as a JSON syntax tree) to Lua.",
)
parser.add_argument("program", help="path to the tree document, or - for standard input.")
parser.add_argument('-c', "--check", action="count", help="Check the program verbosely but do not translate it. Repeat for more detail.")
parser.add_argument('-o', "--output", help="Write the Lua text here instead of to standard output.")
parser.add_argument("--indent", type=int, default=4, help="Spaces per level of nesting in the output. (Default 4.)")

def _read(args, report):
	if args.program == "-":
		return "<stdin>", sys.stdin.read()
	path = Path(args.program)
	try:
		return path, path.read_text(encoding="utf-8")
	except FileNotFoundError:
		report.no_such_file(path)
	except (OSError, UnicodeDecodeError) as ex:
		report.broken_file(path, str(ex))
	return path, None

def run(args):
	from .diagnostics import Report
	from .interchange import loads, MalformedTree
	from .static.check import typecheck
	from .static.issues import TypeCheckError
	report = Report(verbose=args.check)
	path, text = _read(args, report)
	if text is not None:
		try:
			program = loads(text)
		except json.JSONDecodeError as ex:
			report.broken_document(path, text, ex.pos, ex.msg)
		except MalformedTree as ex:
			report.malformed_tree(path, str(ex))
		else:
			report.info("Loaded", len(program.decls), "declaration(s) from", path)
			try: typecheck(program, report)
			except TypeCheckError as ex: report.type_error(ex)
	if report.ok():
		if args.check:
			print("Looks plausible to me.", file=sys.stderr)
		else:
			_emit(program, args, report)
	if report.sick():
		report.complain_to_console()
		return 1
	return 0

def _emit(program, args, report):
	from .codegen import generate, translate
	if not args.output:
		translate(program, args.indent)
		return
	try:
		with open(args.output, "w", encoding="utf-8") as fh:
			generate(program, fh, args.indent)
	except OSError as ex:  # SinkWriteFailure included
		report.unwritable_file(Path(args.output), str(ex))

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
