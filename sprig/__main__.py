"""CLI entry point for the Sprig interpreter.

Usage:
    python -m sprig [-v|-vv|-vvv] [--max-depth N] <program_file>
    python -m sprig --emit-ast <program_file>
    python -m sprig [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --max-depth   Maximum evaluation depth before the run is aborted
  --emit-ast    Parse the given .sprig file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from .ast_json import program_to_obj, program_from_obj
from .errors import SprigError, LexError, ParseError
from .interpreter import DEFAULT_MAX_DEPTH, Interpreter, parse_program


def read_file(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    try:
        return parse_program(source)
    except (LexError, ParseError) as e:
        print(f"Syntax error: {e}", file=sys.stderr)
        sys.exit(1)


def execute(statements, args) -> None:
    interpreter = Interpreter(debug_level=args.v, max_depth=args.max_depth)
    try:
        interpreter.interpret(statements)
    except SprigError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description="Sprig language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--max-depth', type=int, default=DEFAULT_MAX_DEPTH,
                        help='maximum evaluation depth (default: %(default)s)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='SPRIG_FILE', help='emit AST JSON for the given .sprig file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Sprig program file (.sprig) to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        statements = parse_or_exit(read_file(program_file))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(program_to_obj(statements), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        source = read_file(Path(args.ast))
        try:
            statements = program_from_obj(json.loads(source))
        except (TypeError, ValueError) as e:
            print(f"Error: invalid AST file: {e}", file=sys.stderr)
            sys.exit(1)
        execute(statements, args)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    statements = parse_or_exit(read_file(Path(args.program)))
    execute(statements, args)


if __name__ == '__main__':
    main()
