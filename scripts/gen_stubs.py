#!/usr/bin/env python3
"""
gen_stubs.py - free-function binding entry point

Binds the methods of a class, prints the generated -> raw name map and
optionally writes a .pyi stub for the generated functions.

Usage:
    python scripts/gen_stubs.py package.module:ClassName [--no-currying] [--output PATH]
"""

import argparse
import importlib
import os
import sys

# Get paths
script_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.abspath(os.path.join(script_dir, '..'))

# Add project root to path
sys.path.insert(0, root_dir)

from method_bind import BindingConfig, Generator, StubGenerator


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Generate free-function bindings for a class')
    parser.add_argument('target', help='Class to bind, as package.module:ClassName')
    parser.add_argument('--no-currying', action='store_true',
                        help='Take the receiver as first argument instead of binding an instance')
    parser.add_argument('--no-hints', action='store_true',
                        help='Do not annotate generated parameters')
    parser.add_argument('--no-coercion', action='store_true',
                        help='Pass arguments through unchanged')
    parser.add_argument('--separator', default='_',
                        help='Separator inserted before upper-case letters (default: _)')
    parser.add_argument('--ignore', nargs='*', default=[], metavar='NAME',
                        help='Raw method names to skip')
    parser.add_argument('--output', default=None,
                        help='Write a .pyi stub to this path')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print progress')
    return parser.parse_args(argv)


def load_target(spec: str) -> type:
    """Import package.module:ClassName"""
    module_name, sep, qualname = spec.partition(':')
    if not sep or not qualname:
        raise SystemExit(f'error: target must be package.module:ClassName, got {spec!r}')
    obj = importlib.import_module(module_name)
    for part in qualname.split('.'):
        obj = getattr(obj, part)
    return obj


def main(argv=None):
    args = parse_args(argv)
    target = load_target(args.target)

    config = BindingConfig(
        currying=not args.no_currying,
        hinting=not args.no_hints,
        coercion=not args.no_coercion,
        separator=args.separator,
        ignores=set(args.ignore),
        verbose=args.verbose,
    )
    result = Generator(config).generate(target)

    for name, raw_name in result.names.items():
        arities = ', '.join(str(n) for n in result.functions[name].arities)
        print(f'{name} => {raw_name} [{arities}]')

    if args.output:
        with open(args.output, 'w', newline='\n') as f:
            f.write(StubGenerator(result).generate())
        print(f'=== Wrote {args.output}')


if __name__ == '__main__':
    main()
