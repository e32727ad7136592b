#!/usr/bin/env python3
"""
Memphrase CLI
=============
Command-line interface for passphrase generation and strength scoring.

Usage:
    memphrase generate -n 5
    memphrase generate --mode pronounceable --syllables 6 --digits 2
    memphrase score "Swift-Amber-Otter-Run"
    memphrase pattern --words 3 --category Adjectives --category Animals
    memphrase categories
"""

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from memphrase import __version__

# =============================================================================
# Constants
# =============================================================================

MODES = ['words', 'pronounceable', 'randomChars']
POSITIONS = ['append', 'prepend', 'interspersed']
GROUPINGS = ['together', 'separate']
COMPLEXITIES = ['simple', 'balanced', 'complex']

# =============================================================================
# Utilities
# =============================================================================

class Output:
    """Handles CLI output with quiet mode support."""

    def __init__(self, quiet: bool = False, console: Console = None, err_console: Console = None):
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def print(self, *args, **kwargs):
        if not self.quiet:
            self.console.print(*args, **kwargs)

    def result(self, text: str):
        """Print a generated secret; shown even in quiet mode, never styled."""
        self.console.print(text, markup=False, highlight=False, soft_wrap=True)

    def error(self, msg: str):
        if not msg.startswith("Error:"):
            msg = f"Error: {msg}"
        self.err_console.print(msg, style="red", markup=False, highlight=False, soft_wrap=True)

    def table(self, headers: list, rows: list, title: str = None):
        """Print a rich table."""
        if self.quiet:
            return
        table = Table(title=title)
        for header in headers:
            table.add_column(str(header))
        for row in rows:
            table.add_row(*(str(c) for c in row))
        self.console.print(table)


def setup_logging(verbose: bool = False):
    """Route library logging through rich; DEBUG with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_options(args):
    """GenerationOptions from parsed arguments; unset flags keep app.yaml defaults."""
    from memphrase import GenerationOptions

    values = {
        'generation_mode': args.mode,
        'num_words': args.words,
        'separator': args.separator,
        'num_digits': args.digits,
        'num_symbols': args.symbols,
        'num_sym_position': args.position,
        'char_grouping': args.grouping,
        'selected_categories': args.category,
        'syllables': args.syllables,
        'complexity': args.complexity,
        'length': args.length,
        'custom_symbols': args.custom_symbols,
    }
    if args.no_capitalize:
        values['capitalize'] = False
    if args.no_lower:
        values['include_lowercase'] = False
    if args.no_upper:
        values['include_uppercase'] = False
    if args.no_digits_class:
        values['include_digits'] = False
    if args.no_symbols_class:
        values['include_symbols'] = False
    return GenerationOptions(**{k: v for k, v in values.items() if v is not None})


def add_option_arguments(p):
    """Flags shared by ``generate`` and ``score``."""
    p.add_argument('--mode', '-m', choices=MODES, help='Generation mode (default: words)')

    g = p.add_argument_group('word mode')
    g.add_argument('--words', '-w', type=int, help='Number of words')
    g.add_argument('--separator', help='Separator between words')
    g.add_argument('--category', '-c', action='append',
                   help='Word category or role (repeatable, e.g. -c Adjectives -c Animals)')
    g.add_argument('--no-capitalize', action='store_true', help='Keep words lowercase')

    g = p.add_argument_group('extras')
    g.add_argument('--digits', '-d', type=int, help='Number of digits to add')
    g.add_argument('--symbols', '-s', type=int, help='Number of symbols to add')
    g.add_argument('--position', choices=POSITIONS, help='Where digits/symbols go')
    g.add_argument('--grouping', choices=GROUPINGS, help='Digits and symbols as one block or two')
    g.add_argument('--custom-symbols', help='Symbol alphabet to use instead of the default')

    g = p.add_argument_group('pronounceable mode')
    g.add_argument('--syllables', type=int, help='Number of syllables (2-8)')
    g.add_argument('--complexity', choices=COMPLEXITIES, help='Phoneme table size')

    g = p.add_argument_group('random mode')
    g.add_argument('--length', '-l', type=int, help='Password length')
    g.add_argument('--no-lower', action='store_true', help='Exclude lowercase letters')
    g.add_argument('--no-upper', action='store_true', help='Exclude uppercase letters')
    g.add_argument('--no-digits-class', action='store_true', help='Exclude digits')
    g.add_argument('--no-symbols-class', action='store_true', help='Exclude symbols')


# =============================================================================
# Commands
# =============================================================================

def cmd_generate(args, out: Output):
    """Generate passphrases."""
    from memphrase import Memphrase, is_sentinel

    options = build_options(args)
    engine = Memphrase()

    results = []
    for _ in range(args.count):
        secret = engine.generate(options)
        if is_sentinel(secret):
            out.error(secret)
            return 1
        results.append(secret)

    if args.json:
        payload = []
        for secret in results:
            entry = {'password': secret}
            if args.strength:
                entry['strength'] = engine.score(secret, options).to_dict()
            payload.append(entry)
        out.result(json.dumps(payload, indent=2))
        return 0

    if not args.strength or out.quiet:
        for secret in results:
            out.result(secret)
        return 0

    rows = []
    for i, secret in enumerate(results, 1):
        strength = engine.score(secret, options)
        # passwords may contain [ ], which rich would read as markup
        rows.append([i, escape(secret), f"[{strength.style}]{strength.label}[/]",
                     f"{strength.entropy_bits:.1f}"])
    out.table(['#', 'Password', 'Strength', 'Bits'], rows)
    return 0


def cmd_score(args, out: Output):
    """Score a password."""
    from memphrase import Memphrase

    engine = Memphrase()
    result = engine.score(args.password, build_options(args))

    if args.json:
        out.result(json.dumps(result.to_dict(), indent=2))
        return 0

    out.print(f"[bold]Strength:[/] [{result.style}]{result.label}[/] ({result.score}/4)")
    out.print(f"[bold]Entropy:[/]  {result.entropy_bits:.1f} bits")
    if out.quiet:
        out.result(result.label)
    return 0


def cmd_pattern(args, out: Output):
    """Describe the word template for a word count and categories."""
    from memphrase import Memphrase
    from memphrase.options import default_categories

    engine = Memphrase()
    categories = args.category if args.category else default_categories()
    description = engine.describe_pattern(args.words, categories)
    if not description:
        out.error("Selected categories hold no words.")
        return 1
    out.result(description)
    return 0


def cmd_categories(args, out: Output):
    """List word categories."""
    from memphrase import Memphrase

    engine = Memphrase()
    taxonomy = engine.taxonomy
    engine.preload()

    if args.json:
        payload = {
            role: {leaf: len(taxonomy.words(leaf)) for leaf in leaves}
            for role, leaves in engine.categories().items()
        }
        out.result(json.dumps(payload, indent=2))
        return 0

    rows = []
    for role, leaves in engine.categories().items():
        for leaf in leaves:
            rows.append([role, leaf, len(taxonomy.words(leaf))])
    out.table(['Role', 'Category', 'Words'], rows, title='Word categories')
    return 0


# =============================================================================
# Main
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='memphrase',
        description='Memphrase - Memorable Passphrase Generator',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate -n 5
  %(prog)s generate --words 3 -c Adjectives -c Animals --digits 2 --symbols 1
  %(prog)s generate --mode pronounceable --syllables 6 --complexity complex
  %(prog)s generate --mode randomChars --length 24 --strength
  %(prog)s score "Swift-Amber-Otter-Run"
  %(prog)s pattern --words 4
  %(prog)s categories
"""
    )

    parser.add_argument('--version', '-V', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--quiet', '-q', action='store_true', help='Suppress non-essential output')
    parser.add_argument('--verbose', '-v', action='store_true', help='Debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # --- generate ---
    p = subparsers.add_parser('generate', aliases=['gen', 'g'], help='Generate passphrases')
    p.add_argument('-n', '--count', type=int, default=1, help='Number of passphrases (default: 1)')
    p.add_argument('--strength', action='store_true', help='Show strength and entropy')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    add_option_arguments(p)

    # --- score ---
    p = subparsers.add_parser('score', aliases=['s'], help='Score a password')
    p.add_argument('password', help='Password to score')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')
    add_option_arguments(p)

    # --- pattern ---
    p = subparsers.add_parser('pattern', help='Describe the word template')
    p.add_argument('--words', '-w', type=int, default=4, help='Number of words (default: 4)')
    p.add_argument('--category', '-c', action='append', help='Word category or role (repeatable)')

    # --- categories ---
    p = subparsers.add_parser('categories', aliases=['cats'], help='List word categories')
    p.add_argument('--json', '-j', action='store_true', help='Output as JSON')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    setup_logging(args.verbose)

    # Handle aliases
    cmd_map = {
        'gen': 'generate', 'g': 'generate',
        's': 'score',
        'cats': 'categories',
    }
    command = cmd_map.get(args.command, args.command)

    out = Output(quiet=args.quiet)

    commands = {
        'generate': cmd_generate,
        'score': cmd_score,
        'pattern': cmd_pattern,
        'categories': cmd_categories,
    }

    handler = commands.get(command)
    if handler:
        try:
            return handler(args, out)
        except KeyboardInterrupt:
            out.print("\nCancelled.")
            return 130
        except (ValueError, FileNotFoundError) as e:
            out.error(str(e))
            if args.verbose:
                import traceback
                traceback.print_exc()
            return 1

    parser.print_help()
    return 0


if __name__ == '__main__':
    sys.exit(main())
