#!/usr/bin/env python3
"""
Assembler
=========
Adds the digit and symbol blocks to a core and joins everything.

The core arrives as a token list: words for word mode, single letters for
pronounceable mode (joined with an empty separator). Blocks are placed per
``num_sym_position`` and ``char_grouping``:

    together  prepend       "42!" + "Swift-Otter"          -> 42!Swift-Otter
    together  append        "Swift-Otter" + "42!"          -> Swift-Otter42!
    together  interspersed  ["Swift", "42!", "Otter"]      -> Swift-42!-Otter
    separate  prepend       "!", "42" + "Swift-Otter"      -> !-42-Swift-Otter
    separate  append        "Swift-Otter" + "42", "!"      -> Swift-Otter-42-!
    separate  interspersed  each block at its own boundary -> 42-Swift-!-Otter
"""

import logging
from typing import List, Optional, Sequence

from memphrase.generators.random_chars import DIGITS
from memphrase.generators.randomness import RandomSource, get_rng
from memphrase.options import CharGrouping, GenerationOptions, SymbolPosition

logger = logging.getLogger(__name__)


class Assembler:
    """Builds extras blocks and places them around a token core."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or get_rng()

    # -------------------------------------------------------------------------
    # Extras
    # -------------------------------------------------------------------------

    def _draw(self, alphabet: str, count: int, separator: str) -> str:
        """``count`` uniform draws from ``alphabet``, re-drawing any that equal a 1-char separator."""
        if count <= 0 or not alphabet:
            return ''
        avoid = separator if len(separator) == 1 and separator in alphabet else None
        if avoid is not None and set(alphabet) == {avoid}:
            logger.warning("Every character of %r is the separator; no extras added", alphabet)
            return ''
        chars = []
        while len(chars) < count:
            ch = self.rng.choice(alphabet)
            if ch != avoid:
                chars.append(ch)
        return ''.join(chars)

    def digit_block(self, count: int, separator: str = '') -> str:
        return self._draw(DIGITS, count, separator)

    def symbol_block(self, count: int, symbols: str, separator: str = '') -> str:
        return self._draw(symbols, count, separator)

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    def _insert(self, tokens: List[str], item: str) -> None:
        tokens.insert(self.rng.randbelow(len(tokens) + 1), item)

    def place(self,
              tokens: Sequence[str],
              digits: str,
              symbols: str,
              separator: str,
              position: SymbolPosition = SymbolPosition.APPEND,
              grouping: CharGrouping = CharGrouping.TOGETHER) -> str:
        """Join ``tokens`` with ``separator`` and place the extras blocks."""
        position = SymbolPosition(position)
        grouping = CharGrouping(grouping)
        tokens = [t for t in tokens if t]
        core = separator.join(tokens)

        if grouping is CharGrouping.TOGETHER:
            block = digits + symbols
            if not block:
                return core
            if position is SymbolPosition.PREPEND:
                return block + core
            if position is SymbolPosition.APPEND:
                return core + block
            self._insert(tokens, block)
            return separator.join(tokens)

        elements = [e for e in (digits, symbols) if e]
        if not elements:
            return core
        self.rng.shuffle(elements)

        if position is SymbolPosition.INTERSPERSED:
            for element in elements:
                self._insert(tokens, element)
            return separator.join(tokens)
        if position is SymbolPosition.PREPEND:
            return separator.join(elements + tokens)
        return separator.join(tokens + elements)

    def assemble(self, tokens: Sequence[str], options: GenerationOptions,
                 separator: Optional[str] = None) -> str:
        """
        Generate extras for ``options`` and place them around ``tokens``.

        ``separator`` defaults to ``options.separator``; pronounceable mode
        passes ``''``.
        """
        if separator is None:
            separator = options.separator
        digits = self.digit_block(options.num_digits, separator)
        symbols = self.symbol_block(options.num_symbols, options.symbol_set, separator)
        return self.place(tokens, digits, symbols, separator,
                          options.num_sym_position, options.char_grouping)


__all__ = ["Assembler"]
