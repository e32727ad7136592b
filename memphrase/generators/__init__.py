"""
Memphrase Generators
====================
The pieces the engine combines into a secret.

Word mode:
- LexicalSelector: selected categories -> per-role word pools
- PatternComposer: pools -> words in a memorable grammatical template

Pronounceable mode:
- SyllableGenerator: phoneme tables -> pronounceable letters

Random mode:
- RandomCharGenerator: uniform characters from the enabled classes

Shared:
- Assembler: digit/symbol blocks and their placement
- RandomSource: the one source of randomness every generator draws from
"""

from .randomness import RandomSource, get_rng
from .lexical import LexicalSelector, RolePools
from .patterns import PatternComposer, describe_pattern, normalize_case
from .pronounceable import SyllableGenerator, cleanup_word, split_syllables
from .random_chars import RandomCharGenerator, character_pool
from .assembler import Assembler

__all__ = [
    'RandomSource',
    'get_rng',
    'LexicalSelector',
    'RolePools',
    'PatternComposer',
    'describe_pattern',
    'normalize_case',
    'SyllableGenerator',
    'cleanup_word',
    'split_syllables',
    'RandomCharGenerator',
    'character_pool',
    'Assembler',
]
