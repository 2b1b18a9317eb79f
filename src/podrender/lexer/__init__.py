"""Line-oriented lexer for Pod source.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, LexerMode
├── core.py              # Lexer class (line window + mode dispatch)
├── modes.py             # LexerMode enum, directive name constants
└── classifiers.py       # Directive classification and block config parsing

Usage:
    >>> from podrender.lexer import Lexer
    >>> [t.type.name for t in Lexer("=head1 NAME\\n").tokenize()]
    ['ABBREVIATED', 'EOF']

"""

from podrender.lexer.classifiers import parse_block_config
from podrender.lexer.core import Lexer
from podrender.lexer.modes import LexerMode

__all__ = ["Lexer", "LexerMode", "parse_block_config"]
