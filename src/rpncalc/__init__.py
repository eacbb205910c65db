'''
Interactive RPN calculator.

A stack machine fed one token at a time: numbers are pushed, operators and
functions act on the top of the stack. Every step leaves a status message,
failed steps leave the stack as it was, and any step can be undone.

Runs as a full-screen terminal program, or non-interactively over
expressions given on the command line or piped on stdin.
'''

from .cli import CLI
from .lexer import Lexer
from .machine import Machine, Operation
from .util import RPNError


__all__ = 'Machine', 'Operation', 'Lexer', 'CLI', 'RPNError'
