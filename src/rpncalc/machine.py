from collections import deque
from enum import Enum
import logging
import math

import numpy as np

from .lexer import Lexer
from .util import (ArityError, DomainError, RPNError, UnknownCommand,
                   fmt_number)


logger = logging.getLogger(__name__)


def _factorial(n):
    # 171! no longer fits in a double
    if n > 170:
        return math.inf
    return float(math.factorial(int(n)))


class Operation(Enum):
    '''
    Arithmetic operations a machine can apply to its stack.

    Each member is (symbol, arity, function[, guard, error]). The function
    is pure, takes operands in push order (bottom first) and follows IEEE
    floating point: NaN and infinities come back as results, not
    exceptions. The optional guard rejects operands outside the domain with
    the given error message.
    '''
    ADD = ('+', 2, np.add)
    SUBTRACT = ('-', 2, np.subtract)
    MULTIPLY = ('*', 2, np.multiply)
    DIVIDE = ('/', 2, np.divide,
              lambda a, b: b != 0, 'Division by zero')
    POWER = ('^', 2, np.power)
    # C fmod, sign follows the dividend
    MODULO = ('%', 2, np.fmod)

    # Trigonometry works in degrees
    SIN = ('sin', 1, lambda a: np.sin(np.radians(a)))
    COS = ('cos', 1, lambda a: np.cos(np.radians(a)))
    TAN = ('tan', 1, lambda a: np.tan(np.radians(a)))
    ASIN = ('asin', 1, lambda a: np.degrees(np.arcsin(a)))
    ACOS = ('acos', 1, lambda a: np.degrees(np.arccos(a)))
    ATAN = ('atan', 1, lambda a: np.degrees(np.arctan(a)))

    SQRT = ('sqrt', 1, np.sqrt)
    LN = ('ln', 1, np.log)
    LOG = ('log', 1, np.log10)
    EXP = ('exp', 1, np.exp)
    TEN_POWER = ('10x', 1, lambda a: np.power(10.0, a))
    ABS = ('abs', 1, np.abs)
    CBRT = ('cbrt', 1, np.cbrt)

    RECIPROCAL = ('inv', 1, lambda a: np.divide(1.0, a),
                  lambda a: a != 0, 'Cannot take reciprocal of zero')
    FACTORIAL = ('!', 1, _factorial,
                 lambda a: a >= 0 and float(a).is_integer(),
                 'Factorial needs non-negative integer')
    # x y root: y is the index, x the radicand
    ROOT = ('root', 2, lambda x, y: np.power(x, 1.0 / y),
            lambda x, y: y != 0, 'Cannot take 0th root')

    def __init__(self, symbol, arity, function, guard=None, error=None):
        self.symbol = symbol
        self.arity = arity
        self.function = function
        self.guard = guard
        self.error = error

    @property
    def purpose(self):
        '''
        What the operation is called in "Need N numbers for ..." messages.
        '''
        return _PURPOSES.get(self, self.symbol)

    def check(self, *operands):
        '''
        Raise DomainError if operands are outside the operation's domain.
        '''
        if self.guard is not None and not self.guard(*operands):
            raise DomainError(self.error)

    def apply(self, *operands):
        '''
        Compute the result of the operation on operands, as a plain float.
        '''
        with np.errstate(all='ignore'):
            return float(self.function(*operands))

    def record(self, operands, result):
        '''
        Format the calculation for the status line and calculation history.
        '''
        fmt = _RECORDS.get(self)
        if fmt is None and self.arity == 2:
            fmt = '{0} {op} {1} = {r}'
        elif fmt is None:
            fmt = '{op}({0}) = {r}'
        return fmt.format(*map(fmt_number, operands),
                          op=self.symbol,
                          r=fmt_number(result))


_PURPOSES = {
    Operation.DIVIDE: 'division',
    Operation.RECIPROCAL: 'reciprocal',
    Operation.FACTORIAL: 'factorial',
    Operation.ROOT: 'root (y root x = x^(1/y))',
}

_RECORDS = {
    Operation.RECIPROCAL: '1/{0} = {r}',
    Operation.FACTORIAL: '{0}! = {r}',
    Operation.ROOT: '{1} root {0} = {r}',
}


class Machine:
    '''
    Interactive RPN stack machine (the calculator core).

    A presentation shell appends keystrokes to :attr:`input`, calls
    :meth:`submit_line` or :meth:`submit_single_char`, and renders
    :attr:`stack`, :attr:`message` and :attr:`calc_history` back. Bad input
    never raises out of the machine; it ends up in :attr:`message`.

    Every state-changing attempt saves a copy of the stack to
    :attr:`history` first, including attempts that then fail, so ``undo``
    may restore a stack identical to the current one.
    '''

    HISTORY_SIZE = 10
    WELCOME = 'Type numbers or commands (help for list), ' \
              'Enter to execute, q to quit'
    UNKNOWN = "Unknown command (type 'help' for list)"

    IMMEDIATE = frozenset(Lexer.IMMEDIATE)

    # Command names to operations, including aliases
    OPERATIONS = {operation.symbol: operation for operation in Operation}
    OPERATIONS.update({
        'pow': Operation.POWER,
        'mod': Operation.MODULO,
        'fact': Operation.FACTORIAL,
    })

    def __init__(self):
        '''
        Create empty stack machine.
        '''
        self.stack = []
        self.input = ''
        self.message = type(self).WELCOME
        # Undo log: copies of earlier stacks, most recent last
        self.history = []
        self.calc_history = deque(maxlen=type(self).HISTORY_SIZE)
        self.help_visible = False
        self.lexer = Lexer()

    def submit_line(self):
        '''
        Run the pending input as a complete token, then clear it.

        Numbers are pushed, ``undo`` and ``help`` are handled directly, and
        anything else is looked up as a command or operation.
        '''
        token, self.input = self.input, ''
        if not token:
            return
        logger.debug('Submitting %r on %r', token, self.stack)
        number = self.lexer.number(token)
        if number is not None:
            self._snapshot()
            self._pshstack(number)
            self.message = 'Pushed {}'.format(fmt_number(number))
        elif token == 'undo':
            self.undo()
        elif token == 'help':
            self.show_help()
        else:
            self._snapshot()
            self._run(token)

    def submit_single_char(self, c):
        '''
        Run an operator key pressed without Enter.

        Pending input is flushed through :meth:`submit_line` first. The
        stack is then snapshotted again, even when the flush already did,
        and even when c is not an operator.
        '''
        if self.input:
            self.submit_line()
        self._snapshot()
        if c in type(self).IMMEDIATE:
            self._run(c)

    def reset_stack(self):
        '''
        Hard reset: empty the stack without recording an undo snapshot.
        '''
        logger.debug('Resetting stack %r', self.stack)
        self.stack.clear()
        self.message = 'Stack cleared'

    def undo(self):
        '''
        Restore the stack saved before the last state-changing attempt.
        '''
        if self.history:
            self.stack = self.history.pop()
            self.message = 'Undid last operation'
        else:
            self.message = 'Nothing to undo'

    def show_help(self):
        self.help_visible = True
        self.message = 'Help shown (press any key to close)'

    def close_help(self):
        self.help_visible = False
        self.message = 'Help closed'

    def feed(self, token):
        '''
        Run a command or operation token on the stack.

        Raises RPNError subclasses on failure, with the stack as it was.
        '''
        command = type(self).COMMANDS.get(token)
        if command is not None:
            return command(self)
        operation = type(self).OPERATIONS.get(token)
        if operation is None:
            raise UnknownCommand(type(self).UNKNOWN)
        self._apply(operation)

    def _run(self, token):
        try:
            self.feed(token)
        except RPNError as e:
            logger.info('%s failed: %s', token, e.message)
            self.message = e.message

    def _apply(self, operation):
        '''
        Apply operation to the stack, popping its operands.

        Operands go back on the stack if the operation rejects them.
        '''
        # Popped topmost first; reverse so 2 3 ^ is 2**3, not 3**2.
        operands = list(reversed(self._popstack(operation.arity,
                                                operation.purpose)))
        try:
            operation.check(*operands)
            result = operation.apply(*operands)
        except RPNError:
            self._pshstack(*operands)
            raise
        self._pshstack(result)
        record = operation.record(operands, result)
        logger.debug('%s', record)
        self.calc_history.append(record)
        self.message = record

    def _snapshot(self):
        self.history.append(list(self.stack))

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n, purpose):
        '''
        Pop n elements from stack, topmost first.

        Raises ArityError, popping nothing, if there are fewer than n.
        '''
        if len(self.stack) < n:
            raise ArityError('Need {} number{} for {}'.format(
                n, '' if n == 1 else 's', purpose))
        return [self.stack.pop() for _ in range(n)]

    def revstack(self):
        '''
        Swap two elements at top of stack.
        '''
        if len(self.stack) < 2:
            raise ArityError('Need 2 numbers to swap')
        self.stack[-1], self.stack[-2] = self.stack[-2], self.stack[-1]
        self.message = 'Swapped top 2 values'

    def dropstack(self):
        '''
        Pop and discard element at top of stack.
        '''
        if not self.stack:
            raise ArityError('Stack is empty')
        self.message = 'Dropped {}'.format(fmt_number(self.stack.pop()))

    def clrstack(self):
        '''
        Clear everything from the stack.
        '''
        self.stack.clear()
        self.message = 'Stack cleared'

    # Stack management commands. These don't go in calc_history.
    COMMANDS = {
        'swap': revstack,
        'drop': dropstack,
        'clear': clrstack,
        'clr': clrstack,
    }
