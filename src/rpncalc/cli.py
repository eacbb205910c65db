from importlib.metadata import PackageNotFoundError, version
from os import isatty
import sys
from argparse import ArgumentParser, REMAINDER
import logging

from .util import RPNError, fmt_number, setup_logging
from .machine import Machine
from .lexer import Lexer
from . import tui


def _version():
    try:
        return version('rpncalc')
    except PackageNotFoundError:
        return 'unknown'


class CLI:
    '''
    Command line interface to RPN system.
    '''

    DEFAULT_LOG_LEVEL = 'WARNING'
    LOG_LEVELS = 'DEBUG', 'INFO', 'WARNING', 'ERROR'

    def dumper(self):
        '''
        Dump all lexemes matches and the operation they name.
        '''
        lexer = Lexer()
        print('[groups]\t<repr(lexeme)>\t<operation>')
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if not lexer.isfeedable(match):
                        continue
                    matched = match.group(0)
                    groups = lexer.matchedgroups(match)
                    operation = Machine.OPERATIONS.get(matched)
                    print(*groups.keys(),
                          repr(matched),
                          operation.name if operation else '',
                          sep='\t')
            except RPNError as e:
                print(e.args[0], file=sys.stderr)

    def executor(self):
        '''
        Run machine (RPN calculator) over lines of tokens, print the stack.
        '''
        machine = Machine()
        lexer = Lexer()
        for line in self.args.expressions:
            try:
                for match in lexer.lex(line):
                    if lexer.isfeedable(match):
                        machine.input = match.group(0)
                        machine.submit_line()
                        if self.args.verbose:
                            print(machine.message)
            # Abort entire rest of line, makes sense anyway
            except RPNError as e:
                print(e.args[0], file=sys.stderr)
        self.printstack(machine)
        return machine

    def interactive(self):
        '''
        Run the full-screen calculator.
        '''
        machine = tui.run()
        self.printstack(machine)
        return machine

    def printstack(self, machine):
        '''
        Print all elements on the stack, bottom of the stack first.
        '''
        for index, value in enumerate(machine.stack):
            print('{}: {}'.format(index, fmt_number(value)))

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _interactive(self):
        '''
        Use the full-screen interface if nothing else was asked for and both
        stdin/out are a tty.
        '''
        return self.args.expressions is None and \
            self.args.action == self.executor and \
            isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno())

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='RPN calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='print the message after '
                                               'every token')
        self.argument_parser.add_argument('-e', '--expression',
                                          nargs=REMAINDER,
                                          dest='expressions')
        self.argument_parser.add_argument('--log-level',
                                          choices=self.LOG_LEVELS,
                                          default=self.DEFAULT_LOG_LEVEL)
        self.argument_parser.add_argument('--log-file')
        self.argument_parser.add_argument('--version',
                                          action='version',
                                          version=_version())
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        interactive = self._interactive()
        # The full-screen interface owns the terminal; log to file only.
        setup_logging(level=getattr(logging, self.args.log_level),
                      log_file=self.args.log_file,
                      console=not interactive)
        if interactive:
            self.args.action = self.interactive
        elif self.args.expressions is None:
            self.args.expressions = sys.stdin
        try:
            return self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
