from functools import reduce
import math
import operator

import regex

from .util import RPNError


class Lexer:
    '''
    Lexer for calculator tokens.

    Recognises decimal numbers, command words and the immediate operator
    characters. Holds no internal state.
    '''
    # Decimal literal, unsigned. Signs are handled by SIGNED below.
    NUMBER = r'''
              (?:
                  # 1, 12, 1. (notice trailing dot), 1.3
                  \d+
                  (?:
                      \.
                      \d*
                  )?
              |
                  # .2
                  \.
                  \d+
              )
              (?:
                  # 1e5, 2.5E-3
                  [eE]
                  [-+]?
                  \d+
              )?
              '''
    SIGNED = r'[-+]?' + NUMBER

    # Operators complete on their own, no Enter needed.
    IMMEDIATE = '+-*/^%!'
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, IMMEDIATE)) + r')'
    # Command names: sin, clr, 10x. Must hold at least one non-digit.
    WORD = r'\d*[^\W\d]\w*'
    SPACE = r'\s+'

    # All possible lexemes. A number may not run straight into a word, so
    # 10x lexes as one word rather than 10 then x.
    LEXEME = r'(?<number>' + NUMBER + r')(?![\w.])|' \
             r'(?<word>' + WORD + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<space>' + SPACE + r')'
    # Signed numbers only count as a whole whitespace-delimited word,
    # otherwise 4-5 would be 4 then -5.
    SIGNED_LEXEME = r'(?<number>[-+]' + NUMBER + r')(?!\S)'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.ASCII,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def number(self, text):
        '''
        Return text as a finite float if it is a decimal literal, else None.
        '''
        if regex.fullmatch(type(self).SIGNED, text,
                           flags=type(self).FLAGS) is None:
            return None
        value = float(text)
        if not math.isfinite(value):
            return None
        return value

    def lex(self, line):
        '''
        Take a line and return all lexemes.

        Raises RPNError on the first character no lexeme accepts, after
        yielding everything before it.
        '''
        at_word_start = True
        while line:
            match = None
            if at_word_start:
                match = regex.match(type(self).SIGNED_LEXEME, line,
                                    flags=type(self).FLAGS)
            if match is None:
                match = regex.match(type(self).LEXEME, line,
                                    flags=type(self).FLAGS)
            if match is None:
                break
            yield match
            at_word_start = bool(match.groupdict().get('space'))
            line = line[len(match.group(0)):]
        if line:
            raise RPNError("Couldn't lex {0}".format(line.strip()))

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return lexeme kind to matched text, for the groups that matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}
