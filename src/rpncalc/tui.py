'''
Full-screen terminal interface to the RPN machine.
'''

import string

from prompt_toolkit.application import Application
from prompt_toolkit.filters import Condition
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import (ConditionalContainer, Float,
                                   FloatContainer, HSplit, Layout, VSplit,
                                   Window)
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.styles import Style
from prompt_toolkit.widgets import Frame

from .machine import Machine
from .util import fmt_number


HELP = '''\
RPN Calculator Help

Basic Operations:
  +, -, *, /, ^ (pow), % (mod)

Trigonometry (degrees):
  sin, cos, tan
  asin, acos, atan

Other Math:
  sqrt, cbrt, ln, log, exp, 10x, abs
  inv (1/x), ! (fact), root (y root x)

Stack Operations:
  swap, drop, clear/clr, undo
  Esc clears the stack, q quits

Press any key to close'''

STYLE = Style.from_dict({
    'title': 'fg:ansicyan',
    'stack': 'fg:ansiwhite',
    'input': 'fg:ansiyellow',
    'message': 'fg:ansigreen',
    'history': 'fg:ansimagenta',
    'help': 'fg:ansiwhite bg:ansiblue',
})

# Keys that build up the pending input. q is special-cased first.
_NUMERIC = frozenset(string.digits + '.')
_LETTERS = frozenset(string.ascii_letters)


def handle_key(machine, key):
    '''
    Dispatch one key press to machine.

    :param key: The character typed, or a prompt_toolkit Keys value for
                Enter, Backspace and Escape.
    :return: False if the key asks to quit.
    '''
    # While help is up, any key just closes it.
    if machine.help_visible:
        machine.close_help()
        return True
    if key == 'q' and not machine.input:
        return False
    if key in _NUMERIC:
        machine.input += key
    elif key in Machine.IMMEDIATE:
        machine.submit_single_char(key)
    elif key in _LETTERS:
        machine.input += key
    elif key == Keys.Enter:
        machine.submit_line()
    elif key == Keys.Backspace:
        machine.input = machine.input[:-1]
    elif key == Keys.Escape:
        machine.reset_stack()
    return True


def _lines(items):
    return '\n'.join(items)


def build_application(machine, **kwargs):
    '''
    Build the prompt_toolkit application rendering machine.

    Running it takes over the terminal until q or Ctrl-C, and gives it back
    on every way out. Extra keyword arguments go to Application, e.g. input
    and output.
    '''
    def stack_text():
        return _lines('{}: {}'.format(index, fmt_number(value))
                      for index, value in enumerate(machine.stack))

    def text(control, style, **window_args):
        return Window(FormattedTextControl(control), style=style,
                      **window_args)

    left = HSplit([
        Frame(text('RPN Calculator', 'class:title', height=1)),
        Frame(text(stack_text, 'class:stack'), title='Stack'),
        Frame(text(lambda: machine.input, 'class:input', height=1),
              title='Input'),
        Frame(text(lambda: machine.message, 'class:message', height=1),
              title='Message'),
    ], width=Dimension(weight=7))
    history = Frame(text(lambda: _lines(machine.calc_history),
                         'class:history'),
                    title='History',
                    width=Dimension(weight=3))
    help_popup = ConditionalContainer(
        Frame(text(HELP, 'class:help'), title='Help', style='class:help'),
        filter=Condition(lambda: machine.help_visible))

    root = FloatContainer(content=VSplit([left, history]),
                          floats=[Float(content=help_popup)])

    bindings = KeyBindings()

    @bindings.add('c-c')
    def _(event):
        # Like any other key, only closes help when it is up
        if machine.help_visible:
            machine.close_help()
        else:
            event.app.exit()

    @bindings.add(Keys.Any)
    def _(event):
        if not handle_key(machine, event.key_sequence[0].key):
            event.app.exit()

    application = Application(layout=Layout(root),
                              key_bindings=bindings,
                              style=STYLE,
                              full_screen=True,
                              **kwargs)
    # Escape alone clears the stack; don't wait long for a sequence
    application.ttimeoutlen = 0.05
    return application


def run(machine=None):
    '''
    Run the terminal interface until the user quits. Return the machine.
    '''
    if machine is None:
        machine = Machine()
    build_application(machine).run()
    return machine
