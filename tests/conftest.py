from typing import Callable

from pytest import fixture

from rpncalc.machine import Machine


@fixture
def machine() -> Machine:
    return Machine()


@fixture
def feed(machine: Machine) -> Callable[..., Machine]:
    '''
    Submit each token as though typed and confirmed with Enter.
    '''
    def feed(*tokens: str) -> Machine:
        for token in tokens:
            machine.input = token
            machine.submit_line()
        return machine
    return feed
