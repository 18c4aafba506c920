from pytest import fixture, FixtureRequest

from infix.engine import Calculator
from infix.numeric import BACKENDS


@fixture(params=sorted(BACKENDS))
def backend(request: FixtureRequest):
    '''
    Every numeric backend, fresh for each test.
    '''
    return BACKENDS[request.param]()


@fixture
def calculator(backend) -> Calculator:
    return Calculator(backend)


@fixture
def integer() -> Calculator:
    return Calculator('i')


@fixture
def decimal() -> Calculator:
    return Calculator('D')
