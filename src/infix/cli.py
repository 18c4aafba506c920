from os import isatty, path
from sys import stdin, stdout, stderr, exit
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .batch import BatchProcessor
from .engine import Calculator
from .tokens import untokenize
from .util import CalcError


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.infix_history'

    def _expressions(self):
        '''
        Yield non-blank expressions, stripped.
        '''
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def executor(self):
        '''
        Calculate each expression and print its result.
        '''
        for expression in self._expressions():
            print(self.calculator.calculate(expression))

    def checker(self):
        '''
        Print whether each expression is valid, and why not.
        '''
        for expression in self._expressions():
            valid, reason = self.calculator.is_valid(expression)
            print('valid' if valid else 'invalid: {}'.format(reason))

    def dumper(self):
        '''
        Dump tokens, with their kind and position, then postfix order.
        '''
        print('<kind>\t<position>\t<token>')
        for expression in self._expressions():
            try:
                for token in self.calculator.lexer.lex(expression):
                    print(token.kind, token.position, str(token), sep='\t')
                postfix = self.calculator.postfix(expression)
                print('postfix:', untokenize(postfix))
            # Abort entire rest of expression, makes sense anyway
            except CalcError as e:
                print(e.message, file=stderr)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(self.calculator.lexer.grammar)

    def batch(self):
        '''
        Calculate the input file into the output file.
        '''
        input_path, output_path = self.args.batch
        processor = BatchProcessor(self.calculator)

        def progress(percentage):
            print('\r{:3d}%'.format(percentage), end='', file=stderr,
                  flush=True)

        result = processor.process(input_path, output_path, progress=progress)
        if result.processed_lines:
            print(file=stderr)
        print(result.message, file=stderr)
        if not result.success:
            exit(1)

    def _prompting_input(self):
        '''
        Return the expressions to read when none were given: an interactive
        prompt if one was asked for or both stdin/out are a tty, else stdin.
        '''
        if self.args.prompt or \
           isatty(stdin.fileno()) and isatty(stdout.fileno()):
            return InteractiveInput(
                prompt=self.args.prompt or self.DEFAULT_PROMPT,
                history=FileHistory(path.expanduser(self.HISTORY_FILE)))
        else:
            return stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            description='Infix arithmetic calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        backend_groups = self.argument_parser.add_mutually_exclusive_group()
        backend_groups.add_argument('-i', '--integer',
                                    action='store_const',
                                    const='i',
                                    dest='backend',
                                    help='arbitrary precision integers '
                                         '(default)')
        backend_groups.add_argument('-d', '--decimal',
                                    action='store_const',
                                    const='D',
                                    dest='backend',
                                    help='decimal numbers')
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        int_nonint_groups.add_argument('-b', '--batch',
                                       nargs=2,
                                       metavar=('INPUT', 'OUTPUT'))
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-c', '--check', self.checker),
                                      ('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-T', '--tokens', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=stdin)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            stream=stderr,
            level=logging.DEBUG if self.args.verbose else logging.WARNING)
        self.calculator = Calculator(self.args.backend)
        if self.args.batch:
            self.args.action = self.batch
        elif self.args.expressions is stdin and \
                self.args.action != self.raw_grammar:
            self.args.expressions = self._prompting_input()
        logger.debug('Running %s on the %s backend',
                     self.args.action.__name__, self.calculator.backend.NAME)
        try:
            self.args.action()
        except KeyboardInterrupt:
            exit(1)
