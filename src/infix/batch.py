'''
Batch processing: one expression per line of a file, one result per line of
another.
'''

from os import makedirs, path
from threading import Event
from typing import NamedTuple
import logging

import regex

from .engine import Calculator


logger = logging.getLogger(__name__)


class ProcessingResult(NamedTuple):
    success: bool
    message: str
    total_lines: int = 0
    processed_lines: int = 0


class BatchProcessor:
    '''
    Calculate every line of an input file into an output file.

    Blank lines stay blank, and a line that fails to calculate gets its error
    message, so lines of input and output always correspond. Only file level
    failures fail a batch, and those happen before anything is written.
    '''

    # \r\n or \n
    NEWLINE = regex.compile(r'\r?\n')

    def __init__(self, calculator=None):
        self.calculator = calculator or Calculator()
        self._cancelled = Event()

    def cancel(self):
        '''
        Stop before the next line. Safe to call from another thread.
        '''
        self._cancelled.set()

    @property
    def cancelled(self):
        return self._cancelled.is_set()

    def calculate_line(self, line):
        if not line.strip():
            return ''
        return self.calculator.calculate(line.strip())

    def process(self, input_path, output_path, progress=None):
        '''
        Calculate input_path into output_path.

        :param progress: Called with the integer percentage done after each
                         line.
        '''
        self._cancelled.clear()
        if not input_path or not input_path.strip():
            return ProcessingResult(False, 'Input file path cannot be empty')
        if not output_path or not output_path.strip():
            return ProcessingResult(False, 'Output file path cannot be empty')
        if not path.isfile(input_path):
            logger.warning('Input file not found: %s', input_path)
            return ProcessingResult(False,
                                    'Input file not found: {}'.format(
                                        input_path))
        try:
            directory = path.dirname(output_path)
            if directory:
                makedirs(directory, exist_ok=True)
            with open(input_path, encoding='utf-8', newline='') as fp:
                lines = type(self).NEWLINE.split(fp.read())
            logger.info('Processing %d line(s) of %s', len(lines), input_path)
            results = []
            for line in lines:
                if self.cancelled:
                    logger.info('Cancelled after %d line(s)', len(results))
                    return ProcessingResult(False, 'Processing cancelled',
                                            len(lines), len(results))
                results.append(self.calculate_line(line))
                logger.debug('%r -> %r', line, results[-1])
                if progress is not None:
                    progress(round(len(results) / len(lines) * 100))
            with open(output_path, 'w', encoding='utf-8') as fp:
                fp.writelines(result + '\n' for result in results)
        except PermissionError as e:
            logger.warning('Access denied', exc_info=True)
            return ProcessingResult(False, 'Access denied: {}'.format(e))
        except UnicodeDecodeError as e:
            logger.warning('Cannot decode %s', input_path, exc_info=True)
            return ProcessingResult(False,
                                    'Cannot decode input file: {}'.format(e))
        except OSError as e:
            logger.warning('IO error', exc_info=True)
            return ProcessingResult(False, 'IO error: {}'.format(e))
        logger.info('Wrote %d line(s) to %s', len(results), output_path)
        return ProcessingResult(True,
                                'Successfully processed {} line(s)'.format(
                                    len(lines)),
                                len(lines), len(results))
