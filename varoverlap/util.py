from glob import glob
import logging
import os
import sys

from braceexpand import braceexpand

from .constants import OverlapNamespace

logger = logging.getLogger('varoverlap')


class WeakOverlapNamespace(OverlapNamespace):

    def is_env_overwritable(self, attr):
        return True


def bash_expands(*expressions):
    """
    expand a file glob expression, allowing bash-style brackets.

    Returns:
        list: a list of files

    Example:
        >>> bash_expands('./{test,doc}/*py')
        [...]
    """
    result = []
    for expression in expressions:
        eresult = []
        for name in braceexpand(expression):
            for fname in glob(name):
                eresult.append(fname)
        if not eresult:
            raise FileNotFoundError('The expression does not match any files', expression)
        result.extend(eresult)
    return [os.path.abspath(f) for f in result]


def filepath(path):
    try:
        file_list = bash_expands(path)
    except FileNotFoundError:
        raise TypeError('File does not exist', path)
    else:
        if len(file_list) > 1:
            raise TypeError('File pattern match multiple files and expected only one', path)
    return file_list[0]


def output_tabbed_file(rows, filename=None, header=None):
    """
    write rows as a tab-delimited table with a commented header line

    Args:
        rows (list): dictionaries or objects with a flatten method
        filename (str): the file to write to, stdout if not given
        header (list of str): the columns to output, all columns in the order seen if not given
    """
    custom_header = header is not None
    header = [] if header is None else list(header)
    flat_rows = []
    for row in rows:
        if not isinstance(row, dict):
            row = row.flatten()
        flat_rows.append(row)
        if not custom_header:
            header.extend([col for col in row if col not in header])

    lines = ['#' + '\t'.join(header)]
    for row in flat_rows:
        lines.append('\t'.join([str(row.get(c, None)) for c in header]))

    if filename is None:
        sys.stdout.write('\n'.join(lines) + '\n')
        return
    logger.info('writing: {}'.format(filename))
    with open(filename, 'w') as fh:
        fh.write('\n'.join(lines) + '\n')


def log_arguments(args):
    """
    output the arguments to the console

    Args:
        args (dict): the arguments to log
    """
    logger.info('arguments')
    for arg, val in sorted(args.items()):
        if isinstance(val, list):
            if len(val) <= 1:
                logger.info('  {} = {}'.format(arg, val))
                continue
            logger.info('  {} = ['.format(arg))
            for v in val:
                logger.info('    {}'.format(repr(v)))
            logger.info('  ]')
        elif any([isinstance(val, typ) for typ in [str, int, float, bool, tuple]]) or val is None:
            logger.info('  {} = {}'.format(arg, repr(val)))
        else:
            logger.info('  {} = {}'.format(arg, object.__repr__(val)))
