import argparse
import logging

from . import __version__
from .constants import STRAND, cast_boolean
from .util import WeakOverlapNamespace, filepath


OVERLAP_DEFAULTS = WeakOverlapNamespace()
OVERLAP_DEFAULTS.add(
    'disambiguate_single_nucleotide_alleles', False, cast_type=cast_boolean,
    defn='treat single nucleotide alleles given as IUPAC ambiguity codes as the bases they represent. '
    'For example the allele string T/M is treated as T/A/C')
OVERLAP_DEFAULTS.add(
    'no_ref_check', False, cast_type=cast_boolean,
    defn='do not look up the reference sequence, use the first allele of the allele string as the reference allele')

REFERENCE_DEFAULTS = WeakOverlapNamespace()
REFERENCE_DEFAULTS.add(
    'reference_genome', [], cast_type=filepath, listable=True,
    defn='Path to the reference genome fasta file')


def get_metavar(arg_type):
    """
    For a given argument type, returns the string to be used for the metavar argument in add_argument

    Example:
        >>> get_metavar(bool)
        '{True,False}'
    """
    if arg_type in [bool, cast_boolean]:
        return '{True,False}'
    elif arg_type == float:
        return 'FLOAT'
    elif arg_type == int:
        return 'INT'
    elif arg_type == filepath:
        return 'FILEPATH'
    return None


class CustomHelpFormatter(argparse.ArgumentDefaultsHelpFormatter):
    """
    subclass the default help formatter to stop default printing for required arguments
    """

    def _format_args(self, action, default_metavar):
        if action.metavar is None:
            action.metavar = get_metavar(action.type)
        return super(CustomHelpFormatter, self)._format_args(action, default_metavar)

    def _get_help_string(self, action):
        if action.required:
            return action.help
        return super(CustomHelpFormatter, self)._get_help_string(action)

    def add_arguments(self, actions):
        # sort the arguments alphanumerically so they print in the help that way
        actions = sorted(actions, key=lambda x: getattr(x, 'option_strings'))
        super(CustomHelpFormatter, self).add_arguments(actions)


def add_default_argument(parser, arg, defaults):
    cast_type = defaults.type(arg)
    kwargs = {'help': defaults.define(arg, None), 'type': cast_type, 'default': defaults[arg]}
    if defaults.is_listable(arg):
        kwargs['nargs'] = '+' if not defaults[arg] else '*'
    elif cast_type == cast_boolean:
        kwargs['metavar'] = get_metavar(cast_type)
    parser.add_argument('--{}'.format(arg), **kwargs)


def augment_parser(arguments, parser, required=None):
    """
    Adds options to the argument parser. Separate function to facilitate the pipeline steps
    all having a similar look/feel
    """
    if required is None:
        required = set()
    for arg in arguments:
        if arg == 'help':
            parser.add_argument('-h', '--help', action='help', help='show this help message and exit')
        elif arg == 'version':
            parser.add_argument(
                '-v', '--version', action='version', version='%(prog)s version ' + __version__,
                help='Outputs the version number')
        elif arg == 'log':
            parser.add_argument('--log', help='redirect stdout to a log file', default=None)
        elif arg == 'log_level':
            parser.add_argument(
                '--log_level', help='level of logging to output', choices=['INFO', 'DEBUG'], default='INFO')
        elif arg == 'strand':
            parser.add_argument(
                '--strand', type=STRAND.parse, default=STRAND.POS,
                help='the strand the allele string is given on (+ or -)')
        elif arg in OVERLAP_DEFAULTS:
            add_default_argument(parser, arg, OVERLAP_DEFAULTS)
        elif arg in REFERENCE_DEFAULTS:
            add_default_argument(parser, arg, REFERENCE_DEFAULTS)
        else:
            raise KeyError('invalid argument', arg)
        if arg in required:
            parser._actions[-1].required = True


def configure_logging(log_level='INFO', log=None):
    """
    replaces the root logging handlers with one that writes plain messages to the console or the log file

    Returns:
        :class:`list`: the original root handlers so they can be restored
    """
    log_conf = {'format': '{message}', 'style': '{', 'level': getattr(logging, log_level)}
    original_logging_handlers = logging.root.handlers[:]
    for handler in original_logging_handlers:
        logging.root.removeHandler(handler)
    if log:
        log_conf['filename'] = log
    logging.basicConfig(**log_conf)
    return original_logging_handlers


def restore_logging(original_logging_handlers):
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    for handler in original_logging_handlers:
        logging.root.addHandler(handler)
