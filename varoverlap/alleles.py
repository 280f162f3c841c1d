"""
functions for decoding allele strings into literal allele sequences

An allele string lists the possible sequences at a variation site separated by ``/``. Runs of
bases may be compressed as repeat groups, for example ``(CA)3`` is equivalent to ``CACACA``.

Example:
    >>> decode_allele_string('A/(CA)2/(T)0')
    ['A', 'CACA', '-']
"""
import re

from .constants import ALLELE_DELIM, AMBIGUITY_CODES, DELETION, UNAMBIGUOUS_BASES
from .util import logger

REPEAT_GROUP_PATTERN = re.compile(r'\(([A-Za-z]+)\)(\d+)')

MAX_REPEAT_LENGTH = 100000
""":class:`int`: repeat groups which would expand past this many bases are left unexpanded"""


def _expand_repeat_group(match):
    unit, count = match.group(1), int(match.group(2))
    if len(unit) * count > MAX_REPEAT_LENGTH:
        return match.group(0)
    return unit * count


def expand_allele_string(allele_string):
    """
    expands all repeat groups in an allele string. Nested groups are expanded innermost first

    Groups which would expand past :data:`MAX_REPEAT_LENGTH` bases are kept as literal text, like any other
    group that cannot be expanded

    Args:
        allele_string (str): the compact allele string

    Returns:
        str: the allele string with no repeat groups

    Example:
        >>> expand_allele_string('(AT)2/((G)2C)2')
        'ATAT/GGCGGC'
        >>> expand_allele_string('(T)0/A')
        '/A'
    """
    expanded = allele_string
    while True:
        result = REPEAT_GROUP_PATTERN.sub(_expand_repeat_group, expanded)
        if result == expanded:
            break
        expanded = result
    if '(' in expanded or ')' in expanded:
        logger.warning('could not fully expand the allele string {}'.format(repr(allele_string)))
    return expanded


def split_allele_string(allele_string):
    """
    Returns:
        :class:`list` of :class:`str`: the alleles in their input order, empty alleles are given as the deletion marker
    """
    return [allele or DELETION for allele in allele_string.split(ALLELE_DELIM)]


def decode_allele_string(allele_string):
    """
    expands and splits an allele string into its literal allele sequences

    Malformed repeat groups are not an error, they are kept as literal text

    Args:
        allele_string (str): the compact allele string

    Returns:
        :class:`list` of :class:`str`: the literal alleles in the order given
    """
    return split_allele_string(expand_allele_string(allele_string))


def encode_allele_string(alleles):
    """
    joins a list of literal alleles into an (uncompressed) allele string

    Example:
        >>> encode_allele_string(['A', '-', 'TT'])
        'A/-/TT'
    """
    return ALLELE_DELIM.join([allele or DELETION for allele in alleles])


def unambiguity_code(code):
    """
    get the unambiguous bases for a single nucleotide IUPAC ambiguity code

    Args:
        code (str): the ambiguity code

    Returns:
        str: the bases encoded by the given code in sorted order. Unknown codes are returned unchanged

    Example:
        >>> unambiguity_code('M')
        'AC'
        >>> unambiguity_code('n')
        'ACGT'
    """
    bases = AMBIGUITY_CODES.get(code.upper())
    if bases is None:
        return code
    return ''.join(sorted(bases))


def is_ambiguous_single_nucleotide(allele):
    return len(allele) == 1 and allele.upper() not in UNAMBIGUOUS_BASES


def disambiguate_alleles(alleles):
    """
    replaces single nucleotide alleles given as ambiguity codes by the bases they represent. Longer
    alleles are never expanded to avoid the combinatorial explosion of multiple ambiguous positions

    Args:
        alleles (:class:`list` of :class:`str`): the literal alleles

    Returns:
        :class:`list` of :class:`str`: the alleles with the single nucleotide ambiguity codes expanded

    Example:
        >>> disambiguate_alleles(['T', 'M'])
        ['T', 'A', 'C']
    """
    possible_alleles = []
    for allele in alleles:
        if is_ambiguous_single_nucleotide(allele):
            possible_alleles.extend(unambiguity_code(allele))
        else:
            possible_alleles.append(allele)
    return possible_alleles


def unique_alleles(alleles):
    """
    Returns:
        :class:`list` of :class:`str`: the distinct alleles in the order they are first seen
    """
    return list(dict.fromkeys([allele or DELETION for allele in alleles]))
