"""
module responsible for small utility functions and constants used throughout the varoverlap package
"""
import os
import re

from Bio.Data.IUPACData import ambiguous_dna_values
from Bio.Seq import Seq


PROGNAME = 'varoverlap'
EXIT_OK = 0


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class OverlapNamespace:
    """
    Namespace to hold module constants

    Example:
        >>> nspace = OverlapNamespace(thing=1, otherthing=2)
        >>> nspace.thing
        1
        >>> nspace.otherthing
        2
    """
    DELIM = r'[;,\s]+'
    """:class:`str`: delimiter to use is parsing listable variables from the environment"""

    def __init__(self, *pos, **kwargs):
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_nullable', set())
        object.__setattr__(self, '_listable', set())
        object.__setattr__(self, '_env_overwritable', set())
        object.__setattr__(self, '_env_prefix', 'VAROVERLAP')

        for k in pos:
            if k in self._members:
                raise AttributeError('Cannot respecify existing attribute', k, self._members[k])
            self[k] = k

        for attr, val in kwargs.items():
            if attr in self._members:
                raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
            self[attr] = val

        for attr, value in self._members.items():
            self._set_type(attr, type(value))

    def __repr__(self):
        return '{}({})'.format(self.__class__.__name__, ', '.join(sorted(['{}={}'.format(k, repr(v)) for k, v in self.items()])))

    def get_env_name(self, attr):
        """
        Get the name of the corresponding environment variable

        Example:
            >>> nspace = OverlapNamespace(a=1)
            >>> nspace.get_env_name('a')
            'VAROVERLAP_A'
        """
        if self._env_prefix:
            return '{}_{}'.format(self._env_prefix, attr).upper()
        return attr.upper()

    def get_env_var(self, attr):
        """
        retrieve the environment variable definition of a given attribute
        """
        env_name = self.get_env_name(attr)
        env = os.environ[env_name].strip()
        attr_type = self._types.get(attr, str)

        if attr in self._listable:
            return self.parse_listable_string(env, attr_type, attr in self._nullable)
        if attr in self._nullable and env.lower() == 'none':
            return None
        return attr_type(env)

    @classmethod
    def parse_listable_string(cls, string, cast_type=str, nullable=False):
        """
        Given some string, parse it into a list

        Example:
            >>> OverlapNamespace.parse_listable_string('1,2,3', int)
            [1, 2, 3]
            >>> OverlapNamespace.parse_listable_string('1;2,None', int, True)
            [1, 2, None]
        """
        result = []
        string = string.strip()
        for val in re.split(cls.DELIM, string) if string else []:
            if nullable and val.lower() == 'none':
                result.append(None)
            else:
                result.append(cast_type(val))
        return result

    def is_env_overwritable(self, attr):
        """
        Returns:
            bool: True if the variable is overrided by specifying the environment variable equivalent
        """
        return attr in self._env_overwritable

    def is_listable(self, attr):
        """
        Returns:
            bool: True if the variable should be parsed as a list
        """
        return attr in self._listable

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            variables = object.__getattribute__(self, '_members')
            if attr not in variables:
                raise err
            if self.is_env_overwritable(attr):
                try:
                    return self.get_env_var(attr)
                except KeyError:
                    pass
            return variables[attr]

    def items(self):
        """
        Example:
            >>> OverlapNamespace(thing=1, otherthing=2).items()
            [('thing', 1), ('otherthing', 2)]
        """
        return [(k, self[k]) for k in self.keys()]

    def __getitem__(self, key):
        return getattr(self, key)

    def __setitem__(self, key, val):
        self.__setattr__(key, val)

    def __setattr__(self, attr, val):
        if attr.startswith('_'):
            raise ValueError('cannot set private', attr)
        object.__getattribute__(self, '_members')[attr] = val

    def keys(self):
        return [k for k in self._members]

    def values(self):
        return [self[k] for k in self._members]

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> nspace = OverlapNamespace(thing=1, otherthing=2)
            >>> nspace.enforce(1)
            1
            >>> nspace.enforce(3)
            Traceback (most recent call last):
            ....
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def __iter__(self):
        return iter(self.keys())

    def _set_type(self, attr, cast_type):
        if cast_type == bool:
            self._types[attr] = cast_boolean
        else:
            self._types[attr] = cast_type

    def type(self, attr, *pos):
        if len(pos) > 1:
            raise TypeError('too many arguments. type takes a single \'default\' value argument')
        try:
            return self._types[attr]
        except KeyError as err:
            if pos:
                return pos[0]
            raise err

    def define(self, attr, *pos):
        """
        Get the definition of a given attribute or return a default (when given) if the attribute does not exist

        Raises:
            KeyError: the attribute does not exist and a default was not given
        """
        if len(pos) > 1:
            raise TypeError('too many arguments. define takes a single \'default\' value argument')
        try:
            return self._defns[attr]
        except KeyError as err:
            if pos:
                return pos[0]
            raise err

    def add(self, attr, value, defn=None, cast_type=None, nullable=False, env_overwritable=False, listable=False):
        """
        Add an attribute to the name space

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition, will be used in generating help menus
            cast_type (callable): the function to use in casting the value
            nullable (bool): True if this attribute can have a None value
            env_overwritable (bool): True if this attribute will be overriden by its environment variable equivalent
            listable (bool): True if this attribute can have multiple values
        """
        if cast_type:
            self._set_type(attr, cast_type)
        else:
            self._set_type(attr, type(value))
        if defn:
            self._defns[attr] = defn

        if nullable:
            self._nullable.add(attr)
        if env_overwritable:
            self._env_overwritable.add(attr)
        if listable:
            self._listable.add(attr)
        self[attr] = value

    def __call__(self, value):
        try:
            return self.enforce(value)
        except KeyError:
            raise TypeError('Invalid value {} for {}. Must be a valid member: {}'.format(
                repr(value), self.__class__.__name__, self.values()))


class _StrandNamespace(OverlapNamespace):

    def parse(self, value):
        """
        cast a strand given as a symbol or number to its controlled value

        Example:
            >>> STRAND.parse('-')
            -1
            >>> STRAND.parse('+1')
            1
        """
        symbols = {'+': self.POS, '-': self.NEG}
        value = str(value).strip()
        if value in symbols:
            return symbols[value]
        try:
            return self(int(value))
        except ValueError:
            raise TypeError('Invalid strand {}. Expected one of +, -, 1, -1'.format(repr(value)))


STRAND = _StrandNamespace(POS=1, NEG=-1)
""":class:`OverlapNamespace`: holds controlled vocabulary for allowed strand values

- ``POS``: the positive/forward strand
- ``NEG``: the negative/reverse strand
"""

DELETION = '-'
""":class:`str`: the literal allele used for an empty/deleted sequence"""

ALLELE_DELIM = '/'

UNAMBIGUOUS_BASES = frozenset('ACGT' + DELETION)

AMBIGUITY_CODES = {
    code: frozenset(bases) for code, bases in ambiguous_dna_values.items() if code not in UNAMBIGUOUS_BASES
}
""":class:`dict` of :class:`frozenset` by :class:`str`: IUPAC ambiguity code to the bases it encodes"""


def reverse_complement(s):
    """
    wrapper for the Bio.Seq reverse_complement method

    Args:
        s (str): the input DNA sequence

    Returns:
        :class:`str`: the reverse complement of the input sequence. The deletion marker is returned unchanged

    Example:
        >>> reverse_complement('ATCCGGT')
        'ACCGGAT'
    """
    input_string = str(s)
    if input_string == DELETION:
        return input_string
    if not re.match('^[A-Za-z]*$', input_string):
        raise ValueError('unexpected sequence format. cannot reverse complement', input_string)
    return str(Seq(input_string).reverse_complement())


COLUMNS = OverlapNamespace(
    variation_site='variation_site',
    feature='feature',
    seq='seq',
    feature_seq='feature_seq',
    is_reference='is_reference',
    is_sara='is_sara',
)
""":class:`OverlapNamespace`: Column names for the allele table output"""
