from .alleles import decode_allele_string
from .constants import STRAND
from .util import logger


class Feature:
    """
    a genomic feature (gene, transcript, regulatory region, etc.) which may be overlapped by a variation site
    """

    def __init__(self, chr, start, end, strand=STRAND.POS, name=None, slice=None):
        """
        Args:
            chr (str): the chromosome
            start (int): start of the feature (1-based, inclusive)
            end (int): end of the feature (1-based, inclusive)
            strand (STRAND): the genomic strand
            name (str): the feature name/id i.e. ENSG0001
            slice (ReferenceSlice): the reference sequence the feature lies on

        Example:
            >>> Feature('X', 1, 1000, STRAND.POS, 'ENSG0001')
        """
        start = int(start)
        end = int(end)
        if start > end:
            raise AttributeError('feature start must be less than or equal to the end', start, end)
        self.chr = chr
        self.start = start
        self.end = end
        self.strand = STRAND.parse(strand)
        self.name = name
        self.slice = slice

    def get_strand(self):
        return self.strand

    @property
    def is_reverse(self):
        """True if the feature is on the reverse/negative strand"""
        return self.strand == STRAND.NEG

    def __len__(self):
        return self.end - self.start + 1

    def __repr__(self):
        return 'Feature({}:{}-{}{}, name={})'.format(
            self.chr, self.start, self.end, '+' if self.strand == STRAND.POS else '-', self.name)


class VariationSite:
    """
    a position or range on the genome with a declared set of possible alleles
    """

    def __init__(self, chr, start, end, allele_string, strand=STRAND.POS, name=None, slice=None, dbid=None):
        """
        Args:
            chr (str): the chromosome
            start (int): start of the site (1-based, inclusive)
            end (int): end of the site (1-based, inclusive). For insertions the end is the start minus one
            allele_string (str): the declared alleles, i.e. ``A/T`` or ``-/(CA)2``
            strand (STRAND): the strand the alleles are given on
            name (str): the variant name, i.e. rs699
            slice (ReferenceSlice): the reference sequence the site lies on
            dbid: identifier the site is stored under
        """
        start = int(start)
        end = int(end)
        if end < start - 1:
            raise AttributeError('site end must not be before the base preceding the start', start, end)
        self.chr = chr
        self.start = start
        self.end = end
        self.allele_string = allele_string
        self.strand = STRAND.parse(strand)
        self.name = name
        self.slice = slice
        self.dbid = dbid

    @property
    def alleles(self):
        """:class:`list` of :class:`str`: the literal alleles of the allele string"""
        return decode_allele_string(self.allele_string)

    @property
    def is_insertion(self):
        return self.end == self.start - 1

    def __repr__(self):
        return 'VariationSite({}:{}-{} {}, name={})'.format(self.chr, self.start, self.end, self.allele_string, self.name)


class SiteCache:
    """
    caches variation sites by identifier so each site is only fetched once
    """

    def __init__(self, fetch=None):
        """
        Args:
            fetch (callable): function which returns the variation site for a given identifier, or None if there is none
        """
        self.cache = {}
        self.fetch = fetch

    def add(self, site):
        if site.dbid is None:
            raise ValueError('cannot cache a variation site without an identifier', site)
        self.cache[site.dbid] = site

    def __contains__(self, dbid):
        return dbid in self.cache

    def __len__(self):
        return len(self.cache)

    def resolve(self, dbid):
        """
        get a variation site by identifier, fetching and caching it if it has not been seen before

        Raises:
            KeyError: the site is not cached and could not be fetched
        """
        if dbid in self.cache:
            return self.cache[dbid]
        if self.fetch is None:
            raise KeyError('variation site is not cached and no fetch function was given', dbid)
        logger.debug('fetching variation site: {}'.format(dbid))
        site = self.fetch(dbid)
        if site is None:
            raise KeyError('could not fetch variation site', dbid)
        self.cache[dbid] = site
        return site

    def clear(self):
        self.cache.clear()
