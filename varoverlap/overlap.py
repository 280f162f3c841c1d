"""
The overlap of a variation site with a genomic feature, and the alleles of the site in the context of that feature

Example:
    >>> from varoverlap.reference import ReferenceSlice
    >>> ref = ReferenceSlice('1', 'GGACC')
    >>> feature = Feature('1', 1, 5, slice=ref)
    >>> site = VariationSite('1', 3, 3, 'A/T')
    >>> overlap = VariationOverlap(feature, site)
    >>> overlap.get_reference_allele().seq
    'A'
    >>> [a.seq for a in overlap.get_alternate_alleles()]
    ['T']
"""
from abc import ABC, abstractmethod
import weakref

from .alleles import disambiguate_alleles, unique_alleles
from .config import OVERLAP_DEFAULTS
from .constants import COLUMNS, DELETION, reverse_complement
from .error import InvalidInputError
from .feature import Feature, VariationSite
from .reference import resolve_reference_allele
from .util import logger


class Allele:
    """
    a single literal allele sequence of a variation site in the context of one overlap
    """

    def __init__(self, overlap, seq, is_reference=False):
        """
        Args:
            overlap (VariationOverlap): the overlap this allele belongs to
            seq (str): the allele sequence wrt the strand of the variation site. ``-`` for a deletion
            is_reference (bool): True if this is the reference allele
        """
        self._overlap = weakref.ref(overlap)
        self._seq = seq or DELETION
        self._is_reference = bool(is_reference)
        self._is_sara = False

    @property
    def seq(self):
        return self._seq

    @property
    def is_reference(self):
        return self._is_reference

    @property
    def is_sara(self):
        """bool: True if this allele has been converted to the single representative of its overlap"""
        return self._is_sara

    @property
    def overlap(self):
        """:class:`VariationOverlap`: the overlap this allele belongs to, None if the overlap no longer exists"""
        return self._overlap()

    @property
    def feature_seq(self):
        """
        str: the allele sequence wrt the strand of the overlapped feature. Deletions and alleles which are not
        plain bases (i.e. unexpanded repeat groups) are returned unchanged
        """
        overlap = self.overlap
        if overlap is None:
            return self.seq
        if not self.seq.isalpha():
            return self.seq
        if overlap.feature.get_strand() != overlap.variation_site.strand:
            return reverse_complement(self.seq)
        return self.seq

    def convert_to_sara(self):
        """
        mark this allele as the same as reference allele (SARA) representative of its overlap
        """
        self._is_sara = True

    def flatten(self):
        """
        Returns:
            :class:`dict` by :class:`str`: the allele attributes by column name
        """
        overlap = self.overlap
        return {
            COLUMNS.variation_site: overlap.variation_site.name if overlap else None,
            COLUMNS.feature: overlap.feature.name if overlap else None,
            COLUMNS.seq: self.seq,
            COLUMNS.feature_seq: self.feature_seq,
            COLUMNS.is_reference: self.is_reference,
            COLUMNS.is_sara: self.is_sara,
        }

    def __repr__(self):
        return '{}({}, is_reference={})'.format(self.__class__.__name__, self.seq, self.is_reference)


class SiteOverlap(ABC):
    """
    operations common to all objects representing a variation site overlapping a feature. Feature specific
    overlaps (transcripts, regulatory regions, etc.) wrap a :class:`VariationOverlap` and expose these
    """

    @abstractmethod
    def get_allele_by_seq(self, seq):
        pass

    @abstractmethod
    def get_reference_allele(self):
        pass

    @abstractmethod
    def get_alternate_alleles(self):
        pass

    @abstractmethod
    def get_all_alleles(self):
        pass

    @abstractmethod
    def filter_alternates(self, keep_seqs):
        pass

    @abstractmethod
    def reduce_to_single_representative(self):
        pass


class VariationOverlap(SiteOverlap):
    """
    a variation site which lies on or close to a genomic feature
    """

    def __init__(
        self,
        feature,
        variation_site,
        disambiguate_single_nucleotide_alleles=None,
        no_ref_check=None,
        ref_feature=None,
        site_cache=None,
    ):
        """
        Args:
            feature (Feature): the feature overlapped by the variation site
            variation_site (VariationSite): the variation site or, when a site_cache is given, its identifier
            disambiguate_single_nucleotide_alleles (bool): expand single nucleotide ambiguity codes, for example
                an allele string of T/M is treated as T/A/C. Defaults to the configured value
            no_ref_check (bool): take the reference allele from the allele string instead of the reference
                sequence. Defaults to the configured value
            ref_feature: object with a subseq(start, end, strand) method used to look up the reference allele.
                Defaults to the slice of the feature and then the slice of the variation site
            site_cache (SiteCache): used to resolve the variation site when an identifier is given

        Raises:
            InvalidInputError: the feature or variation site is missing or of the wrong type
            ReferenceLookupError: the reference sequence could not be retrieved
        """
        if disambiguate_single_nucleotide_alleles is None:
            disambiguate_single_nucleotide_alleles = OVERLAP_DEFAULTS.disambiguate_single_nucleotide_alleles
        if no_ref_check is None:
            no_ref_check = OVERLAP_DEFAULTS.no_ref_check

        if site_cache is not None and not isinstance(variation_site, VariationSite):
            try:
                variation_site = site_cache.resolve(variation_site)
            except KeyError as err:
                raise InvalidInputError('could not resolve the variation site', variation_site) from err
        if not isinstance(variation_site, VariationSite):
            raise InvalidInputError('expected a VariationSite', variation_site)
        if not isinstance(feature, Feature):
            raise InvalidInputError('expected a Feature', feature)

        if ref_feature is None:
            ref_feature = feature.slice if feature.slice is not None else variation_site.slice

        self._feature = feature
        self._variation_site = variation_site
        self._ref_feature = ref_feature
        self.reference_allele = None
        self.alt_alleles = []
        self._alleles_by_seq = {}

        alleles = variation_site.alleles
        ref_allele = resolve_reference_allele(ref_feature, variation_site, alleles, no_ref_check=no_ref_check)

        if disambiguate_single_nucleotide_alleles:
            alleles = disambiguate_alleles(alleles)

        self.add_allele(Allele(self, ref_allele, is_reference=True))

        for allele in unique_alleles(alleles):
            if allele == ref_allele:
                continue
            self.add_allele(Allele(self, allele, is_reference=False))

        logger.debug('{} reference allele: {} alternate alleles: {}'.format(
            self, ref_allele, [a.seq for a in self.alt_alleles]))

    @property
    def feature(self):
        return self._feature

    @property
    def variation_site(self):
        return self._variation_site

    @property
    def ref_feature(self):
        return self._ref_feature

    @property
    def identifier(self):
        """str: the alternate allele sequences joined by underscores"""
        return '_'.join([allele.seq for allele in self.alt_alleles])

    def add_allele(self, allele):
        """
        Add an allele to this overlap

        Args:
            allele (Allele): the allele to add

        Raises:
            InvalidInputError: the argument is not an Allele
            ValueError: an allele with the same sequence has already been added
        """
        if not isinstance(allele, Allele):
            raise InvalidInputError('expected an Allele', allele)
        if allele.seq in self._alleles_by_seq:
            raise ValueError('an allele with this sequence already exists', allele.seq)
        if allele.is_reference:
            if self.reference_allele is not None:
                raise ValueError('the reference allele has already been set', self.reference_allele)
            self.reference_allele = allele
        else:
            self.alt_alleles.append(allele)
        self._alleles_by_seq[allele.seq] = allele

    def get_allele_by_seq(self, seq):
        """
        Returns:
            Allele: the allele with the given sequence or None if there is no such allele
        """
        return self._alleles_by_seq.get(seq)

    def get_reference_allele(self):
        return self.reference_allele

    def get_alternate_alleles(self):
        """
        Returns:
            :class:`list` of :class:`Allele`: the alternate alleles
        """
        return list(self.alt_alleles)

    def get_all_alleles(self):
        """
        Returns:
            :class:`list` of :class:`Allele`: the reference allele followed by the alternate alleles. An allele
            which is both (after filtering or reduction) is only listed once
        """
        alleles = [self.reference_allele]
        alleles.extend([a for a in self.alt_alleles if a is not self.reference_allele])
        return alleles

    def _reindex(self):
        self._alleles_by_seq = {allele.seq: allele for allele in self.get_all_alleles()}

    def filter_alternates(self, keep_seqs):
        """
        narrow the alternate alleles to those with a sequence in keep_seqs. If none of the alternate alleles
        would be kept then the alternate alleles are left unchanged

        When exactly one sequence is to be kept (homozygous non-reference) the kept allele also becomes
        the reference allele

        Args:
            keep_seqs (:class:`set` of :class:`str`): the allele sequences to keep
        """
        keep_seqs = set(keep_seqs)
        kept = [allele for allele in self.alt_alleles if allele.seq in keep_seqs]
        if not kept:
            logger.debug('{} no alternate alleles match {}, leaving alleles unchanged'.format(self, sorted(keep_seqs)))
            return
        self.alt_alleles = kept
        if len(keep_seqs) == 1:
            self.reference_allele = kept[0]
        self._reindex()

    def reduce_to_single_representative(self):
        """
        collapse the overlap to the reference allele, converted to its SARA form, as its only allele
        """
        self.reference_allele.convert_to_sara()
        self.alt_alleles = [self.reference_allele]
        self._reindex()

    def __repr__(self):
        return '{}({!r}, {!r})'.format(self.__class__.__name__, self.feature, self.variation_site)
