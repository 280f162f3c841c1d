"""
module which holds all functions relating to the reference sequence of a variation site
"""
import re

from Bio import SeqIO

from .constants import DELETION, STRAND, reverse_complement
from .error import InvalidInputError, ReferenceLookupError
from .util import logger


def load_reference_genome(*filepaths):
    """
    Args:
        filepaths (list of str): the paths to the files containing the input fasta genomes

    Returns:
        :class:`dict` of :class:`Bio.SeqRecord` by :class:`str`: a dictionary representing the sequences in the fasta file
    """
    reference_genome = {}
    for filename in filepaths:
        logger.info('loading reference genome: {}'.format(filename))
        with open(filename, 'r') as fh:
            for chrom, seq in SeqIO.to_dict(SeqIO.parse(fh, 'fasta')).items():
                if chrom in reference_genome:
                    raise KeyError('Duplicate chromosome name', chrom, filename)
                reference_genome[chrom] = seq

    names = list(reference_genome.keys())

    # allow both chr-prefixed and bare template names
    for template_name in names:
        if template_name.startswith('chr'):
            truncated = re.sub('^chr', '', template_name)
            if truncated in reference_genome:
                raise KeyError(
                    'template names {} and {} are considered equal but both have been defined in the reference'
                    'loaded'.format(template_name, truncated))
            reference_genome.setdefault(truncated, reference_genome[template_name].upper())
        else:
            prefixed = 'chr' + template_name
            if prefixed in reference_genome:
                raise KeyError(
                    'template names {} and {} are considered equal but both have been defined in the reference'
                    'loaded'.format(template_name, prefixed))
            reference_genome.setdefault(prefixed, reference_genome[template_name].upper())
        reference_genome[template_name] = reference_genome[template_name].upper()

    return reference_genome


class ReferenceSlice:
    """
    a region of a reference template which can be queried for its sequence
    """

    def __init__(self, name, seq, start=1):
        """
        Args:
            name (str): the template/chromosome name
            seq (str or Bio.SeqRecord.SeqRecord): the sequence of the slice
            start (int): the genomic position of the first base in seq

        Example:
            >>> ReferenceSlice('1', 'ACGT').subseq(2, 3)
            'CG'
        """
        if hasattr(seq, 'seq'):
            seq = seq.seq
        self.name = name
        self.seq = str(seq).upper()
        self.start = int(start)

    @property
    def end(self):
        return self.start + len(self.seq) - 1

    def __len__(self):
        return len(self.seq)

    def subseq(self, start, end, strand=STRAND.POS):
        """
        get the sequence over a range of genomic positions

        Args:
            start (int): the start position (1-based, inclusive)
            end (int): the end position (1-based, inclusive). An end one before the start denotes the point
                between two bases and returns an empty sequence
            strand (STRAND): the strand to return the sequence for

        Returns:
            str: the sequence, reverse complemented for the negative strand

        Raises:
            ReferenceLookupError: the range does not lie within the current slice
        """
        strand = STRAND.parse(strand)
        if end < start - 1 or start < self.start or end > self.end:
            raise ReferenceLookupError(
                'range {}-{} is not within the slice {}:{}-{}'.format(start, end, self.name, self.start, self.end))
        seq = self.seq[start - self.start:end - self.start + 1]
        if strand == STRAND.NEG:
            return reverse_complement(seq) if seq else seq
        return seq

    def __repr__(self):
        return 'ReferenceSlice({}:{}-{})'.format(self.name, self.start, self.end)


def resolve_reference_allele(ref_feature, variation_site, alleles, no_ref_check=False):
    """
    decide the sequence of the reference allele for a variation site

    by default the reference allele is taken from the reference sequence and not from the allele
    string, so it need not be one of the declared alleles

    Args:
        ref_feature: object with a subseq(start, end, strand) method giving the reference sequence
        variation_site (VariationSite): the variation site
        alleles (:class:`list` of :class:`str`): the decoded alleles of the site
        no_ref_check (bool): use the first declared allele instead of looking up the reference sequence

    Returns:
        str: the reference allele, the deletion marker if the reference is empty

    Raises:
        InvalidInputError: no reference sequence is available for the lookup
        ReferenceLookupError: the reference sequence lookup failed
    """
    if no_ref_check:
        ref_allele = alleles[0] if alleles else None
    else:
        if not hasattr(ref_feature, 'subseq'):
            raise InvalidInputError('a reference feature with a subseq method is required to check the reference allele', ref_feature)
        try:
            ref_allele = ref_feature.subseq(variation_site.start, variation_site.end, variation_site.strand)
        except ReferenceLookupError:
            raise
        except (IndexError, KeyError, ValueError) as err:
            raise ReferenceLookupError('failed to retrieve the reference sequence for', variation_site) from err
        if ref_allele is None:
            raise ReferenceLookupError('no reference sequence was returned for', variation_site)
        ref_allele = str(ref_allele)
    return ref_allele or DELETION
