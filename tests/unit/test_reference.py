import pytest
from varoverlap.constants import STRAND
from varoverlap.error import InvalidInputError, ReferenceLookupError
from varoverlap.feature import VariationSite
from varoverlap.reference import ReferenceSlice, load_reference_genome, resolve_reference_allele

from .. import REFERENCE_GENOME_FILE
from .mock import Mock, MockFunction, MockRaise, mock_ref_feature

SEQ = 'ACGTACGTACGGATCC'


class TestReferenceSlice:
    def test_single_base(self):
        ref = ReferenceSlice('1', SEQ)
        assert ref.subseq(1, 1) == 'A'
        assert ref.subseq(16, 16) == 'C'

    def test_range(self):
        ref = ReferenceSlice('1', SEQ)
        assert ref.subseq(11, 14) == 'GGAT'

    def test_negative_strand(self):
        ref = ReferenceSlice('1', SEQ)
        assert ref.subseq(11, 14, STRAND.NEG) == 'ATCC'
        assert ref.subseq(1, 1, '-') == 'T'

    def test_insertion_point(self):
        ref = ReferenceSlice('1', SEQ)
        assert ref.subseq(5, 4) == ''
        assert ref.subseq(5, 4, STRAND.NEG) == ''

    def test_offset_start(self):
        ref = ReferenceSlice('1', SEQ, start=101)
        assert ref.subseq(101, 104) == 'ACGT'
        assert ref.end == 116
        with pytest.raises(ReferenceLookupError):
            ref.subseq(1, 1)

    def test_out_of_range(self):
        ref = ReferenceSlice('1', SEQ)
        with pytest.raises(ReferenceLookupError):
            ref.subseq(16, 17)
        with pytest.raises(ReferenceLookupError):
            ref.subseq(0, 1)

    def test_reversed_range(self):
        ref = ReferenceSlice('1', SEQ)
        with pytest.raises(ReferenceLookupError):
            ref.subseq(10, 5)

    def test_lower_case_input(self):
        ref = ReferenceSlice('1', SEQ.lower())
        assert ref.subseq(1, 4) == 'ACGT'

    def test_from_seq_record(self):
        reference_genome = load_reference_genome(REFERENCE_GENOME_FILE)
        ref = ReferenceSlice('2', reference_genome['2'])
        assert ref.subseq(4, 5) == 'AC'
        assert len(ref) == 16


class TestLoadReferenceGenome:
    def test_load(self):
        reference_genome = load_reference_genome(REFERENCE_GENOME_FILE)
        assert str(reference_genome['1'].seq[0:4]) == 'ACGT'
        assert str(reference_genome['chr1'].seq[0:4]) == 'ACGT'

    def test_upper_case(self):
        reference_genome = load_reference_genome(REFERENCE_GENOME_FILE)
        assert str(reference_genome['2'].seq[0:4]) == 'AAAA'

    def test_duplicate_chromosome(self, tmp_path):
        dup = tmp_path / 'dup.fa'
        dup.write_text('>1\nACGT\n')
        with pytest.raises(KeyError):
            load_reference_genome(REFERENCE_GENOME_FILE, str(dup))

    def test_equivalent_names(self, tmp_path):
        fasta = tmp_path / 'ref.fa'
        fasta.write_text('>1\nACGT\n>chr1\nACGT\n')
        with pytest.raises(KeyError):
            load_reference_genome(str(fasta))


class TestResolveReferenceAllele:
    def test_from_reference(self):
        site = VariationSite('1', 3, 3, 'A/T')
        assert resolve_reference_allele(ReferenceSlice('1', SEQ), site, site.alleles) == 'G'

    def test_from_reference_negative_strand(self):
        site = VariationSite('1', 3, 3, 'A/T', strand=STRAND.NEG)
        assert resolve_reference_allele(ReferenceSlice('1', SEQ), site, site.alleles) == 'C'

    def test_passes_site_coordinates(self):
        ref_feature = mock_ref_feature('AC')
        site = VariationSite('1', 10, 11, 'AC/-', strand=STRAND.NEG)
        assert resolve_reference_allele(ref_feature, site, site.alleles) == 'AC'
        assert ref_feature.subseq.calls == [(10, 11, STRAND.NEG)]

    def test_empty_reference_is_deletion(self):
        site = VariationSite('1', 5, 4, '-/AT')
        assert resolve_reference_allele(ReferenceSlice('1', SEQ), site, site.alleles) == '-'

    def test_no_ref_check_uses_first_allele(self):
        ref_feature = Mock(subseq=MockRaise(AssertionError('should not be called')))
        site = VariationSite('1', 3, 3, 'C/T')
        assert resolve_reference_allele(ref_feature, site, site.alleles, no_ref_check=True) == 'C'

    def test_no_ref_check_without_reference(self):
        site = VariationSite('1', 3, 3, 'C/T')
        assert resolve_reference_allele(None, site, site.alleles, no_ref_check=True) == 'C'

    def test_no_ref_check_zero_repeat(self):
        site = VariationSite('1', 3, 3, '(T)0/T')
        assert resolve_reference_allele(None, site, site.alleles, no_ref_check=True) == '-'

    def test_missing_reference(self):
        site = VariationSite('1', 3, 3, 'A/T')
        with pytest.raises(InvalidInputError):
            resolve_reference_allele(None, site, site.alleles)

    def test_out_of_range(self):
        site = VariationSite('1', 30, 30, 'A/T')
        with pytest.raises(ReferenceLookupError):
            resolve_reference_allele(ReferenceSlice('1', SEQ), site, site.alleles)

    def test_provider_error(self):
        ref_feature = Mock(subseq=MockRaise(IndexError('out of range')))
        site = VariationSite('1', 3, 3, 'A/T')
        with pytest.raises(ReferenceLookupError):
            resolve_reference_allele(ref_feature, site, site.alleles)

    def test_provider_returns_nothing(self):
        ref_feature = Mock(subseq=MockFunction(None))
        site = VariationSite('1', 3, 3, 'A/T')
        with pytest.raises(ReferenceLookupError):
            resolve_reference_allele(ref_feature, site, site.alleles)
