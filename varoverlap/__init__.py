"""
resolves the alleles of variation sites overlapping genomic features
"""
__version__ = '0.1.0'
