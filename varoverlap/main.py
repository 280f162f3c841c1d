#!python
import argparse
import logging
import platform
import time

from . import __version__
from . import config as _config
from .constants import EXIT_OK, PROGNAME, STRAND
from .feature import Feature, VariationSite
from .overlap import VariationOverlap
from .reference import ReferenceSlice, load_reference_genome
from .util import bash_expands, log_arguments, logger, output_tabbed_file


def build_parser():
    parser = argparse.ArgumentParser(prog=PROGNAME, formatter_class=_config.CustomHelpFormatter, add_help=False)
    required = parser.add_argument_group('required arguments')
    optional = parser.add_argument_group('optional arguments')
    _config.augment_parser(['help', 'version', 'log', 'log_level'], optional)
    _config.augment_parser(['reference_genome'], required, required={'reference_genome'})
    required.add_argument('--chr', required=True, help='the chromosome of the variation site')
    required.add_argument('--start', required=True, type=int, help='start of the variation site (1-based, inclusive)')
    required.add_argument('--end', required=True, type=int, help='end of the variation site (1-based, inclusive)')
    required.add_argument(
        '--allele_string', required=True, help='the declared alleles of the variation site, i.e. A/T or -/(CA)2')
    optional.add_argument('--name', help='name of the variation site')
    _config.augment_parser(['strand'], optional)
    optional.add_argument(
        '--feature', nargs=3, metavar=('<start>', '<end>', '<strand>'), default=None,
        help='the start, end and strand of the overlapped feature. Defaults to the variation site itself')
    optional.add_argument('--feature_name', help='name of the overlapped feature')
    _config.augment_parser(['disambiguate_single_nucleotide_alleles', 'no_ref_check'], optional)
    optional.add_argument(
        '--keep_alleles', nargs='+', default=[], metavar='<seq>',
        help='narrow the alternate alleles to these sequences, i.e. the alleles carried by a sample')
    optional.add_argument(
        '--sara', action='store_true', default=False,
        help='collapse the overlap to its reference allele as a single representative allele')
    optional.add_argument('--output', default=None, help='file to write the allele table to. Defaults to stdout')
    return parser


def main(argv=None):
    """
    sets up the parser, resolves the alleles of the variation site and writes them as a table
    """
    start_time = int(time.time())
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        args.reference_genome = bash_expands(*args.reference_genome)
    except FileNotFoundError:
        parser.error('--reference_genome file(s) do not exist: {}'.format(args.reference_genome))

    feature_coords = args.feature
    if feature_coords is not None:
        try:
            feature_coords = (int(feature_coords[0]), int(feature_coords[1]), STRAND.parse(feature_coords[2]))
        except (TypeError, ValueError):
            parser.error('argument --feature: expected <start> <end> <strand>, given: {}'.format(args.feature))

    original_logging_handlers = _config.configure_logging(args.log_level, args.log)
    logger.info('{}: {}'.format(PROGNAME, __version__))
    logger.info('hostname: {}'.format(platform.node()))
    log_arguments(vars(args))

    try:
        reference_genome = load_reference_genome(*args.reference_genome)
        if args.chr not in reference_genome:
            raise KeyError('chromosome is not in the reference genome', args.chr)
        ref_slice = ReferenceSlice(args.chr, reference_genome[args.chr])

        site = VariationSite(
            args.chr, args.start, args.end, args.allele_string,
            strand=args.strand, name=args.name, slice=ref_slice)
        if feature_coords is None:
            feature_coords = (args.start, max(args.start, args.end), args.strand)
        feature = Feature(
            args.chr, feature_coords[0], feature_coords[1], feature_coords[2],
            name=args.feature_name, slice=ref_slice)

        overlap = VariationOverlap(
            feature, site,
            disambiguate_single_nucleotide_alleles=args.disambiguate_single_nucleotide_alleles,
            no_ref_check=args.no_ref_check)
        if args.keep_alleles:
            overlap.filter_alternates(set(args.keep_alleles))
        if args.sara:
            overlap.reduce_to_single_representative()

        output_tabbed_file(overlap.get_all_alleles(), args.output)

        logger.info('run time (s): {}'.format(int(time.time()) - start_time))
        return EXIT_OK
    except Exception as err:
        if args.log:
            logging.exception(err)  # capture the error in the logging output file
        raise err
    finally:
        _config.restore_logging(original_logging_handlers)


if __name__ == '__main__':
    main()
