import os


filedir = os.path.join(os.path.dirname(__file__), 'files')
REFERENCE_GENOME_FILE = os.path.join(filedir, 'mock_reference_genome.fa')
