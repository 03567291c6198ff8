"""Parsers turning delimited files into streams of records.

Every parser is an iterator of frozen dataclass records built on
`LineFileParser`. Use `to_frame` to collect records into a data frame.
"""

from ._base import LineFileParser, to_frame
from ._columns import column, columns_from_line, load_columns, load_lines
from ._errors import ColumnCountError, ColumnIndexError, FileFormatChangeError
from .gene_info import (
    EntrezGeneInfoFileParser,
    EntrezGeneInfoRecord,
    gene_id_to_name,
    gene_id_to_symbol,
    gene_ids_for_taxon,
    gene_symbol_to_ids,
)
from .generifs import GeneRIF, GenerifsBasicFileParser
from .goa import GpAssociationGoaUniprotFileParser, GpAssociationRecord
from .pmc import (
    PmcFileListRecord,
    PmcFileListTxtFileParser,
    PmcIdsCsvFileParser,
    PmcIdsCsvRecord,
)

__all__ = [
    "LineFileParser",
    "to_frame",
    "column",
    "columns_from_line",
    "load_columns",
    "load_lines",
    "ColumnCountError",
    "ColumnIndexError",
    "FileFormatChangeError",
    "EntrezGeneInfoFileParser",
    "EntrezGeneInfoRecord",
    "gene_id_to_name",
    "gene_id_to_symbol",
    "gene_ids_for_taxon",
    "gene_symbol_to_ids",
    "GeneRIF",
    "GenerifsBasicFileParser",
    "GpAssociationGoaUniprotFileParser",
    "GpAssociationRecord",
    "PmcFileListRecord",
    "PmcFileListTxtFileParser",
    "PmcIdsCsvFileParser",
    "PmcIdsCsvRecord",
]
