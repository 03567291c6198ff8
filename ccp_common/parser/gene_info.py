"""Parse NCBI Entrez Gene's gene_info file.

Each line describes one gene. Columns are tab separated with "-" marking
missing values. The first line is a "#" comment naming the columns.
"""

__all__ = [
    "EntrezGeneInfoRecord",
    "EntrezGeneInfoFileParser",
    "gene_symbol_to_ids",
    "gene_id_to_symbol",
    "gene_id_to_name",
    "gene_ids_for_taxon",
]

import dataclasses
import warnings
from collections import defaultdict

from ccp_common.reader import Line
from ccp_common.strings import TAB

from ._base import LineFileParser

_MISSING = "-"
_SET_DELIMITER = "|"


@dataclasses.dataclass(frozen=True)
class EntrezGeneInfoRecord:
    taxon_id: int
    gene_id: int
    symbol: str | None
    locus_tag: str | None
    synonyms: frozenset[str]
    db_xrefs: frozenset[str]
    chromosome: str | None
    map_location: str | None
    description: str | None
    type_of_gene: str | None
    symbol_from_nomenclature_authority: str | None
    full_name_from_nomenclature_authority: str | None
    nomenclature_status: str | None
    other_designations: frozenset[str]
    modification_date: str | None

    @property
    def name(self) -> str | None:
        """Best available name for the gene.

        The nomenclature authority's full name, falling back to the
        description and then the symbol.
        """
        return (
            self.full_name_from_nomenclature_authority
            or self.description
            or self.symbol
        )


def _value(token: str) -> str | None:
    return None if token == _MISSING else token


def _value_set(token: str) -> frozenset[str]:
    if token == _MISSING:
        return frozenset()

    return frozenset(token.split(_SET_DELIMITER))


class EntrezGeneInfoFileParser(LineFileParser[EntrezGeneInfoRecord]):
    """Iterate over the genes in a gene_info file.

    Example
    -------
    >>> with EntrezGeneInfoFileParser("gene_info.gz") as genes:
    ...     human = [g for g in genes if g.taxon_id == 9606]

    """

    delimiter = TAB
    comment_indicator = "#"
    column_count = 15

    def parse_record(self, line: Line) -> EntrezGeneInfoRecord:
        toks = self.columns(line)
        return EntrezGeneInfoRecord(
            taxon_id=int(toks[0]),
            gene_id=int(toks[1]),
            symbol=_value(toks[2]),
            locus_tag=_value(toks[3]),
            synonyms=_value_set(toks[4]),
            db_xrefs=_value_set(toks[5]),
            chromosome=_value(toks[6]),
            map_location=_value(toks[7]),
            description=_value(toks[8]),
            type_of_gene=_value(toks[9]),
            symbol_from_nomenclature_authority=_value(toks[10]),
            full_name_from_nomenclature_authority=_value(toks[11]),
            nomenclature_status=_value(toks[12]),
            other_designations=_value_set(toks[13]),
            modification_date=_value(toks[14]),
        )


def _genes_for_taxon(source, taxon_id: int, encoding=None):
    with EntrezGeneInfoFileParser(source, encoding) as parser:
        for record in parser:
            if record.taxon_id == taxon_id:
                yield record


def gene_symbol_to_ids(
    source,
    taxon_id: int,
    lower_case: bool = False,
    with_synonyms: bool = False,
    encoding=None,
) -> dict[str, set[int]]:
    """Map gene symbols to the IDs of genes using them.

    Parameters
    ----------
    source : str, path-like or binary stream
        The gene_info file, optionally compressed.
    taxon_id : int
        Only genes of this taxon are collected (e.g. 9606 for human).
    lower_case : bool, default False
        Lower case the symbols used as keys.
    with_synonyms : bool, default False
        Also map the gene's synonyms and the nomenclature authority's symbol
        to the gene.

    Returns
    -------
    symbol2ids : dict
        Symbols (stripped of surrounding whitespace) to sets of gene IDs. A
        symbol can map to more than one gene.

    """
    symbol2ids: dict[str, set[int]] = defaultdict(set)
    for record in _genes_for_taxon(source, taxon_id, encoding):
        symbols = {record.symbol}
        if with_synonyms:
            symbols.add(record.symbol_from_nomenclature_authority)
            symbols.update(record.synonyms)

        for symbol in symbols:
            if symbol is None:
                continue
            if lower_case:
                symbol = symbol.lower()
            symbol2ids[symbol.strip()].add(record.gene_id)

    return dict(symbol2ids)


def gene_id_to_symbol(source, taxon_id: int, encoding=None) -> dict[int, str]:
    """Map the IDs of a taxon's genes to their symbols.

    If a gene ID is listed more than once the first symbol is kept and a
    warning is raised.
    """
    id2symbol: dict[int, str] = {}
    for record in _genes_for_taxon(source, taxon_id, encoding):
        if record.gene_id in id2symbol:
            warnings.warn(
                f"Symbol for gene {record.gene_id} has already been"
                " extracted. Keeping the first."
            )
            continue

        if record.symbol is not None:
            id2symbol[record.gene_id] = record.symbol.strip()

    return id2symbol


def gene_id_to_name(source, taxon_id: int, encoding=None) -> dict[int, str]:
    """Map the IDs of a taxon's genes to their names.

    See `EntrezGeneInfoRecord.name` for how the name is picked. Genes
    without any name are left out.
    """
    id2name: dict[int, str] = {}
    for record in _genes_for_taxon(source, taxon_id, encoding):
        if record.gene_id in id2name:
            warnings.warn(
                f"Name for gene {record.gene_id} has already been extracted."
                " Keeping the first."
            )
            continue

        if record.name is not None:
            id2name[record.gene_id] = record.name.strip()

    return id2name


def gene_ids_for_taxon(source, taxon_id: int, encoding=None) -> set[int]:
    return {r.gene_id for r in _genes_for_taxon(source, taxon_id, encoding)}
