"""Parse GOA UniProt gene product association (GPA) files."""

__all__ = ["GpAssociationRecord", "GpAssociationGoaUniprotFileParser"]

import dataclasses

from ccp_common.reader import Line
from ccp_common.strings import TAB

from ._base import LineFileParser

_PUBMED_PREFIX = "PMID"


@dataclasses.dataclass(frozen=True)
class GpAssociationRecord:
    database: str
    database_object_id: str
    qualifier: str
    go_id: str
    db_reference: str
    evidence_code: str
    with_from: str
    extra_taxon_id: str
    date: str
    assigned_by: str
    annotation_extension: str = ""
    gene_product_form_id: str = ""

    def has_pubmed_reference(self) -> bool:
        return _PUBMED_PREFIX in self.db_reference

    def pubmed_reference_id(self) -> int:
        """The PubMed ID in `db_reference` (e.g. 12345 for "PMID:12345").

        Raises
        ------
        ValueError
            If the association is not referenced by a PubMed article.

        """
        if not self.has_pubmed_reference():
            raise ValueError(
                "Cannot return PubMed ID reference because there is not one"
                f" to return. Reference = {self.db_reference}"
            )

        return int(self.db_reference[self.db_reference.index(":") + 1 :])


class GpAssociationGoaUniprotFileParser(LineFileParser[GpAssociationRecord]):
    """Iterate over the associations in a GOA GPA file.

    Lines have 10 to 12 columns, the last two (annotation extension and gene
    product form ID) are optional and default to "".
    """

    delimiter = TAB
    comment_indicator = "!"
    min_column_count = 10
    max_column_count = 12

    def parse_record(self, line: Line) -> GpAssociationRecord:
        return GpAssociationRecord(*self.columns(line))
