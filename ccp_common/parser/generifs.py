"""Parse NCBI's generifs_basic file of Gene References Into Function."""

__all__ = ["GeneRIF", "GenerifsBasicFileParser", "TIMESTAMP_FORMAT"]

import dataclasses
import datetime

from ccp_common.reader import Line
from ccp_common.strings import TAB

from ._base import LineFileParser

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"


@dataclasses.dataclass(frozen=True)
class GeneRIF:
    taxon_id: int
    gene_id: int
    pmids: tuple[int, ...]
    timestamp: datetime.datetime
    text: str


class GenerifsBasicFileParser(LineFileParser[GeneRIF]):
    """Iterate over the GeneRIFs in a generifs_basic file.

    A timestamp not in `TIMESTAMP_FORMAT` raises a `ValueError`.
    """

    delimiter = TAB
    comment_indicator = "#"
    column_count = 5

    def parse_record(self, line: Line) -> GeneRIF:
        toks = self.columns(line)
        return GeneRIF(
            taxon_id=int(toks[0]),
            gene_id=int(toks[1]),
            pmids=tuple(int(pmid) for pmid in toks[2].split(",")),
            timestamp=datetime.datetime.strptime(toks[3], TIMESTAMP_FORMAT),
            text=toks[4],
        )
