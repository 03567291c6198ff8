"""Parse the PubMed Central file list and PMC-ids tables.

file_list.txt maps each open access article's package on the PMC FTP server
to its citation and accession. PMC-ids.csv links PMC accessions with PubMed
IDs, DOIs and journal metadata.
"""

__all__ = [
    "PmcFileListRecord",
    "PmcFileListTxtFileParser",
    "PmcIdsCsvRecord",
    "PmcIdsCsvFileParser",
]

import dataclasses

from ccp_common.reader import Line
from ccp_common.strings import (
    COMMA,
    QUOTATION_MARK,
    TAB,
    n_digits_pattern,
    starts_with_regex,
)

from ._base import LineFileParser
from ._errors import FileFormatChangeError


@dataclasses.dataclass(frozen=True)
class PmcFileListRecord:
    ftp_path: str
    citation: str
    pmc_accession: str

    @property
    def ftp_directory(self) -> str:
        """Directory part of `ftp_path` (without the trailing slash)."""
        return self.ftp_path[: self.ftp_path.rfind("/")]

    @property
    def ftp_file_name(self) -> str:
        return self.ftp_path[self.ftp_path.rfind("/") + 1 :]


class PmcFileListTxtFileParser(LineFileParser[PmcFileListRecord]):
    """Iterate over the articles in PMC's file_list.txt.

    The first line holds the time the list was generated and is checked to
    start with a four digit year.
    """

    delimiter = TAB
    column_count = 3

    def initialize(self) -> None:
        header = self._read_header()
        if not starts_with_regex(header.text, n_digits_pattern(4)):
            raise FileFormatChangeError(
                "File format change detected. Expected a timestamp as the"
                f' first line, but observed: "{header.text}"'
            )

    def parse_record(self, line: Line) -> PmcFileListRecord:
        ftp_path, citation, pmc_accession = self.columns(line)
        return PmcFileListRecord(ftp_path, citation, pmc_accession)


@dataclasses.dataclass(frozen=True)
class PmcIdsCsvRecord:
    journal_title: str
    issn: str
    electronic_issn: str
    year: int
    volume: str
    issue: str
    page: str
    doi: str
    pmc_accession: str
    pubmed_id: str
    manuscript_id: str
    release_date: str


class PmcIdsCsvFileParser(LineFileParser[PmcIdsCsvRecord]):
    """Iterate over the rows of PMC-ids.csv.

    Fields are comma separated and may be wrapped in double quotes when they
    contain commas. The quotes are kept in the parsed values.
    """

    delimiter = COMMA
    field_enclosure = QUOTATION_MARK
    column_count = 12

    def initialize(self) -> None:
        header = self._read_header()
        if not header.text.startswith("Journal Title"):
            raise FileFormatChangeError(
                "File format change detected. Expected line starting with"
                f' "Journal Title" as first line, but observed: "{header.text}"'
            )

    def parse_record(self, line: Line) -> PmcIdsCsvRecord:
        cols = self.columns(line)
        return PmcIdsCsvRecord(
            journal_title=cols[0],
            issn=cols[1],
            electronic_issn=cols[2],
            year=int(cols[3]),
            volume=cols[4],
            issue=cols[5],
            page=cols[6],
            doi=cols[7],
            pmc_accession=cols[8],
            pubmed_id=cols[9],
            manuscript_id=cols[10],
            release_date=cols[11],
        )
