"""Download and manage Gene Ontology annotations from EBI's GOA project."""

__all__ = [
    "GoaDownloader",
    "read_gp_associations",
    "list_cache",
    "delete_from_cache",
]

import pandas as pd

from ccp_common.parser import GpAssociationGoaUniprotFileParser, to_frame
from ccp_common.storage import _storage_factory
from ccp_common.storage import delete_from_cache as _delete_cache
from ccp_common.storage import list_cache as _list_cache

from ._downloader import FtpDownloader

_NAME = "goa"

list_cache = _storage_factory(_list_cache, _NAME)
delete_from_cache = _storage_factory(_delete_cache, _NAME)


class GoaDownloader(FtpDownloader):
    """Download UniProt gene product associations from the EBI FTP server."""

    def __init__(self, files=None, **kwds):
        super().__init__(files or ["goa_uniprot_all.gpa.gz"], **kwds)

    @property
    def name(self) -> str:
        return _NAME

    @property
    def server(self) -> str:
        return "ftp.ebi.ac.uk"

    @property
    def subdir(self) -> str:
        return "/pub/databases/GO/goa/UNIPROT/"


def read_gp_associations(path, pubmed_only: bool = False) -> pd.DataFrame:
    """Read a GPA file into a data frame.

    With `pubmed_only` only associations referencing a PubMed article are
    kept.
    """
    with GpAssociationGoaUniprotFileParser(path) as parser:
        return to_frame(
            rec
            for rec in parser
            if not pubmed_only or rec.has_pubmed_reference()
        )
