"""Download and manage data from NCBI Gene."""

__all__ = [
    "GeneDownloader",
    "GeneRifDownloader",
    "read_gene_info",
    "list_cache",
    "delete_from_cache",
]

import pandas as pd

from ccp_common.parser import EntrezGeneInfoFileParser, to_frame
from ccp_common.storage import _storage_factory
from ccp_common.storage import delete_from_cache as _delete_cache
from ccp_common.storage import list_cache as _list_cache

from ._downloader import FtpDownloader

_NAME = "gene"
_SERVER = "ftp.ncbi.nlm.nih.gov"

list_cache = _storage_factory(_list_cache, _NAME)
delete_from_cache = _storage_factory(_delete_cache, _NAME)


class GeneDownloader(FtpDownloader):
    """Download gene_info from the NCBI Gene FTP server."""

    def __init__(self, files=None, **kwds):
        super().__init__(files or ["gene_info.gz"], **kwds)

    @property
    def name(self) -> str:
        return _NAME

    @property
    def server(self) -> str:
        return _SERVER

    @property
    def subdir(self) -> str:
        return "/gene/DATA/"


class GeneRifDownloader(FtpDownloader):
    """Download the basic GeneRIF file from the NCBI Gene FTP server."""

    def __init__(self, files=None, **kwds):
        super().__init__(files or ["generifs_basic.gz"], **kwds)

    @property
    def name(self) -> str:
        return _NAME

    @property
    def server(self) -> str:
        return _SERVER

    @property
    def subdir(self) -> str:
        return "/gene/GeneRIF/"


def read_gene_info(path, taxon_id: int | None = None) -> pd.DataFrame:
    """Read a gene_info file into a data frame.

    If `taxon_id` is given only that taxon's genes are kept.
    """
    with EntrezGeneInfoFileParser(path) as parser:
        return to_frame(
            rec
            for rec in parser
            if taxon_id is None or rec.taxon_id == taxon_id
        )
