"""Download and manage PubMed Central's article lists."""

__all__ = [
    "PmcDownloader",
    "read_pmc_ids",
    "list_cache",
    "delete_from_cache",
]

import pandas as pd

from ccp_common.parser import PmcIdsCsvFileParser, to_frame
from ccp_common.storage import _storage_factory
from ccp_common.storage import delete_from_cache as _delete_cache
from ccp_common.storage import list_cache as _list_cache

from ._downloader import FtpDownloader

_NAME = "pmc"
_FILES = ["file_list.txt", "PMC-ids.csv.gz"]

list_cache = _storage_factory(_list_cache, _NAME)
delete_from_cache = _storage_factory(_delete_cache, _NAME)


class PmcDownloader(FtpDownloader):
    """Download the file list and ID map from the PMC FTP server."""

    def __init__(self, files=None, **kwds):
        super().__init__(files or _FILES, **kwds)

    @property
    def name(self) -> str:
        return _NAME

    @property
    def server(self) -> str:
        return "ftp.ncbi.nlm.nih.gov"

    @property
    def subdir(self) -> str:
        return "/pub/pmc/"


def read_pmc_ids(path) -> pd.DataFrame:
    with PmcIdsCsvFileParser(path) as parser:
        return to_frame(parser)
