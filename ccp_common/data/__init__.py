"""Download the files the parsers read from their FTP servers."""

__all__ = ["download", "download_url", "default_cache_dir"]

from typing import Iterable

from ccp_common.storage import default_cache_dir

from ._http import download_url
from .gene import GeneDownloader, GeneRifDownloader
from .goa import GoaDownloader
from .pmc import PmcDownloader

_DOWNLOADERS = {
    "gene": GeneDownloader,
    "generif": GeneRifDownloader,
    "pmc": PmcDownloader,
    "goa": GoaDownloader,
}


def download(
    content: str,
    files: Iterable[str] | None = None,
    cache_dir: str | None = None,
    check_remote: bool = True,
) -> list[str]:
    """Fetch one of the supported sources into the cache.

    Cached files are only replaced when the server has a newer copy, so
    calling this again is cheap when nothing changed.

    Parameters
    ----------
    content : str { "gene", "generif", "pmc", "goa" }
        The name of the content to download.
    files : list[str], optional
        If files is given, download these files from the FTP server instead of
        the default file list.
    cache_dir : str, optional
        Directory to store the files in. Defaults to a subdirectory of
        `default_cache_dir` named after the source.
    check_remote : bool, default True
        Whether to connect to the remote server. If False, returns the cached
        files without checking for updates and raises an error if any file is
        missing from the cache.

    Returns
    -------
    files : list of file paths.

    See Also
    --------
    `ccp_common.data.default_cache_dir`

    """
    if content not in _DOWNLOADERS:
        raise ValueError(
            f'Unknown content "{content}". Expected one of'
            f" {', '.join(_DOWNLOADERS)}."
        )

    downloader = _DOWNLOADERS[content](
        files=files, cache_dir=cache_dir, check_remote=check_remote
    )

    return downloader.download()
