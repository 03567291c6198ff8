"""Base class for downloading FTP files."""

__all__ = ["FtpDownloader", "retrying"]

import datetime
import logging
import os
from ftplib import FTP
from typing import Iterable

from tenacity import (
    Retrying,
    before_sleep_log,
    stop_after_attempt,
    wait_fixed,
)
from tqdm import tqdm

from ccp_common import config
from ccp_common.storage import default_cache_dir

logger = logging.getLogger(__name__)

_FileInfo = tuple[str, dict[str, str]]


def retrying() -> Retrying:
    """Retry policy for a single download, read from the config."""
    return Retrying(
        stop=stop_after_attempt(config.max_attempts),
        wait=wait_fixed(config.retry_wait),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


class FtpDownloader:
    """Keep local copies of files from an anonymous FTP server up to date.

    Subclasses name the server, the remote directory and the cache
    subdirectory through the `server`, `subdir` and `name` properties.
    """

    def __init__(
        self,
        files: Iterable[str],
        cache_dir: str | None = None,
        check_remote: bool = True,
    ):
        """Set up the downloader without connecting.

        Parameters
        ----------
        files : Iterable[str]
            A list of files to download. Subclasses provide a default list.
        cache_dir : str, optional
            Where to store files. Defaults to the package cache directory
            joined with the downloader's `name`.
        check_remote : bool, default True
            Whether to connect to the remote server and download files. If
            True, this checks for cached files, downloads missing files and
            cached files that are older than server's. If False, returns the
            cached files without checking for updates from the server. An
            error is raised if any file is missing from the cache. This must
            be True the first time files are requested to cache them.

        """
        self.files = list(files)
        self.cache_dir = cache_dir or default_cache_dir(self.name)
        self._check_remote = check_remote
        self.ftp: FTP | None = None

    @property
    def name(self) -> str:
        """Name of the downloader (where to store downloads)."""
        raise NotImplementedError

    @property
    def server(self) -> str:
        """Name of the server to download from."""
        raise NotImplementedError

    @property
    def subdir(self) -> str:
        """Name of subdirectory files are located."""
        raise NotImplementedError

    def connect(self) -> FTP:
        ftp = FTP(self.server)
        ftp.login()
        ftp.cwd(self.subdir)

        return ftp

    def disconnect(self) -> None:
        if self.ftp is None:
            return

        self.ftp.close()
        self.ftp = None

    def _local(self, file: str) -> str:
        """Location where the local file should be stored."""
        return os.path.join(self.cache_dir, file)

    def _is_stale(self, file: str, ls: list[_FileInfo]) -> bool:
        """Whether the cached copy is older than the server's."""
        mod_string = [f[1] for f in ls if f[0] == file][0]["modify"]
        remote_modtime = datetime.datetime.fromisoformat(
            mod_string[:8] + "T" + mod_string[8:]
        )
        local_modtime = datetime.datetime.fromtimestamp(
            os.stat(self._local(file)).st_mtime
        )

        return local_modtime < remote_modtime

    def _download_file(self, file: str, ls: list[_FileInfo]) -> str:
        """Download a single file from the server."""
        if self.ftp is None:
            raise RuntimeError("FTP not connected")

        remote_files = [f[0] for f in ls]
        if file not in remote_files:
            raise ValueError(f'File "{file}" not found on server.')

        if os.path.exists(self._local(file)):
            if not self._is_stale(file, ls):
                print(f"Most recent file for {file} already downloaded.")
                return self._local(file)

            os.unlink(self._local(file))

        for attempt in retrying():
            with attempt:
                if self.ftp is None:
                    self.ftp = self.connect()

                try:
                    self._retrieve(file)
                except Exception:
                    # A failed transfer can leave the control connection dead.
                    self.disconnect()
                    raise

        return self._local(file)

    def _retrieve(self, file: str) -> None:
        if self.ftp is None:
            raise RuntimeError("FTP not connected")

        # Binary mode is needed for ftp.size.
        self.ftp.voidcmd("TYPE I")
        keys = {
            "total": self.ftp.size(file),
            "desc": file,
            "unit": "B",
            "unit_scale": True,
        }
        partial = self._local(file) + ".part"
        try:
            with open(partial, "wb") as fp, tqdm(**keys) as pbar:

                def progress_callback(data):
                    fp.write(data)
                    pbar.update(len(data))

                self.ftp.retrbinary(f"RETR {file}", progress_callback)

            os.replace(partial, self._local(file))
        finally:
            if os.path.exists(partial):
                os.unlink(partial)

    def download(self) -> list[str]:
        """Download the requested files."""
        if not self._check_remote:
            if all((os.path.exists(self._local(f)) for f in self.files)):
                return [self._local(f) for f in self.files]

            raise FileExistsError(
                """At least one requested file has not been downloaded.

                Rerun with `check_remote` set to True to cache files."""
            )

        os.makedirs(self.cache_dir, exist_ok=True)
        if self.ftp is None:
            self.ftp = self.connect()

        try:
            ls = list(self.ftp.mlsd(facts=["modify"]))

            print("Starting downloads:")
            files = [self._download_file(file, ls) for file in self.files]
        finally:
            self.disconnect()

        return files
