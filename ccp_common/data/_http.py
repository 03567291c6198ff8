__all__ = ["download_url"]

import os

import requests
from tqdm import tqdm

from ._downloader import retrying

_CHUNK_SIZE = 1 << 16


def download_url(url: str, local_path: str, timeout: float = 60) -> str:
    """Download `url` to `local_path` over HTTP(S).

    Failed attempts (connection errors or error status codes) are retried
    following the download settings in the config. Returns `local_path`.
    """
    directory = os.path.dirname(local_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    for attempt in retrying():
        with attempt:
            _fetch(url, local_path, timeout)

    return local_path


def _fetch(url: str, local_path: str, timeout: float) -> None:
    with requests.get(url, stream=True, timeout=timeout) as r:
        r.raise_for_status()
        total = int(r.headers.get("content-length", 0)) or None
        keys = {
            "total": total,
            "desc": os.path.basename(local_path),
            "unit": "B",
            "unit_scale": True,
        }
        partial = local_path + ".part"
        try:
            with open(partial, "wb") as fp, tqdm(**keys) as pbar:
                for chunk in r.iter_content(chunk_size=_CHUNK_SIZE):
                    fp.write(chunk)
                    pbar.update(len(chunk))

            os.replace(partial, local_path)
        finally:
            if os.path.exists(partial):
                os.unlink(partial)
