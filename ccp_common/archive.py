"""Work with compressed files and archives.

Whether a file is compressed is decided from its suffix (case-insensitive),
not its contents.
"""

__all__ = [
    "is_gzip_file",
    "is_zip_file",
    "is_bzip_file",
    "is_unix_compress_file",
    "is_zipped_file",
    "is_tar_file",
    "open_input",
    "gzip_file",
    "gunzip_file",
    "unzipped_file_name",
    "unpack_tar",
    "unzip",
]

import bz2
import gzip
import os
import shutil
import tarfile
import zipfile
from typing import BinaryIO

_GZ = ".gz"
_TGZ = ".tgz"
_TAR = ".tar"
_ZIP = ".zip"
_BZIP = ".bz2"
_Z = ".Z"


def _has_suffix(path: str | os.PathLike, suffix: str) -> bool:
    return os.fspath(path).lower().endswith(suffix.lower())


def is_gzip_file(path: str | os.PathLike) -> bool:
    return _has_suffix(path, _GZ) or _has_suffix(path, _TGZ)


def is_zip_file(path: str | os.PathLike) -> bool:
    return _has_suffix(path, _ZIP)


def is_bzip_file(path: str | os.PathLike) -> bool:
    return _has_suffix(path, _BZIP)


def is_unix_compress_file(path: str | os.PathLike) -> bool:
    # Case matters here, ".z" is pack not compress.
    return os.fspath(path).endswith(_Z)


def is_zipped_file(path: str | os.PathLike) -> bool:
    return (
        is_gzip_file(path)
        or is_zip_file(path)
        or is_bzip_file(path)
        or is_unix_compress_file(path)
    )


def is_tar_file(path: str | os.PathLike) -> bool:
    return (
        _has_suffix(path, _TAR)
        or _has_suffix(path, _TAR + _GZ)
        or _has_suffix(path, _TGZ)
    )


def open_input(path: str | os.PathLike) -> BinaryIO:
    """Open a possibly compressed file as a binary stream of its contents.

    Gzip, bzip2 and zip files are decompressed on the fly. For zip files the
    first member of the archive is read.

    Raises
    ------
    ValueError
        If the file uses unix compress (.Z), which is not supported.

    """
    if is_gzip_file(path):
        return gzip.open(path, "rb")  # type: ignore[return-value]
    if is_bzip_file(path):
        return bz2.open(path, "rb")  # type: ignore[return-value]
    if is_zip_file(path):
        return _open_first_zip_member(path)
    if is_unix_compress_file(path):
        raise ValueError(
            "Reading unix compressed (.Z) files is not supported:"
            f" {os.fspath(path)}"
        )

    return open(path, "rb")


def _open_first_zip_member(path: str | os.PathLike) -> BinaryIO:
    archive = zipfile.ZipFile(path)
    members = [info for info in archive.infolist() if not info.is_dir()]
    if len(members) == 0:
        archive.close()
        raise ValueError(f"Zip file {os.fspath(path)} has no files.")

    # ZipExtFile keeps a reference to the archive's file handle; closing the
    # archive object here only drops our reference to it.
    stream = archive.open(members[0])
    archive.close()
    return stream  # type: ignore[return-value]


def unzipped_file_name(file_name: str) -> str:
    """Name of the file after decompression.

    "genes.txt.gz" becomes "genes.txt" and "pubs.tgz" becomes "pubs.tar".
    Names without a known compression suffix are returned unchanged.
    """
    if _has_suffix(file_name, _TGZ):
        return file_name[: -len(_TGZ)] + _TAR
    for suffix in (_GZ, _ZIP, _BZIP):
        if _has_suffix(file_name, suffix):
            return file_name[: -len(suffix)]
    if file_name.endswith(_Z):
        return file_name[: -len(_Z)]

    return file_name


def gzip_file(path: str | os.PathLike, out: str | None = None) -> str:
    """Compress `path`, by default to `path` + ".gz". Returns the new path."""
    out = out or os.fspath(path) + _GZ
    with open(path, "rb") as f_in, gzip.open(out, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)

    return out


def gunzip_file(path: str | os.PathLike, out: str | None = None) -> str:
    """Decompress a gzip file next to it (or to `out`). Returns the new path."""
    if not is_gzip_file(path):
        raise ValueError(f"{os.fspath(path)} is not a gzip file.")

    out = out or os.path.join(
        os.path.dirname(os.fspath(path)),
        unzipped_file_name(os.path.basename(path)),
    )
    with gzip.open(path, "rb") as f_in, open(out, "wb") as f_out:
        shutil.copyfileobj(f_in, f_out)

    return out


def unpack_tar(path: str | os.PathLike, out_dir: str | os.PathLike) -> list[str]:
    """Extract a (possibly gzipped) tarball into `out_dir`.

    Returns the paths of the extracted regular files.
    """
    if not is_tar_file(path):
        raise ValueError(f"{os.fspath(path)} is not a tar file.")

    os.makedirs(out_dir, exist_ok=True)
    with tarfile.open(path, "r") as tar:
        members = [m for m in tar.getmembers() if m.isfile()]
        tar.extractall(out_dir, filter="data")

    return [os.path.join(out_dir, m.name) for m in members]


def unzip(
    path: str | os.PathLike,
    out_dir: str | os.PathLike,
    target: str | None = None,
) -> str:
    """Extract a file from a gzip or zip archive into `out_dir`.

    Parameters
    ----------
    path : str or path-like
        The compressed file.
    out_dir : str or path-like
        Where to write the decompressed file.
    target : str, optional
        For zip files, the member to extract. Defaults to the first file in
        the archive. For gzip files, the name of the output file. Defaults to
        `unzipped_file_name` of the archive's name.

    Returns
    -------
    path : str
        The extracted file.

    """
    os.makedirs(out_dir, exist_ok=True)
    if is_gzip_file(path):
        name = target or unzipped_file_name(os.path.basename(path))
        return gunzip_file(path, os.path.join(out_dir, name))

    if not is_zip_file(path):
        raise ValueError(f"{os.fspath(path)} is not a gzip or zip file.")

    with zipfile.ZipFile(path) as archive:
        if target is None:
            names = [i.filename for i in archive.infolist() if not i.is_dir()]
            if len(names) == 0:
                raise ValueError(f"Zip file {os.fspath(path)} has no files.")
            target = names[0]

        return archive.extract(target, out_dir)
