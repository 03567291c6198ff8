import bz2
import gzip
import os
import tarfile
import zipfile

import pytest

from ccp_common import archive


class TestSuffixes:
    def test_compression_suffixes(self):
        assert archive.is_gzip_file("genes.txt.gz")
        assert archive.is_gzip_file("genes.TGZ")
        assert archive.is_zip_file("genes.zip")
        assert archive.is_bzip_file("genes.bz2")
        assert archive.is_unix_compress_file("genes.Z")
        assert not archive.is_unix_compress_file("genes.z")
        assert not archive.is_zipped_file("genes.txt")

    def test_tar_suffixes(self):
        assert archive.is_tar_file("pubs.tar")
        assert archive.is_tar_file("pubs.tar.gz")
        assert archive.is_tar_file("pubs.tgz")
        assert not archive.is_tar_file("pubs.gz")

    def test_unzipped_file_name(self):
        assert archive.unzipped_file_name("gene_info.gz") == "gene_info"
        assert archive.unzipped_file_name("pubs.tgz") == "pubs.tar"
        assert archive.unzipped_file_name("a.txt.zip") == "a.txt"
        assert archive.unzipped_file_name("a.txt.bz2") == "a.txt"
        assert archive.unzipped_file_name("a.txt") == "a.txt"


class TestOpenInput:
    def test_gzip(self, tmp_path):
        path = tmp_path / "a.txt.gz"
        with gzip.open(path, "wb") as fp:
            fp.write(b"hello\n")

        with archive.open_input(path) as fp:
            assert fp.read() == b"hello\n"

    def test_bzip(self, tmp_path):
        path = tmp_path / "a.txt.bz2"
        with bz2.open(path, "wb") as fp:
            fp.write(b"hello\n")

        with archive.open_input(path) as fp:
            assert fp.read() == b"hello\n"

    def test_zip_reads_first_member(self, tmp_path):
        path = tmp_path / "a.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("first.txt", "one\n")
            zf.writestr("second.txt", "two\n")

        with archive.open_input(path) as fp:
            assert fp.read() == b"one\n"

    def test_plain(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"plain\n")
        with archive.open_input(path) as fp:
            assert fp.read() == b"plain\n"

    def test_unix_compress_unsupported(self, tmp_path):
        with pytest.raises(ValueError):
            archive.open_input(tmp_path / "a.txt.Z")


class TestExtraction:
    def test_gzip_roundtrip(self, tmp_path):
        path = tmp_path / "a.txt"
        path.write_bytes(b"content\n")
        compressed = archive.gzip_file(path)
        assert compressed == str(path) + ".gz"

        os.unlink(path)
        out = archive.gunzip_file(compressed)
        assert out == str(path)
        assert path.read_bytes() == b"content\n"

    def test_gunzip_rejects_other_files(self, tmp_path):
        with pytest.raises(ValueError):
            archive.gunzip_file(tmp_path / "a.txt")

    def test_unpack_tar(self, tmp_path):
        member = tmp_path / "a.txt"
        member.write_text("in tar\n")
        tar_path = tmp_path / "bundle.tar.gz"
        with tarfile.open(tar_path, "w:gz") as tar:
            tar.add(member, arcname="dir/a.txt")

        files = archive.unpack_tar(tar_path, tmp_path / "out")
        assert files == [os.path.join(tmp_path / "out", "dir/a.txt")]
        with open(files[0]) as fp:
            assert fp.read() == "in tar\n"

    def test_unzip_target(self, tmp_path):
        path = tmp_path / "a.zip"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("first.txt", "one\n")
            zf.writestr("second.txt", "two\n")

        out = archive.unzip(path, tmp_path / "out", "second.txt")
        with open(out) as fp:
            assert fp.read() == "two\n"

    def test_unzip_gzip(self, tmp_path):
        path = tmp_path / "b.txt.gz"
        with gzip.open(path, "wb") as fp:
            fp.write(b"gz\n")

        out = archive.unzip(path, tmp_path / "out")
        assert os.path.basename(out) == "b.txt"
