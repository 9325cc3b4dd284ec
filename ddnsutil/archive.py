"""Extracting an executable from a release archive and replacing a file in place."""

from __future__ import annotations

import contextlib
import io
import logging
import os
import subprocess
import sys
import tarfile
import zipfile
import zlib
from collections.abc import Callable
from typing import BinaryIO, Union

_logger = logging.getLogger("ddnsutil")

Source = Union[bytes, bytearray, memoryview, BinaryIO]


class CannotDecompressFileError(Exception):
    """The archive could not be read."""


class ExecutableNotFoundInArchiveError(Exception):
    """The archive holds no file named after the command."""


def _read_all(src: Source) -> bytes:
    if isinstance(src, (bytes, bytearray, memoryview)):
        return bytes(src)
    return src.read()


def match_executable_name(cmd: str, target: str) -> bool:
    """Whether the file name is the command, with or without ``.exe``."""
    return target in (cmd, cmd + ".exe")


def _unzip(data: bytes, cmd: str) -> bytes:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            for info in archive.infolist():
                name = os.path.basename(info.filename)
                if not info.is_dir() and match_executable_name(cmd, name):
                    return archive.read(info)
    except (
        zipfile.BadZipFile,
        zlib.error,
        OSError,
        EOFError,
        RuntimeError,
        NotImplementedError,
    ) as err:
        raise CannotDecompressFileError(f"failed to decompress zip file: {err}") from err
    raise ExecutableNotFoundInArchiveError(f'executable not found in zip file: "{cmd}"')


def _untar(data: bytes, cmd: str) -> bytes:
    try:
        with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as archive:
            for member in archive:
                if match_executable_name(cmd, os.path.basename(member.name)):
                    handle = archive.extractfile(member)
                    return handle.read() if handle is not None else b""
    except (tarfile.TarError, OSError, EOFError, zlib.error) as err:
        raise CannotDecompressFileError(f"failed to decompress tar.gz file: {err}") from err
    raise ExecutableNotFoundInArchiveError(f'executable not found in tar.gz file: "{cmd}"')


_DECOMPRESSORS: tuple[tuple[str, Callable[[bytes, str], bytes]], ...] = (
    (".zip", _unzip),
    (".tar.gz", _untar),
)


def decompress_command(src: Source, url: str, cmd: str) -> bytes:
    """The contents of the command's executable, chosen by the archive type in ``url``.

    A ``url`` that is not a ``.zip`` or ``.tar.gz`` gives back the source unchanged.
    """
    data = _read_all(src)
    for extension, decompress in _DECOMPRESSORS:
        if url.endswith(extension):
            return decompress(data, cmd)
    _logger.info("It's not a compressed file, skip decompressing")
    return data


def apply_update(data: Source, target_path: str) -> None:
    """Replace the file at ``target_path`` with ``data``, rolling back on failure.

    The new contents go to ``<target>.new``, the target is moved to
    ``<target>.old``, the new file takes its place and the old one is removed.
    """
    new_bytes = _read_all(data)
    directory, filename = os.path.split(target_path)
    new_path = os.path.join(directory, filename + ".new")
    old_path = os.path.join(directory, filename + ".old")

    fd = os.open(new_path, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o755)
    with os.fdopen(fd, "wb") as handle:
        handle.write(new_bytes)

    with contextlib.suppress(OSError):
        os.remove(old_path)

    os.rename(target_path, old_path)
    try:
        os.rename(new_path, target_path)
    except OSError:
        with contextlib.suppress(OSError):
            os.rename(old_path, target_path)
        raise

    try:
        os.remove(old_path)
    except OSError:
        if sys.platform == "win32":
            # A running executable cannot be deleted; remove it once the process exits.
            subprocess.Popen(
                ["cmd.exe", "/c", f"ping 127.0.0.1 -n 2 > NUL & del {old_path}"]
            )
            return
        raise


def decompress_and_update(src: Source, asset_name: str, cmd_path: str) -> None:
    """Extract the executable for ``cmd_path`` from the asset and install it there."""
    cmd = os.path.basename(cmd_path)
    apply_update(decompress_command(src, asset_name, cmd), cmd_path)