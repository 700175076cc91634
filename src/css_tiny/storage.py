"""Reading and writing stylesheet files with advisory locking."""

import fcntl
import os
import time
from contextlib import contextmanager, suppress
from typing import IO, Iterator, Optional, Union

from .config import StorageConfig
from .parser import parse
from .serializer import serialize
from .stylesheet import Stylesheet
from .utils.errors import (
    CloseFailedError,
    CssTinyError,
    LockFailedError,
    MissingInputError,
    NotAFileError,
    NotFoundError,
    OpenFailedError,
    PermissionDeniedError,
    ReadFailedError,
    WriteFailedError,
)
from .utils.logging_config import LoggerMixin, log_file_operation

PathType = Union[str, "os.PathLike[str]"]


class StylesheetStorage(LoggerMixin):
    """Loads and stores stylesheets on disk.

    Reads hold a shared ``flock`` and writes an exclusive one for as long as
    the file is open, so cooperating processes never see a half-written file.
    """

    def __init__(self, config: Optional[StorageConfig] = None):
        self.config = config or StorageConfig()

    def load(self, path: PathType) -> Stylesheet:
        """
        Read and parse a stylesheet file.

        Args:
            path: The file to read

        Returns:
            The parsed Stylesheet

        Raises:
            MissingInputError: If no file name was given
            NotFoundError, NotAFileError, PermissionDeniedError: If the path
                cannot be read as a file
            OpenFailedError, LockFailedError, ReadFailedError, CloseFailedError:
                If the operating system refuses one of the steps
            ParseError: If the contents are not a valid stylesheet
        """
        start_time = time.time()
        filename = _filename(path, "You did not specify a file name")

        if not os.path.exists(filename):
            raise NotFoundError(f"File '{filename}' does not exist", path=filename)
        if os.path.isdir(filename):
            raise NotAFileError(f"'{filename}' is a directory, not a file", path=filename)
        if not os.path.isfile(filename):
            raise NotAFileError(f"'{filename}' is not a regular file", path=filename)
        if not os.access(filename, os.R_OK):
            raise PermissionDeniedError(
                f"Insufficient permissions to read '{filename}'", path=filename
            )

        contents = self._read(filename)

        try:
            sheet = parse(contents)
        except CssTinyError as e:
            log_file_operation("load", filename, 0, len(contents), time.time() - start_time, e.message)
            raise

        log_file_operation("load", filename, len(sheet), len(contents), time.time() - start_time)
        return sheet

    def store(self, path: PathType, sheet: Stylesheet, mode: Optional[int] = None) -> None:
        """
        Serialize a stylesheet and write it to a file.

        The file is created with ``mode`` (before umask) when it does not
        exist yet, and truncated only once the exclusive lock is held.

        Args:
            path: The file to write
            sheet: The stylesheet to write
            mode: Permission bits for a new file, defaults to ``config.file_mode``

        Raises:
            MissingInputError: If no file name was given
            NotAFileError, PermissionDeniedError, OpenFailedError: If the file
                cannot be opened for writing
            LockFailedError, WriteFailedError, CloseFailedError: If the
                operating system refuses one of the later steps
        """
        start_time = time.time()
        filename = _filename(path, "No file name provided to save to")
        contents = serialize(sheet)
        file_mode = self.config.file_mode if mode is None else mode

        def opener(name: str, flags: int) -> int:
            return os.open(name, os.O_WRONLY | os.O_CREAT, file_mode)

        try:
            handle = open(
                filename, "w", encoding=self.config.encoding, newline="", opener=opener
            )
        except IsADirectoryError as e:
            raise NotAFileError(f"'{filename}' is a directory, not a file", path=filename) from e
        except PermissionError as e:
            raise PermissionDeniedError(
                f"Insufficient permissions to write '{filename}'", path=filename
            ) from e
        except OSError as e:
            raise OpenFailedError(
                f"Failed to open file '{filename}' for writing: {e.strerror}", path=filename
            ) from e

        try:
            with self._locked(handle, fcntl.LOCK_EX, filename, "write"):
                try:
                    handle.seek(0)
                    handle.truncate()
                    handle.write(contents)
                    handle.flush()
                except (OSError, UnicodeError) as e:
                    raise WriteFailedError(
                        f"Failed to write file '{filename}': {e}", path=filename
                    ) from e
        except CssTinyError as e:
            with suppress(OSError):
                handle.close()
            log_file_operation("store", filename, len(sheet), len(contents), time.time() - start_time, e.message)
            raise

        self._close(handle, filename)
        log_file_operation("store", filename, len(sheet), len(contents), time.time() - start_time)

    def _read(self, filename: str) -> str:
        try:
            handle = open(filename, "r", encoding=self.config.encoding)
        except PermissionError as e:
            raise PermissionDeniedError(
                f"Insufficient permissions to read '{filename}'", path=filename
            ) from e
        except OSError as e:
            raise OpenFailedError(f"Failed to open file '{filename}': {e.strerror}", path=filename) from e

        try:
            with self._locked(handle, fcntl.LOCK_SH, filename, "read"):
                try:
                    contents = handle.read()
                except (OSError, UnicodeError) as e:
                    raise ReadFailedError(f"Failed to read file '{filename}': {e}", path=filename) from e
        except CssTinyError:
            with suppress(OSError):
                handle.close()
            raise

        self._close(handle, filename)
        return contents

    @contextmanager
    def _locked(self, handle: IO[str], operation: int, filename: str, purpose: str) -> Iterator[None]:
        # The lock is released when the handle is closed if the body raises.
        if not self.config.lock:
            self.logger.debug(f"Locking disabled, using '{filename}' without a {purpose} lock")
            yield
            return

        try:
            fcntl.flock(handle.fileno(), operation)
        except OSError as e:
            raise LockFailedError(
                f"Failed to get a {purpose} lock on the file '{filename}'", path=filename
            ) from e

        yield

        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)
        except OSError as e:
            raise LockFailedError(f"Failed to unlock the file '{filename}'", path=filename) from e

    def _close(self, handle: IO[str], filename: str) -> None:
        try:
            handle.close()
        except OSError as e:
            raise CloseFailedError(f"Failed to close the file '{filename}': {e.strerror}", path=filename) from e


def _filename(path: Optional[PathType], message: str) -> str:
    if path is None:
        raise MissingInputError(message)
    filename = os.fspath(path)
    if not filename:
        raise MissingInputError(message)
    return filename


def load(path: PathType, config: Optional[StorageConfig] = None) -> Stylesheet:
    """Load a stylesheet file. See :meth:`StylesheetStorage.load`."""
    return StylesheetStorage(config).load(path)


def store(
    path: PathType,
    sheet: Stylesheet,
    mode: Optional[int] = None,
    config: Optional[StorageConfig] = None,
) -> None:
    """Write a stylesheet file. See :meth:`StylesheetStorage.store`."""
    StylesheetStorage(config).store(path, sheet, mode)
