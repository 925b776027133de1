"""
Base repository with file access management.

Provides a context manager for writes that handles:
- Writing to a temporary file next to the target
- Replacing the target only when the write succeeded
- Removing the temporary file on failure
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, IO, Union


class BaseRepository:
    """
    Base class for file-backed repositories.

    Subclasses should use self.writer() to replace the backing file and
    self.reader() to read it.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    @contextmanager
    def writer(self) -> Generator[IO[str], None, None]:
        """
        Context manager that replaces the backing file.

        The new content becomes visible in one step when the block exits
        without error; on exception the old file is left untouched.

        Yields:
            A text file handle to write the new content into.

        Example:
            with self.writer() as f:
                json.dump(data, f)
        """
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                yield f
            os.replace(tmp_name, self.path)
        except Exception:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    @contextmanager
    def reader(self) -> Generator[IO[str], None, None]:
        """
        Context manager for reading the backing file.

        Raises:
            FileNotFoundError: if the file does not exist
        """
        with open(self.path, 'r', encoding='utf-8') as f:
            yield f
