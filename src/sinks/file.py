import asyncio
import json
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

from pydantic import BaseModel

from src.logger import logger
from src.models.common import CepLookupResult


class FileWriteResult(BaseModel):
    """Metadata describing a completed write."""

    path: Path
    bytes_written: int


# Completion callback: (error, metadata). Exactly one of the two is None.
WriteCallback = Callable[[OSError | None, FileWriteResult | None], None]


def report_write_outcome(error: OSError | None, meta: FileWriteResult | None = None) -> None:
    """Default completion callback: errors go to the log, success to stdout."""
    if error is not None:
        logger.error(f"Failed to save lookup result: {repr(error)}")
        return
    if meta is not None:
        print(f"Arquivo salvo com sucesso em: {meta.path}")  # noqa: T201


class FileSink:
    """Sink that persists lookup results as a JSON file.

    Calling the sink schedules the write on the running event loop and returns
    straight away; the file is written off the loop in a worker thread. The
    outcome is only observable through `on_complete` (or by awaiting
    `drain()`), never as an exception in the caller. Each write overwrites the
    target file.
    """

    def __init__(
        self,
        output_dir: Path | str,
        filename: str = "response.json",
        on_complete: WriteCallback | None = None,
    ) -> None:
        self.path = Path(output_dir) / filename
        self._on_complete = on_complete or report_write_outcome
        self._pending: set[asyncio.Task] = set()

    def __call__(self, result: CepLookupResult | str) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self.write(result))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def write(self, result: CepLookupResult | str) -> FileWriteResult | None:
        """Write `result` to the target path and report the outcome.

        Returns the write metadata on success and None when the write failed
        (the failure has already been passed to the completion callback).
        """
        text = self._serialize(result)
        try:
            bytes_written = await asyncio.to_thread(self._write_text, self.path, text)
        except OSError as exc:
            self._on_complete(exc, None)
            return None

        meta = FileWriteResult(path=self.path, bytes_written=bytes_written)
        self._on_complete(None, meta)
        return meta

    async def drain(self) -> None:
        """Wait until every write scheduled so far has finished."""
        if self._pending:
            await asyncio.gather(*self._pending)

    @property
    def pending(self) -> int:
        return len(self._pending)

    @staticmethod
    def _serialize(result: CepLookupResult | str) -> str:
        if isinstance(result, str):
            return result
        return json.dumps(result.as_payload(), ensure_ascii=False)

    @staticmethod
    def _write_text(path: Path, text: str) -> int:
        # Write a sibling temp file and swap it in, so concurrent writers never interleave.
        data = text.encode("utf-8")
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        return len(data)
