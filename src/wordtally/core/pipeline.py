# src/wordtally/core/pipeline.py
import asyncio
import logging
import os
import shutil
from contextlib import contextmanager, suppress
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Iterator, List, Optional, Union

from wordtally.config import DEFAULT_ENCODING
from wordtally.core.aggregator import FrequencyAggregator
from wordtally.core.report import render_lines
from wordtally.errors import (
    AggregationError,
    EmptyPathError,
    ExtractionError,
    InputNotFoundError,
    OutputDirectoryNotFoundError,
    ProcessingError,
    WriteError,
    WritePermissionError,
)
from wordtally.models import FrequencyTable
from wordtally.utils.tokenizer import Tokenizer

PathLike = Union[str, "os.PathLike[str]"]


def _is_blank(path: Optional[PathLike]) -> bool:
    return path is None or not os.fspath(path).strip()


class FileProcessingPipeline:
    """
    Validates paths, reads and tokenizes the input file, counts words and
    writes the sorted result. Every operation logs its start, completion and
    failure; failures are logged before they propagate and are never retried.
    """

    def __init__(
        self,
        aggregator: Optional[FrequencyAggregator] = None,
        logger: Optional[logging.Logger] = None,
        encoding: Optional[str] = DEFAULT_ENCODING,
    ):
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.aggregator = aggregator if aggregator is not None else FrequencyAggregator(logger=self.logger)
        self.encoding = encoding

    @contextmanager
    def _operation(self, name: str, path: Optional[PathLike]) -> Iterator[None]:
        fields = {"operation": name, "path": None if path is None else os.fspath(path)}
        self.logger.info(f"{name}: {fields['path']}", extra=fields)
        try:
            yield
        except Exception as e:
            self.logger.error(f"{name} failed for {fields['path']}: {e}", exc_info=True, extra=fields)
            raise
        self.logger.debug(f"{name} completed: {fields['path']}", extra=fields)

    # --- Validation ---

    def validate_input_file(self, path: Optional[PathLike]) -> None:
        with self._operation("validate_input_file", path):
            if _is_blank(path):
                raise EmptyPathError("Input file name cannot be empty or whitespace.")
            if not Path(path).is_file():
                raise InputNotFoundError(f"Input file '{os.fspath(path)}' not found.", path=os.fspath(path))

    def validate_output_file(self, path: Optional[PathLike]) -> None:
        with self._operation("validate_output_file", path):
            if _is_blank(path):
                raise EmptyPathError("Output file name cannot be empty or whitespace.")

            output_path = Path(path)
            directory = output_path.parent
            if not directory.is_dir():
                raise OutputDirectoryNotFoundError(
                    f"Output directory '{directory}' not found.", path=os.fspath(path)
                )
            self._probe_write(output_path)

    def _probe_write(self, output_path: Path) -> None:
        """Zero-byte write test that leaves an existing file untouched."""
        try:
            if output_path.exists():
                with output_path.open("a", encoding=self.encoding):
                    pass
            else:
                with output_path.open("x", encoding=self.encoding):
                    pass
                output_path.unlink()
        except PermissionError as e:
            raise WritePermissionError(
                f"No write permission for the output file '{output_path}'.", path=str(output_path)
            ) from e
        except OSError as e:
            raise WriteError(f"Cannot write to '{output_path}': {e}", path=str(output_path)) from e

    # --- Extraction & processing ---

    def _read_text(self, path: PathLike) -> str:
        try:
            with open(path, "r", encoding=self.encoding) as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ExtractionError(
                f"Failed to read input file '{os.fspath(path)}': {e}", path=os.fspath(path)
            ) from e

    def extract_words(self, path: Optional[PathLike]) -> List[str]:
        with self._operation("extract_words", path):
            self.validate_input_file(path)
            words = Tokenizer.extract(self._read_text(path))
            self.logger.debug(f"Extracted {len(words)} words", extra={"operation": "extract_words"})
            return words

    def process_file(self, path: Optional[PathLike]) -> FrequencyTable:
        with self._operation("process_file", path):
            words = self.extract_words(path)
            try:
                return self.aggregator.aggregate(words)
            except AggregationError as e:
                raise ProcessingError(
                    f"Error processing file '{os.fspath(path)}': {e}", path=os.fspath(path)
                ) from e

    # --- Output ---

    def write_output_file(self, path: Optional[PathLike], table: FrequencyTable) -> None:
        with self._operation("write_output_file", path):
            self.validate_output_file(path)
            lines = render_lines(table.sorted_entries())
            self._replace_atomically(Path(path), lines)

    def _replace_atomically(self, output_path: Path, lines: List[str]) -> None:
        """
        Writes to a temporary file beside the target and moves it into place,
        so the target holds either its old content or the complete output.
        """
        tmp_name = None
        try:
            with NamedTemporaryFile(
                "w",
                encoding=self.encoding,
                dir=output_path.parent,
                prefix=f".{output_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                for line in lines:
                    f.write(line + "\n")
            if output_path.exists():
                shutil.copymode(output_path, tmp_name)
            else:
                # NamedTemporaryFile creates files as 0600
                os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, output_path)
        except OSError as e:
            if tmp_name is not None:
                with suppress(FileNotFoundError):
                    os.unlink(tmp_name)
            raise WriteError(
                f"Error writing output to file '{output_path}': {e}", path=str(output_path)
            ) from e

    # --- Async variants: blocking work runs on a worker thread ---

    async def extract_words_async(self, path: Optional[PathLike]) -> List[str]:
        return await asyncio.to_thread(self.extract_words, path)

    async def process_file_async(self, path: Optional[PathLike]) -> FrequencyTable:
        return await asyncio.to_thread(self.process_file, path)

    async def write_output_file_async(self, path: Optional[PathLike], table: FrequencyTable) -> None:
        await asyncio.to_thread(self.write_output_file, path, table)
