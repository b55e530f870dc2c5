import logging
from datetime import datetime, timezone
from os import PathLike
from pathlib import Path
from typing import Iterator, Sequence, TextIO, Union
from ifc_filter.model import DEFAULT_INFO_MARKERS, FilterResult, Timing
from ifc_filter.file_matching import hash_existing

FILTERED_SUFFIX = "_filtered_.ifc"
INFO_SUFFIX = "_info_.ifc"


class ReadFailure(Exception):
    """The source file could not be read to the end."""


def is_info_line(line: str, markers: Sequence[str] = DEFAULT_INFO_MARKERS) -> bool:
    """Property definition lines are not needed for 3D visualisation."""
    return any(marker in line for marker in markers)


def read_lines(source: TextIO) -> Iterator[str]:
    """Yield lines from the source without their terminators.

    Faults while reading are raised as ReadFailure so they can't be mistaken for faults writing the outputs.
    Bytes that are not valid UTF-8 are decoded as replacement characters and don't stop the read.
    """
    try:
        for line in source:
            yield line.removesuffix("\n")
    except OSError as e:
        raise ReadFailure(str(e)) from e


class IfcEntityFilter():
    """Split an IFC file into lines needed for 3D visualisation and lines with additional property info.

    The outputs are named after the original file with its last 4 characters (normally ".ifc") replaced:
    "model.ifc" becomes "model_filtered_.ifc" and "model_info_.ifc".
    """

    def __init__(self, ifc_path: Union[str, PathLike], info_markers: Sequence[str] = DEFAULT_INFO_MARKERS):
        self.ifc_path = str(ifc_path)
        self.filtered_path = self.ifc_path[:-4] + FILTERED_SUFFIX
        self.info_path = self.ifc_path[:-4] + INFO_SUFFIX
        self.original_file_path = Path(self.ifc_path)
        self.output_new_file_path = Path(self.filtered_path)
        self.output_info_file_path = Path(self.info_path)
        self.info_markers = list(info_markers)

    def filter(self) -> str:
        """Filter the original file and return the filtered file path, even if filtering failed."""
        self.run()
        return self.filtered_path

    def run(self) -> FilterResult:
        """Filter the original file and return a summary of what was written."""
        logging.info(f"Filtering IFC file: {self.original_file_path.as_posix()}")

        start = datetime.now(timezone.utc)

        result = FilterResult(
            source_file=self.ifc_path,
            filtered_file=self.filtered_path,
            info_file=self.info_path,
        )

        try:
            with open(self.original_file_path, encoding="utf-8", errors="replace") as source:
                try:
                    with (
                        open(self.output_new_file_path, "w", encoding="utf-8", newline="\n") as filtered_out,
                        open(self.output_info_file_path, "w", encoding="utf-8", newline="\n") as info_out,
                    ):
                        for line in read_lines(source):
                            if is_info_line(line, self.info_markers):
                                info_out.write(line + "\n")
                                result.info_lines += 1
                            else:
                                filtered_out.write(line + "\n")
                                result.filtered_lines += 1
                except OSError as e:
                    logging.error("Error in writing files.")
                    result.write_error = str(e)
        except (OSError, ReadFailure) as e:
            logging.error("Error in reading file.")
            result.read_error = str(e)

        result.files_out = hash_existing([result.filtered_file, result.info_file])

        finish = datetime.now(timezone.utc)
        duration = finish - start
        result.timing = Timing(start.isoformat(sep="T"), finish.isoformat(sep="T"), duration.total_seconds())

        logging.info(f"Wrote {result.filtered_lines} filtered lines and {result.info_lines} info lines.")
        return result
