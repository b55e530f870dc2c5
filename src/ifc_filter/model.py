from dataclasses import dataclass, field
from ifc_filter.yaml_data import YamlData

ifc_filter_record_version = "0.0.1"

DEFAULT_INFO_MARKERS = ("IFCPROPERTYSINGLEVALUE", "IFCPROPERTYSET")


@dataclass
class Timing(YamlData):
    """Keep track of a start time, an end time, and the duration."""

    start: str = None
    finish: str = None
    duration: float = None


@dataclass
class FilterResult(YamlData):
    """The results of filtering one IFC file."""

    source_file: str = None
    """The IFC file that was read."""

    filtered_file: str = None
    """Output with the lines kept for 3D visualisation."""

    info_file: str = None
    """Output with the property definition lines."""

    filtered_lines: int = 0
    info_lines: int = 0

    read_error: str = None
    """Description of the fault that stopped reading the source, if any."""

    write_error: str = None
    """Description of the fault that stopped writing the outputs, if any."""

    files_out: dict[str, str] = field(default_factory=dict)
    """Content digests of the outputs that exist after filtering, keyed by path."""

    timing: Timing = field(compare=False, default=None)

    def _is_complete(self) -> bool:
        return self.read_error is None and self.write_error is None


@dataclass
class FilterRecord(YamlData):
    """Top-level record of one "ifc-filter filter" invocation over one or more files."""

    version: str = ifc_filter_record_version
    info_markers: list[str] = field(default_factory=lambda: list(DEFAULT_INFO_MARKERS))
    results: list[FilterResult] = field(default_factory=list)
    timing: Timing = field(compare=False, default=None)

    def _error_count(self) -> int:
        return sum(not result._is_complete() for result in self.results)
