import logging
from typing import Any
from pathlib import Path
from pandas import DataFrame
from ifc_filter.model import FilterRecord, FilterResult
from ifc_filter.file_matching import match_pattern_in_dir

summary_columns = [
    "record_file",
    "source_file",
    "filtered_file",
    "info_file",
    "filtered_lines",
    "info_lines",
    "complete",
    "read_error",
    "write_error",
    "filtered_digest",
    "info_digest",
    "start",
    "finish",
    "duration",
]


def summarize_results(
    results_path: Path,
    columns: list[str] = None,
    sort_rows_by: list[str] = None
) -> DataFrame:
    """Collect filter records found under the given path into one table with a row per filtered file."""
    summary = []
    for yaml_file in match_pattern_in_dir(results_path, "**/*.y*ml"):
        filter_record = safe_read_filter_record(yaml_file)
        if filter_record:
            for result in filter_record.results:
                summary.append(summarize_result(yaml_file.relative_to(results_path).as_posix(), result))

    summary_frame = DataFrame(summary, columns=summary_columns)

    if sort_rows_by:
        summary_frame = summary_frame.sort_values(sort_rows_by, ignore_index=True)

    if columns:
        summary_frame = summary_frame[columns]

    logging.info(f"Summarized {len(summary_frame)} filter results.")
    return summary_frame


def safe_read_filter_record(yaml_file: Path) -> FilterRecord:
    try:
        with open(yaml_file) as f:
            filter_record = FilterRecord.from_yaml(f.read())
    except Exception:
        logging.error(f"Skipping file that seems not to be a filter record: {yaml_file}")
        return None

    if not filter_record.results:
        logging.warning(f"Skipping file with no filter results: {yaml_file}")
        return None

    return filter_record


def summarize_result(record_file: str, result: FilterResult) -> dict[str, Any]:
    timing = result.timing
    return {
        "record_file": record_file,
        "source_file": result.source_file,
        "filtered_file": result.filtered_file,
        "info_file": result.info_file,
        "filtered_lines": result.filtered_lines,
        "info_lines": result.info_lines,
        "complete": result._is_complete(),
        "read_error": result.read_error,
        "write_error": result.write_error,
        "filtered_digest": result.files_out.get(result.filtered_file),
        "info_digest": result.files_out.get(result.info_file),
        "start": timing.start if timing else None,
        "finish": timing.finish if timing else None,
        "duration": timing.duration if timing else None,
    }
