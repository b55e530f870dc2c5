import sys
import logging
from pathlib import Path
from datetime import datetime, timezone
from argparse import ArgumentParser, Namespace
from typing import Optional, Sequence
from ifc_filter.model import FilterRecord, Timing
from ifc_filter.config_options import ConfigOptions
from ifc_filter.entity_filter import IfcEntityFilter
from ifc_filter.aggregator import summarize_results
from ifc_filter.__about__ import __version__ as ifc_filter_version

version_string = f"IFC Filter {ifc_filter_version}"


def set_up_logging(log_file: str = None):
    logging.root.handlers = []
    handlers = [
        logging.StreamHandler(sys.stderr)
    ]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=handlers
    )
    logging.info(version_string)


def filter_files(cli_args: Namespace) -> int:
    """Filter one or more IFC files for "ifc-filter filter model.ifc ..."""

    if not cli_args.sources:
        logging.error("You must provide at least one IFC file to the filter operation.")
        return -1

    logging.info(f"Filtering {len(cli_args.sources)} file(s) using info markers: {cli_args.info_markers}")

    start = datetime.now(timezone.utc)

    results = []
    for source in cli_args.sources:
        entity_filter = IfcEntityFilter(source, info_markers=cli_args.info_markers)
        result = entity_filter.run()
        logging.info(f"Filtered file: {result.filtered_file}")
        results.append(result)

    finish = datetime.now(timezone.utc)
    duration = finish - start

    filter_record = FilterRecord(
        info_markers=cli_args.info_markers,
        results=results,
        timing=Timing(start.isoformat(sep="T"), finish.isoformat(sep="T"), duration.total_seconds())
    )

    if cli_args.record_file:
        record_path = Path(cli_args.record_file)
        logging.info(f"Writing filter record to: {record_path.as_posix()}")
        record_path.parent.mkdir(parents=True, exist_ok=True)
        with open(record_path, "w") as record:
            record.write(filter_record.to_yaml(skip_empty=cli_args.yaml_skip_empty))

    error_count = filter_record._error_count()
    if error_count:
        logging.error(f"{error_count} file(s) were not filtered completely:")
        for result in results:
            if not result._is_complete():
                logging.error(f"{result.source_file}: {result.read_error or result.write_error}")
        return error_count
    else:
        logging.info(f"Filtered {len(results)} file(s) successfully.")
        return 0


def summarize(cli_args: Namespace) -> int:
    """Collect and organize filter records for "ifc-filter summarize ..."""

    # Choose where to look for previous records.
    results_path = Path(cli_args.results_dir)
    logging.info(f"Summarizing filter records from {results_path.as_posix()}")

    summary = summarize_results(results_path, columns=cli_args.summary_columns,
                                sort_rows_by=cli_args.summary_sort_rows_by)

    # Choose where to write the summary of records.
    out_file = Path(cli_args.summary_file)
    logging.info(f"Writing summary to {out_file.as_posix()}")
    summary.to_csv(out_file, index=False)

    return 0


def build_parser(config_options: ConfigOptions) -> ArgumentParser:
    parser = ArgumentParser(description="Split IFC files into geometry lines and property info lines.")
    parser.add_argument("operation",
                        type=str,
                        choices=["filter", "summarize"],
                        help="operation to perform: filter IFC files or summarize records from multiple runs.")
    parser.add_argument("sources",
                        type=str,
                        nargs="*",
                        help="IFC file(s) to filter")
    parser.add_argument("--version", "-v", action="version", version=version_string)

    for option_name in config_options.option_names():
        config_option = config_options.option(option_name)
        parser.add_argument(
            config_option.cli_long_name,
            config_option.cli_short_name,
            dest=option_name,
            default=config_option.value,
            type=config_option.cli_type,
            nargs=config_option.cli_nargs,
            help=config_option.cli_help_with_default(),
        )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    default_config_options = ConfigOptions()

    # Option files replace the hard-coded defaults, then explicit cli args replace both.
    parser = build_parser(default_config_options)
    (pre_args, _) = parser.parse_known_args(argv)
    effective_config_options = default_config_options.with_files_applied(pre_args.config_files)
    parser.set_defaults(**effective_config_options.defaults())

    cli_args = parser.parse_args(argv)

    set_up_logging(cli_args.log_file)

    if cli_args.config_files:
        logging.info(f"Applied config options from: {cli_args.config_files}")

    match cli_args.operation:
        case "filter":
            exit_code = filter_files(cli_args)
        case "summarize":
            exit_code = summarize(cli_args)
        case _:  # pragma: no cover
            # We don't expect this to happen -- argparse should error before we get here.
            logging.error(f"Unsupported operation: {cli_args.operation}")
            exit_code = -2

    if exit_code:
        logging.error("Completed with errors.")
    else:
        logging.info("OK.")

    return exit_code


if __name__ == '__main__':
    sys.exit(main())
