import logging
from typing import Any, Self
from dataclasses import dataclass, field, fields
import yaml
from ifc_filter.yaml_data import YamlData
from ifc_filter.model import DEFAULT_INFO_MARKERS


@dataclass
class ConfigOption(YamlData):
    value: Any = None
    cli_long_name: str = None
    cli_short_name: str = None
    cli_nargs: str = None
    cli_type: type = str
    cli_help: str = None
    cli_help_default: str = "%(default)s"

    def cli_help_with_default(self):
        return f"{self.cli_help} (default: {self.cli_help_default})"


def parse_bool(value: str) -> bool:
    """Accept the usual spellings of yes and no, since argparse type=bool treats any non-empty string as True."""
    if isinstance(value, bool):
        return value
    return value.strip().lower() in ["true", "yes", "y", "1", "on"]


@dataclass
class ConfigOptions(YamlData):
    """Options for the ifc-filter command line, each with a default and a corresponding CLI argument.

    Option values can also come from YAML files passed with --options.
    Values from these files replace the defaults below, and explicit CLI arguments replace both.
    """

    config_files: ConfigOption = field(default_factory=lambda: ConfigOption(
        cli_long_name="--options",
        cli_short_name="-o",
        cli_nargs="*",
        cli_help="YAML file(s) with ifc-filter config options, applied in order",
        cli_help_default="no option files",
    ))

    info_markers: ConfigOption = field(default_factory=lambda: ConfigOption(
        value=list(DEFAULT_INFO_MARKERS),
        cli_long_name="--info-markers",
        cli_short_name="-m",
        cli_nargs="+",
        cli_help="substrings that mark a line as property info rather than geometry",
        cli_help_default="-m IFCPROPERTYSINGLEVALUE IFCPROPERTYSET",
    ))

    record_file: ConfigOption = field(default_factory=lambda: ConfigOption(
        cli_long_name="--record-file",
        cli_short_name="-r",
        cli_help="YAML file to receive a record of the filtered files, line counts, and errors",
        cli_help_default="no record",
    ))

    log_file: ConfigOption = field(default_factory=lambda: ConfigOption(
        cli_long_name="--log-file",
        cli_short_name="-l",
        cli_help="file to receive log messages in addition to the console",
        cli_help_default="console only",
    ))

    results_dir: ConfigOption = field(default_factory=lambda: ConfigOption(
        value=".",
        cli_long_name="--results-dir",
        cli_short_name="-d",
        cli_help="dir to search for filter records to summarize",
    ))

    summary_file: ConfigOption = field(default_factory=lambda: ConfigOption(
        value="./summary.csv",
        cli_long_name="--summary-file",
        cli_short_name="-f",
        cli_help="output file to receive summary of filter records",
    ))

    summary_sort_rows_by: ConfigOption = field(default_factory=lambda: ConfigOption(
        value=["start", "source_file"],
        cli_long_name="--summary-sort-rows-by",
        cli_short_name="-s",
        cli_nargs="+",
        cli_help="summary column names by which to sort summary rows",
        cli_help_default="-s start source_file",
    ))

    summary_columns: ConfigOption = field(default_factory=lambda: ConfigOption(
        cli_long_name="--summary-columns",
        cli_short_name="-c",
        cli_nargs="+",
        cli_help="column names to keep in the summary",
        cli_help_default="all columns",
    ))

    yaml_skip_empty: ConfigOption = field(default_factory=lambda: ConfigOption(
        value=True,
        cli_long_name="--yaml-skip-empty",
        cli_short_name="-e",
        cli_type=parse_bool,
        cli_help="whether to omit null and empty values from YAML records",
    ))

    def option_names(self) -> list[str]:
        return [field.name for field in fields(self)]

    def option(self, option_name) -> ConfigOption:
        return getattr(self, option_name)

    def defaults(self) -> dict[str, Any]:
        return {option_name: self.option(option_name).value for option_name in self.option_names()}

    def with_values_applied(self, values: dict[str, Any]) -> Self:
        """Construct new ConfigOptions with option values replaced by the given values, ignoring unknown names."""
        applied = ConfigOptions()
        for option_name in applied.option_names():
            option = applied.option(option_name)
            option.value = self.option(option_name).value
            if option_name in values:
                value = values[option_name]
                if option.cli_nargs in ["+", "*"] and isinstance(value, str):
                    # A single value for a list option, like "info_markers: IFCDOOR".
                    value = [value]
                option.value = value
        for name in values.keys():
            if name not in applied.option_names():
                logging.warning(f"Ignoring unknown config option: {name}")
        return applied

    def with_files_applied(self, config_files: list[str]) -> Self:
        """Construct new ConfigOptions with values read from each of the given YAML files, in order."""
        applied = self
        for config_file in config_files or []:
            logging.info(f"Reading config options from: {config_file}")
            with open(config_file) as f:
                values = yaml.safe_load(f.read()) or {}
            applied = applied.with_values_applied(values)
        return applied
