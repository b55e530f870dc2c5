from pathlib import Path
from ifc_filter.aggregator import summarize_results, summary_columns
from ifc_filter.model import FilterRecord, FilterResult, Timing


def write_record(path: Path, filter_record: FilterRecord):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(filter_record.to_yaml(skip_empty=True))


def test_summarize_nothing(tmp_path):
    summary = summarize_results(tmp_path)
    assert summary.empty
    assert summary.columns.to_list() == summary_columns


def test_summarize_records(tmp_path):
    write_record(Path(tmp_path, "later", "record.yaml"), FilterRecord(results=[
        FilterResult(
            source_file="b.ifc",
            filtered_file="b_filtered_.ifc",
            info_file="b_info_.ifc",
            filtered_lines=7,
            info_lines=2,
            files_out={"b_filtered_.ifc": "sha256:bbbb"},
            timing=Timing("2024-01-02T00:00:00+00:00", "2024-01-02T00:00:01+00:00", 1.0),
        ),
    ]))
    write_record(Path(tmp_path, "earlier.yml"), FilterRecord(results=[
        FilterResult(
            source_file="a.ifc",
            filtered_file="a_filtered_.ifc",
            info_file="a_info_.ifc",
            write_error="Is a directory",
            timing=Timing("2024-01-01T00:00:00+00:00", "2024-01-01T00:00:01+00:00", 1.0),
        ),
    ]))

    # These should be skipped.
    Path(tmp_path, "garbage.yaml").write_text("{{{ not yaml")
    Path(tmp_path, "no_results.yaml").write_text("info_markers: [IFCWALL]\n")

    summary = summarize_results(tmp_path, sort_rows_by=["start"])
    assert summary["record_file"].to_list() == ["earlier.yml", "later/record.yaml"]
    assert summary["source_file"].to_list() == ["a.ifc", "b.ifc"]
    assert summary["complete"].to_list() == [False, True]
    assert summary["write_error"][0] == "Is a directory"
    assert summary["write_error"].isna().to_list() == [False, True]
    assert summary["filtered_digest"][1] == "sha256:bbbb"
    assert summary["filtered_digest"].isna().to_list() == [True, False]
    assert summary["info_digest"].isna().all()
    assert summary["filtered_lines"].to_list() == [0, 7]

    narrow = summarize_results(tmp_path, columns=["source_file", "info_lines"], sort_rows_by=["source_file"])
    assert narrow.columns.to_list() == ["source_file", "info_lines"]
    assert narrow["info_lines"].to_list() == [0, 2]
