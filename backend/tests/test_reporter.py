from catalog_io.services.csv.configuration import ImportConfiguration
from catalog_io.services.csv.reporter import CsvImportReporter, get_report_file_path
from catalog_io.services.imports.errors import ImportErrorsContext, ImportRowError


def test_report_file_path():
    assert get_report_file_path("imports/data.csv") == "imports/data_report.csv"
    assert get_report_file_path("data") == "data_report"


def test_report_written_in_source_dialect(blobs):
    with CsvImportReporter(blobs, "r.csv", ImportConfiguration(delimiter=",")) as reporter:
        reporter.write_header("A,B")
        reporter.write(ImportRowError(row=2, raw_row="1,2", error="plain"))
        reporter.write(ImportRowError(row=3, raw_row="3,4", error='has, comma and "quote"'))
    assert reporter.report_is_not_empty
    with blobs.open_read("r.csv") as f:
        assert f.read().decode("utf-8") == (
            "A,B,Error description\r\n"
            "1,2,plain\r\n"
            '3,4,"has, comma and ""quote"""\r\n'
        )


def test_empty_report_is_removed(blobs):
    with CsvImportReporter(blobs, "r.csv", ImportConfiguration()) as reporter:
        reporter.write_header("A;B")
    assert not reporter.report_is_not_empty
    assert not blobs.exists("r.csv")


def test_errors_context_merges_rows():
    ctx = ImportErrorsContext()
    assert ctx.add(ImportRowError(5, "e", "first."))
    assert ctx.add(ImportRowError(2, "b", "other."))
    assert not ctx.add(ImportRowError(5, "e", "second."))
    assert len(ctx) == 2
    assert ctx.contains_row(5)
    assert [e.row for e in ctx.ordered()] == [2, 5]
    assert ctx.ordered()[1].error == "first. second."
    ctx.clear()
    assert ctx.errors == []
