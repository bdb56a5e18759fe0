import json

import pytest

from kaiki.report import ComparisonResult, ReportError, is_passed, write_json_report


def sample_result(**overrides):
    values = dict(
        failed_items=["a.png"],
        new_items=["b.png"],
        deleted_items=[],
        passed_items=["c.png"],
        expected_items=["a.png", "c.png"],
        actual_items=["a.png", "b.png", "c.png"],
        diff_items=["a.png", "c.png"],
        actual_dir="actual",
        expected_dir="expected",
        diff_dir="diff",
    )
    values.update(overrides)
    return ComparisonResult(**values)


def test_is_passed_zero_diff():
    assert is_passed(0, 100, None, None) is True


def test_is_passed_nonzero_diff_no_threshold():
    assert is_passed(1, 100, None, None) is False


def test_is_passed_threshold_pixel():
    assert is_passed(5, 100, 5, None) is True
    assert is_passed(6, 100, 5, None) is False


def test_is_passed_threshold_rate():
    assert is_passed(10, 100, None, 0.1) is True
    assert is_passed(11, 100, None, 0.1) is False


def test_is_passed_pixel_takes_precedence():
    assert is_passed(5, 100, 5, 0.01) is True


def test_is_passed_rate_with_zero_pixels():
    assert is_passed(3, 0, None, 0.0) is True


def test_has_failures():
    assert sample_result().has_failures() is True
    assert sample_result(failed_items=[]).has_failures() is False


def test_has_changes():
    assert sample_result().has_changes() is True
    assert sample_result(failed_items=[], new_items=["x.png"], deleted_items=[]).has_changes() is True
    assert sample_result(failed_items=[], new_items=[], deleted_items=["y.png"]).has_changes() is True
    assert sample_result(failed_items=[], new_items=[], deleted_items=[]).has_changes() is False


def test_json_report_format():
    text = sample_result().to_json()
    for key in (
        "failedItems",
        "newItems",
        "deletedItems",
        "passedItems",
        "actualDir",
        "expectedDir",
        "diffDir",
    ):
        assert key in text


def test_json_compact_field_order():
    text = ComparisonResult(actual_dir="a", expected_dir="e", diff_dir="d").to_json()
    assert text == (
        '{"failedItems":[],"newItems":[],"deletedItems":[],"passedItems":[],'
        '"expectedItems":[],"actualItems":[],"diffItems":[],'
        '"actualDir":"a","expectedDir":"e","diffDir":"d"}'
    )


def test_json_report_roundtrip():
    result = sample_result()
    restored = ComparisonResult.from_json(result.to_json())
    assert restored.failed_items == result.failed_items
    assert restored.new_items == result.new_items
    assert restored.passed_items == result.passed_items
    assert restored == result


def test_from_dict_ignores_unknown_keys():
    data = sample_result().to_dict()
    data["extra"] = 1
    assert ComparisonResult.from_dict(data) == sample_result()


def test_from_dict_missing_field():
    data = sample_result().to_dict()
    del data["diffDir"]
    with pytest.raises(ReportError):
        ComparisonResult.from_dict(data)


def test_from_dict_wrong_type():
    data = sample_result().to_dict()
    data["failedItems"] = "a.png"
    with pytest.raises(ReportError):
        ComparisonResult.from_dict(data)


def test_from_json_invalid():
    with pytest.raises(ReportError):
        ComparisonResult.from_json("{not json")


def test_empty_comparison_result_report(tmp_path):
    empty = ComparisonResult(actual_dir="actual", expected_dir="expected", diff_dir="diff")
    text = empty.to_json(indent=2)
    assert '"failedItems"' in text
    out = tmp_path / "out.json"
    write_json_report(empty, out)
    assert json.loads(out.read_text(encoding="utf-8"))["failedItems"] == []


def test_write_json_report_pretty(tmp_path):
    out = tmp_path / "out.json"
    write_json_report(sample_result(), out)
    text = out.read_text(encoding="utf-8")
    assert text.startswith('{\n  "failedItems": [\n    "a.png"\n  ]')
    assert ComparisonResult.from_json(text) == sample_result()


def test_write_json_report_missing_directory(tmp_path):
    with pytest.raises(ReportError):
        write_json_report(sample_result(), tmp_path / "missing" / "out.json")