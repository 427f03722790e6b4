import pytest

import smartedit
from smartedit.errors import AmbiguousMatch, NoMatchFound
from smartedit.models import EditOperation, EditRequest, MatchingStrategy
from smartedit.sequencer import apply_edits


def make_request(*pairs, **kwargs) -> EditRequest:
    edits = [EditOperation(old_text=o, new_text=n) for o, n in pairs]
    return EditRequest(edits=edits, **kwargs)


def test_single_edit_summary_and_counts():
    content = "function foo() {\n  return 1;\n}\n"

    result = apply_edits(content, make_request(("return 1;", "return 2;")))

    assert result.success is True
    assert result.content == "function foo() {\n  return 2;\n}\n"
    assert result.diff_summary == (
        "Applied 1 edit(s)\n\nEdit 1: exact match at line 2 (1 occurrence)"
    )
    assert (result.lines_added, result.lines_removed, result.edits_applied) == (1, 1, 1)
    assert result.dry_run is False
    assert result.warnings == []


def test_line_counts_are_per_edit_totals():
    content = "a\nb\nc\n"

    result = apply_edits(content, make_request(("a\nb", "ab"), ("c", "c1\nc2\nc3")))

    assert result.content == "ab\nc1\nc2\nc3\n"
    assert result.lines_removed == 3
    assert result.lines_added == 4
    assert result.edits_applied == 2


def test_crlf_round_trip():
    content = "a\r\nb\r\nc\r\n"

    result = apply_edits(content, make_request(("a\r\nb", "A\nB\nB2")))

    assert result.content == "A\r\nB\r\nB2\r\nc\r\n"
    assert "\n" not in result.content.replace("\r\n", "")


def test_lf_content_stays_lf():
    result = apply_edits("x\ny\n", make_request(("y", "z")))
    assert result.content == "x\nz\n"


def test_edits_are_not_idempotent():
    with pytest.raises(NoMatchFound) as exc_info:
        apply_edits("foo\n", make_request(("foo", "bar"), ("foo", "bar")))

    err = exc_info.value
    assert err.edit_index == 1
    assert str(err).startswith("Edit 2 failed:")


def test_sequential_dependency():
    request = make_request(("alpha", "beta"), ("beta", "gamma"))

    result = apply_edits("alpha\n", request)

    assert result.content == "gamma\n"
    assert result.diff_summary.splitlines()[2:] == [
        "Edit 1: exact match at line 1 (1 occurrence)",
        "Edit 2: exact match at line 1 (1 occurrence)",
    ]
    with pytest.raises(NoMatchFound):
        apply_edits("alpha\n", make_request(("beta", "gamma")))


def test_failure_aborts_remaining_edits():
    content = "x = 1;\ny\nx = 1;\n"
    request = EditRequest(
        edits=[
            EditOperation(old_text="y", new_text="Y"),
            EditOperation(old_text="x = 1;", new_text="x = 2;"),
            EditOperation(old_text="does-not-exist", new_text="z"),
        ]
    )

    with pytest.raises(AmbiguousMatch) as exc_info:
        apply_edits(content, request)

    assert exc_info.value.edit_index == 1
    assert exc_info.value.locations == [1, 3]


def test_dry_run_marks_summary():
    result = apply_edits("one\n", make_request(("one", "two"), dry_run=True))

    assert result.success is True
    assert result.dry_run is True
    assert result.content == "two\n"
    assert result.diff_summary.startswith("[DRY RUN] Applied 1 edit(s)")


def test_empty_request_is_a_no_op():
    content = "keep\r\nthis\r\n"

    result = apply_edits(content, EditRequest(edits=[]))

    assert result.success is True
    assert result.diff_summary == "Applied 0 edit(s)"
    assert result.content == content
    assert (result.lines_added, result.lines_removed, result.edits_applied) == (0, 0, 0)
    assert result.outcomes == []


def test_multiple_occurrences_in_summary():
    request = EditRequest(
        edits=[EditOperation(old_text="v", new_text="w", expected_occurrences=2)]
    )

    result = apply_edits("v\nv\n", request)

    assert result.content == "w\nw\n"
    assert result.diff_summary.endswith("Edit 1: exact match at line 1 (2 occurrences)")


def test_fuzzy_warning_surfaces_in_result():
    request = make_request(
        ("if(x>0){", "if (x > 1) {"), matching_strategy=MatchingStrategy.fuzzy
    )

    result = apply_edits("if (x > 0) {\n}\nif (x > 0) {\n}\n", request)

    assert result.content == "if (x > 1) {\n}\nif (x > 0) {\n}\n"
    assert result.warnings == [
        "Edit 1: Fuzzy matching was used. Please review changes carefully to ensure accuracy."
    ]
    assert result.outcomes[0].strategy == MatchingStrategy.fuzzy


def test_wire_names_and_public_apply():
    request = EditRequest.model_validate(
        {
            "edits": [{"oldText": "  x = 1;  ", "newText": "x = 2;"}],
            "matchingStrategy": "flexible",
            "failOnAmbiguous": False,
        }
    )

    result = smartedit.apply("    x = 1;\n", request)

    assert result.content == "    x = 2;\n"
    assert "flexible match at line 1" in result.diff_summary


def test_strategy_helpers():
    assert smartedit.get_supported_strategies() == ("exact", "flexible", "fuzzy", "auto")
    assert smartedit.parse_strategy(" Fuzzy ") == MatchingStrategy.fuzzy
    with pytest.raises(ValueError):
        smartedit.parse_strategy("regex")
