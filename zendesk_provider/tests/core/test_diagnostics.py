from zendesk_provider.core.diagnostics import Diagnostic, Diagnostics, Severity


def test_from_err() -> None:
    assert Diagnostics.from_err(None) == []

    diags = Diagnostics.from_err(ValueError("boom"))
    assert diags.has_error()
    assert diags == [Diagnostic(Severity.Error, "boom")]


def test_from_err_without_message_uses_exception_name() -> None:
    assert Diagnostics.from_err(KeyError())[0].summary == "KeyError"


def test_errors_and_warnings() -> None:
    diags = Diagnostics.from_messages(["deprecated"], [])
    assert not diags.has_error()
    assert len(diags.warnings()) == 1

    diags.append_error("missing name", attribute="zendesk_group.support")
    assert diags.has_error()
    assert [d.summary for d in diags.errors()] == ["missing name"]


def test_str() -> None:
    diag = Diagnostic(Severity.Error, "failed", detail="more", attribute="a.b")
    assert str(diag) == "error: failed (at a.b)\n  more"
