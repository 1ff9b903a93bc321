import json

from email_body_parser.cli import main
from email_body_parser.eml_builder import build_minimal_eml


def _write_eml(tmp_path, **kwargs):
    path = tmp_path / "message.eml"
    raw = build_minimal_eml("noreply@example.com", "me@example.com", boundary="b",
                            date="Fri, 16 Oct 2026 10:00:00 GMT", **kwargs)
    path.write_bytes(raw.encode("utf-8"))
    return path


def test_cli_writes_summary(tmp_path):
    eml = _write_eml(tmp_path, subject="Login", text="Your verification code is 330912",
                     html="<p>Your verification code is <b>330912</b></p>")
    out = tmp_path / "out.json"
    assert main([str(eml), "--output", str(out), "--log-level", "ERROR"]) == 0

    result = json.loads(out.read_text(encoding="utf-8"))
    assert result["verification_code"] == "330912"
    assert result["text"] == "Your verification code is 330912"
    assert "html" not in result


def test_cli_include_html_and_preview_code(tmp_path):
    eml = _write_eml(tmp_path, subject="Welcome", text="Use 739201 to continue", html="<p>hi</p>")
    out = tmp_path / "out.json"
    args = [str(eml), "--output", str(out), "--log-level", "ERROR", "--preview-code", "--include-html"]
    assert main(args) == 0

    result = json.loads(out.read_text(encoding="utf-8"))
    assert result["html"] == "<p>hi</p>"
    assert result["verification_code"] == "739201"


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.eml"), "--log-level", "ERROR"]) == 1
    assert "Error:" in capsys.readouterr().out
