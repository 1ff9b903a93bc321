import base64
import logging
import time

import pytest

from email_body_parser.eml_builder import build_minimal_eml
from email_body_parser.models import ParsedBody
from email_body_parser.parser import EmailBodyParser


@pytest.fixture
def parser():
    return EmailBodyParser(logging.getLogger("test"))


ALTERNATIVE = (
    "From: sender@example.com\r\n"
    "Subject: Welcome\r\n"
    'Content-Type: multipart/alternative; boundary="alt"\r\n'
    "\r\n"
    "--alt\r\n"
    "Content-Type: text/plain; charset=utf-8\r\n"
    "\r\n"
    "first plain\r\n"
    "--alt\r\n"
    "Content-Type: text/plain; charset=utf-8\r\n"
    "\r\n"
    "second plain\r\n"
    "--alt\r\n"
    "Content-Type: text/html; charset=utf-8\r\n"
    "\r\n"
    "<p>the html</p>\r\n"
    "--alt--\r\n"
)


def _nest(levels, leaf="Content-Type: text/plain\n\ndeep text"):
    entity = leaf
    for i in range(levels):
        b = f"lvl{i}"
        entity = f'Content-Type: multipart/mixed; boundary="{b}"\n\n--{b}\n{entity}\n--{b}--\n'
    return entity


def test_empty_input(parser):
    assert parser.parse("") == ParsedBody(text="", html="")
    assert parser.parse(None) == ParsedBody()


def test_single_part_plain_text(parser):
    result = parser.parse("Content-Type: text/plain\n\nhello there")
    assert result == ParsedBody(text="hello there", html="")


def test_single_part_html(parser):
    result = parser.parse("Content-Type: text/html; charset=utf-8\n\n<b>hi</b>")
    assert result == ParsedBody(text="", html="<b>hi</b>")


def test_multipart_first_found_wins_per_field(parser):
    result = parser.parse(ALTERNATIVE)
    assert result.text == "first plain"
    assert result.html == "<p>the html</p>"


def test_html_before_text_still_fills_both(parser):
    raw = (
        'Content-Type: multipart/alternative; boundary="b"\n\n'
        "--b\nContent-Type: text/html\n\n<i>html first</i>\n"
        "--b\nContent-Type: text/plain\n\ntext second\n"
        "--b--\n"
    )
    assert parser.parse(raw) == ParsedBody(text="text second", html="<i>html first</i>")


def test_untyped_html_document_is_sniffed(parser):
    raw = "From: a@b.c\n\n<!DOCTYPE html><html><body>Hi</body></html>"
    assert parser.parse(raw) == ParsedBody(text="", html="<!DOCTYPE html><html><body>Hi</body></html>")


def test_untyped_plain_text_is_text(parser):
    assert parser.parse("Subject: s\n\njust words") == ParsedBody(text="just words", html="")


def test_unknown_type_is_treated_as_text(parser):
    result = parser.parse("Content-Type: application/x-custom\n\nopaque")
    assert result == ParsedBody(text="opaque", html="")


def test_base64_html_part_with_charset(parser):
    payload = base64.encodebytes("<p>验证码 123456</p>".encode("gb2312")).decode("ascii")
    raw = (
        'Content-Type: multipart/alternative; boundary="x"\n\n'
        "--x\n"
        'Content-Type: text/html; charset="GB2312"\n'
        "Content-Transfer-Encoding: base64\n\n"
        f"{payload}\n"
        "--x--\n"
    )
    result = parser.parse(raw)
    assert result.html == "<p>验证码 123456</p>"
    assert result.text == ""


def test_quoted_printable_text_part(parser):
    raw = (
        'Content-Type: multipart/alternative; boundary="q"\n\n'
        "--q\n"
        "Content-Type: text/plain; charset=utf-8\n"
        "Content-Transfer-Encoding: quoted-printable\n\n"
        "Caf=C3=A9 code =\n"
        "is 4821\n"
        "--q--\n"
    )
    result = parser.parse(raw)
    assert result.text == "Café code is 4821"
    assert result.html == '<div style="white-space:pre-wrap">Café code is 4821</div>'


def test_nested_multipart_with_attachment(parser):
    attachment = base64.b64encode(b"%PDF-1.4 binary").decode("ascii")
    raw = (
        'Content-Type: multipart/mixed; boundary="mixed"\n\n'
        "--mixed\n"
        'Content-Type: multipart/alternative; boundary="alt"\n\n'
        "--alt\nContent-Type: text/plain\n\nnested plain\n"
        "--alt\nContent-Type: text/html\n\n<p>nested html</p>\n"
        "--alt--\n"
        "--mixed\n"
        "Content-Type: application/pdf\n"
        "Content-Transfer-Encoding: base64\n\n"
        f"{attachment}\n"
        "--mixed--\n"
    )
    assert parser.parse(raw) == ParsedBody(text="nested plain", html="<p>nested html</p>")


def test_embedded_message_is_parsed_as_standalone(parser):
    raw = (
        'Content-Type: multipart/mixed; boundary="outer"\n\n'
        "--outer\n"
        "Content-Type: message/rfc822\n\n"
        "Subject: inner\n"
        "Content-Type: text/html; charset=utf-8\n\n"
        "<p>forwarded</p>\n"
        "--outer--\n"
    )
    assert parser.parse(raw) == ParsedBody(text="", html="<p>forwarded</p>")


def test_rfc822_headers_part_is_skipped(parser):
    raw = (
        'Content-Type: multipart/report; report-type=delivery-status; boundary="r"\n\n'
        "--r\nContent-Type: text/rfc822-headers\n\nSubject: original\n"
        "--r\nContent-Type: text/plain\n\nDelivery failed\n"
        "--r--\n"
    )
    result = parser.parse(raw)
    assert result.text == "Delivery failed"
    assert "original" not in result.html


def test_multipart_without_boundary_sniffs_html(parser):
    raw = "Content-Type: multipart/alternative\n\nx <html><body>hi</body></html> y"
    assert parser.parse(raw) == ParsedBody(text="", html="<html><body>hi</body></html>")


def test_multipart_without_boundary_uses_tag_like_body(parser):
    raw = "Content-Type: multipart/mixed\n\n<div>hello</div>"
    assert parser.parse(raw) == ParsedBody(text="", html="<div>hello</div>")


def test_quoted_reply_with_attachment_parses_quickly(parser):
    quoted = "".join(f"> From: Person {i} <person{i}@example.com>\n" for i in range(150))
    attachment = base64.encodebytes(b"\x00\x01binary" * 15000).decode("ascii")
    raw = (
        'Content-Type: multipart/mixed; boundary="m"\n\n'
        "--m\nContent-Type: text/plain\n\n" + quoted +
        "--m\nContent-Type: application/octet-stream\nContent-Transfer-Encoding: base64\n\n"
        + attachment + "--m--\n"
    )
    started = time.perf_counter()
    result = parser.parse(raw)
    assert time.perf_counter() - started < 2.0
    assert result.text.startswith("> From: Person 0 <person0@example.com>")
    assert result.html.startswith('<div style="white-space:pre-wrap">&gt; From: Person 0')


def test_multipart_html_only_leaves_text_empty(parser):
    raw = (
        'Content-Type: multipart/alternative; boundary="h"\n\n'
        "--h\nContent-Type: text/html\n\n<p>only html</p>\n--h--\n"
    )
    assert parser.parse(raw) == ParsedBody(text="", html="<p>only html</p>")


def test_nesting_within_limit_is_resolved(parser):
    result = parser.parse(_nest(5))
    assert result.text == "deep text"
    assert result.html == '<div style="white-space:pre-wrap">deep text</div>'


def test_deep_nesting_is_bounded(parser):
    result = parser.parse(_nest(50))
    assert isinstance(result, ParsedBody)
    assert result.text == ""


def test_depth_limit_is_configurable(caplog):
    shallow = EmailBodyParser(logging.getLogger("test"), max_depth=2)
    with caplog.at_level(logging.WARNING, logger="test"):
        result = shallow.parse(_nest(5))
    assert result == ParsedBody()
    assert "max depth" in caplog.text


def test_minimal_eml_round_trip(parser):
    raw = build_minimal_eml(
        "a@example.com", "me@example.com", "Login",
        text="Your code is 123456", html="<p>Your code is <b>123456</b></p>",
        boundary="fixed", date="Fri, 16 Oct 2026 10:00:00 GMT",
    )
    assert parser.parse(raw) == ParsedBody(
        text="Your code is 123456", html="<p>Your code is <b>123456</b></p>"
    )
