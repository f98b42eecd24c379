"""Tests for Telegram HTML escaping and message texts."""

import pytest

from src.core.formatting import (
    HELP_TEXT,
    NOTIFY_PREVIEW_LIMIT,
    READ_PREVIEW_LIMIT,
    USAGE_TEXTS,
    escape_html,
    format_action_failed,
    format_draft,
    format_mail_summary,
    format_new_mail,
    format_new_mail_failed,
)
from src.core.schemas.mail import MailItem


def test_escape_three_characters():
    assert escape_html("a < b & c > d") == "a &lt; b &amp; c &gt; d"


def test_escape_leaves_other_text_alone():
    assert escape_html("Merhaba \"dünya\" 'x'") == "Merhaba \"dünya\" 'x'"


def test_escape_double_escapes():
    assert escape_html(escape_html("<b>")) == "&amp;lt;b&amp;gt;"


@pytest.mark.parametrize("text", ["<script>", "a&b", "<<>>&&", "x > y < z", "düz metin"])
def test_escape_twice_has_no_raw_brackets(text):
    once = escape_html(text)
    twice = escape_html(once)
    for out in (once, twice):
        assert "<" not in out
        assert ">" not in out
        assert "&" not in out.replace("&amp;", "").replace("&lt;", "").replace("&gt;", "")


def test_escape_non_string():
    assert escape_html(42) == "42"


def test_static_texts_are_pre_escaped():
    for text in [HELP_TEXT, *USAGE_TEXTS.values()]:
        assert "<messageId>" not in text
        assert "&lt;messageId&gt;" in text


def test_mail_summary_escapes_fields(sample_mail):
    text = format_mail_summary(sample_mail)
    assert "Toplantı &lt;Q3&gt;" in text
    assert "Ayşe &amp; Co &lt;ayse@example.com&gt;" in text
    assert "2026-10-16T08:30:00Z" in text
    assert "<b>Konu:</b>" in text


def test_mail_summary_truncates_preview():
    mail = MailItem(body_preview="x" * (READ_PREVIEW_LIMIT + 100))
    text = format_mail_summary(mail)
    assert "x" * READ_PREVIEW_LIMIT in text
    assert "x" * (READ_PREVIEW_LIMIT + 1) not in text


def test_new_mail_includes_id_and_truncated_preview():
    mail = MailItem(subject="S", body_preview="y" * (NOTIFY_PREVIEW_LIMIT + 5))
    text = format_new_mail(mail, "id<1>")
    assert text.startswith("<b>Yeni e-posta</b>")
    assert "<code>id&lt;1&gt;</code>" in text
    assert "y" * (NOTIFY_PREVIEW_LIMIT + 1) not in text


def test_failure_texts_escape_detail():
    assert "&lt;html&gt;" in format_action_failed("<html>")
    text = format_new_mail_failed("m1", "HTTP 404: <not found>")
    assert "<code>m1</code>" in text
    assert "&lt;not found&gt;" in text


def test_draft_is_labeled_and_escaped():
    text = format_draft("Sayın <isim>,")
    assert text.startswith("<b>Taslak:</b>")
    assert "Sayın &lt;isim&gt;," in text
