"""
Tests for the HTML bodies built by the SMTP email service
"""

import pytest

from fellowship.core.email_service import EmailService


@pytest.fixture
def sent(monkeypatch):
    service = EmailService()
    outbox = []

    def capture(to_emails, subject, html_content, text_content=None):
        outbox.append({"to": to_emails, "subject": subject, "html": html_content, "text": text_content})
        return True

    monkeypatch.setattr(service, "send_email", capture)
    return service, outbox


def test_invitation_html_escapes_names(sent):
    service, outbox = sent

    service.send_invitation_email(
        email="bob@example.com",
        tenant_name="<b>Grace</b> & Co",
        token="abc",
        invited_by='<script>alert("x")</script>',
        role="tenant_admin",
    )

    body = outbox[0]["html"]
    assert "&lt;b&gt;Grace&lt;/b&gt; &amp; Co" in body
    assert "&lt;script&gt;" in body
    assert "<script>" not in body
    assert "<b>Grace</b>" not in body
    assert "tenant admin" in body
    assert "/invite/abc" in body
    assert "<b>Grace</b> & Co" in outbox[0]["text"]


def test_review_html_escapes_tenant_name(sent):
    service, outbox = sent

    service.send_tenant_review_email("x@example.com", "<img src=x>", approved=False)

    assert "&lt;img src=x&gt;" in outbox[0]["html"]
    assert "<img" not in outbox[0]["html"]
    assert "not approved" in outbox[0]["subject"]
