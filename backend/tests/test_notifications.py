"""
Tests for the creation notifications and the mail sender.
"""

import asyncio

import aiosmtplib
import pytest
from fastapi import BackgroundTasks

from catalog_api.services.events import notifications
from catalog_api.services.events import notify_entity_created
from shared.config.settings import settings
from shared.infrastructure import mail


class TestNotifyEntityCreated:

    def test_scheduled_as_background_task(self):
        tasks = BackgroundTasks()

        notify_entity_created("Club", 3, "FC Munich", background_tasks=tasks)

        assert len(tasks.tasks) == 1
        assert tasks.tasks[0].args == ("Club", 3, "FC Munich")

    def test_runs_inline_without_background_tasks(self, monkeypatch):
        sent = []

        async def fake_send_mail(subject, body_html, to_email=None):
            sent.append((subject, body_html))
            return True

        monkeypatch.setattr(notifications, "send_mail", fake_send_mail)

        notify_entity_created("Book", 7, "<Alpha>")

        assert sent == [("New book 7", "The book <strong>&lt;Alpha&gt;</strong> has been created.")]

    def test_mail_failure_is_not_raised(self, monkeypatch):
        async def broken_send_mail(subject, body_html, to_email=None):
            raise RuntimeError("smtp exploded")

        monkeypatch.setattr(notifications, "send_mail", broken_send_mail)

        notify_entity_created("Book", 1, "Alpha")

    def test_inside_running_loop_becomes_task(self, monkeypatch):
        sent = []

        async def fake_send_mail(subject, body_html, to_email=None):
            sent.append(subject)
            return True

        monkeypatch.setattr(notifications, "send_mail", fake_send_mail)

        async def create_inside_loop():
            notify_entity_created("Club", 2, "SC Freiburg")
            await asyncio.sleep(0)
            await asyncio.sleep(0)

        asyncio.run(create_inside_loop())

        assert sent == ["New club 2"]


class TestSendMail:

    @pytest.fixture
    def mail_enabled(self, monkeypatch):
        monkeypatch.setattr(settings, "mail_enabled", True)
        monkeypatch.setattr(settings, "smtp_host", "smtp.test")

    def test_disabled(self):
        assert asyncio.run(mail.send_mail("Subject", "<p>Body</p>")) is False

    def test_sends_via_smtp(self, mail_enabled, monkeypatch):
        calls = []

        async def fake_send(message, **kwargs):
            calls.append((message, kwargs))

        monkeypatch.setattr(aiosmtplib, "send", fake_send)

        assert asyncio.run(mail.send_mail("New book 1", "<p>Alpha</p>")) is True

        message, kwargs = calls[0]
        assert message["To"] == settings.mail_to
        assert message["Subject"] == "New book 1"
        assert kwargs["hostname"] == "smtp.test"

    def test_smtp_error_returns_false(self, mail_enabled, monkeypatch):
        async def failing_send(message, **kwargs):
            raise aiosmtplib.SMTPConnectError("connection refused")

        monkeypatch.setattr(aiosmtplib, "send", failing_send)

        assert asyncio.run(mail.send_mail("Subject", "Body")) is False
