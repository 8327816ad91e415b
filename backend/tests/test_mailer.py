import logging
import smtplib

import pytest

from audit import mailer
from audit.errors import DeliveryError
from audit.settings import settings


class FakeSMTP:
	instances = []
	offers_starttls = True
	refuse = False

	def __init__(self, host, port, context=None):
		self.host = host
		self.port = port
		self.started_tls = False
		self.logged_in = None
		self.sent = []
		FakeSMTP.instances.append(self)

	def __enter__(self):
		return self

	def __exit__(self, *exc):
		return False

	def ehlo(self):
		pass

	def has_extn(self, name):
		return self.offers_starttls

	def starttls(self, context=None):
		self.started_tls = True

	def login(self, user, password):
		self.logged_in = (user, password)

	def send_message(self, msg):
		if self.refuse:
			raise smtplib.SMTPRecipientsRefused({msg["To"]: (550, b"no such user")})
		self.sent.append(msg)


@pytest.fixture
def smtp(monkeypatch):
	FakeSMTP.instances = []
	FakeSMTP.refuse = False
	monkeypatch.setattr(mailer.smtplib, "SMTP", FakeSMTP)
	monkeypatch.setattr(mailer.smtplib, "SMTP_SSL", FakeSMTP)
	return FakeSMTP


@pytest.fixture
def config():
	return settings.model_copy(update={
		"smtp_host": "smtp.example.com",
		"smtp_port": 587,
		"smtp_secure": False,
		"smtp_user": "mailer",
		"smtp_password": "secret",
		"email_from": "audit@promptprofit.test",
		"base_url": "https://promptprofit.test/",
	})


def test_sends_pdf_with_plan_link(smtp, config):
	mailer.send_report("owner@example.com", b"%PDF-1.4", "/results/pro.html", config)

	server = smtp.instances[0]
	assert (server.host, server.port) == ("smtp.example.com", 587)
	assert server.started_tls
	assert server.logged_in == ("mailer", "secret")
	msg = server.sent[0]
	assert msg["To"] == "owner@example.com"
	assert msg["From"] == "audit@promptprofit.test"
	assert msg["Subject"] == "Your PromptProfit Audit Report"
	body = msg.get_body(preferencelist=("plain",)).get_content()
	assert "https://promptprofit.test/results/pro.html" in body
	attachment = next(msg.iter_attachments())
	assert attachment.get_filename() == "PromptProfit-Audit.pdf"
	assert attachment.get_content_type() == "application/pdf"
	assert attachment.get_content() == b"%PDF-1.4"


def test_secure_connection_uses_smtp_ssl(smtp, monkeypatch, config):
	ssl_instances = []

	class FakeSSL(FakeSMTP):
		def __init__(self, host, port, context=None):
			super().__init__(host, port, context)
			ssl_instances.append(self)

	monkeypatch.setattr(mailer.smtplib, "SMTP_SSL", FakeSSL)
	config = config.model_copy(update={"smtp_secure": True, "smtp_port": 465})
	mailer.send_report("owner@example.com", b"%PDF", "/results/pro.html", config)
	assert len(ssl_instances) == 1
	assert not ssl_instances[0].started_tls
	assert ssl_instances[0].sent


def test_no_login_without_credentials(smtp, config):
	config = config.model_copy(update={"smtp_user": None, "smtp_password": None})
	mailer.send_report("owner@example.com", b"%PDF", "/results/pro.html", config)
	assert smtp.instances[0].logged_in is None


@pytest.mark.parametrize("recipient", [None, "", "   ", "a@b.co\r\nBcc: x@y.z"])
def test_bad_recipient_is_rejected(smtp, config, recipient):
	with pytest.raises(DeliveryError):
		mailer.send_report(recipient, b"%PDF", "/results/pro.html", config)
	assert smtp.instances == []


def test_unconfigured_host(smtp, config):
	with pytest.raises(DeliveryError):
		mailer.send_report("owner@example.com", b"%PDF", "/results/pro.html", config.model_copy(update={"smtp_host": None}))


def test_server_rejection_raises_delivery_error(smtp, config):
	smtp.refuse = True
	with pytest.raises(DeliveryError):
		mailer.send_report("owner@example.com", b"%PDF", "/results/pro.html", config)


def test_recipient_address_stays_out_of_info_logs(smtp, config, caplog):
	with caplog.at_level(logging.INFO, logger=mailer.__name__):
		mailer.send_report("owner@example.com", b"%PDF", "/results/pro.html", config)
	assert caplog.records
	assert all("owner@example.com" not in r.getMessage() for r in caplog.records)


def test_delivery_failure_log_omits_recipient(smtp, config, caplog):
	smtp.refuse = True
	with caplog.at_level(logging.INFO, logger=mailer.__name__), pytest.raises(DeliveryError):
		mailer.send_report("owner@example.com", b"%PDF", "/results/pro.html", config)
	assert any(r.levelno == logging.ERROR for r in caplog.records)
	assert all("owner@example.com" not in r.getMessage() for r in caplog.records)
