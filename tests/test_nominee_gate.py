import pytest

from virasat.core.errors import InvalidURL, UntrustedDomain
from virasat.modules.nominees.gate import AUDIT_LOG_LIMIT, GateState, NomineeAccessGate, verify_certificate_url

API = "/api/v1/nominees/access-requests"


@pytest.mark.parametrize("url, hostname", [
    ("https://example.gov.in/cert.pdf", "example.gov.in"),
    ("https://EXAMPLE.GOV.IN/cert.pdf", "example.gov.in"),
    ("http://crsorgi.gov.in/certificates?id=42", "crsorgi.gov.in"),
    ("https://mcd.delhi.gov.in/death/123", "mcd.delhi.gov.in"),
    ("  https://example.gov.in/cert.pdf  ", "example.gov.in"),
])
def test_trusted_urls_pass(url, hostname):
    assert verify_certificate_url(url) == hostname


@pytest.mark.parametrize("url", [
    "https://example.com/cert.pdf",
    "https://fake.gov.in.evil.com/cert.pdf",
    "https://evilgov.in/cert.pdf",
    "https://gov.in/cert.pdf",
    "https://example.gov.com/cert.pdf",
    "http://10.0.0.1/cert.pdf",
])
def test_untrusted_domains_rejected(url):
    with pytest.raises(UntrustedDomain):
        verify_certificate_url(url)


@pytest.mark.parametrize("url", ["", "   ", None, "not a url", "ftp://example.gov.in/cert.pdf", "example.gov.in"])
def test_invalid_urls_rejected(url):
    with pytest.raises(InvalidURL):
        verify_certificate_url(url)


def test_gate_returns_to_idle_after_each_submission():
    gate = NomineeAccessGate()

    with pytest.raises(UntrustedDomain):
        gate.submit("https://example.com/cert.pdf")
    assert gate.state == GateState.IDLE
    assert gate.last_outcome == GateState.REJECTED
    assert list(gate.audit_log) == []

    entry = gate.submit("https://example.gov.in/cert.pdf")
    assert gate.state == GateState.IDLE
    assert gate.last_outcome == GateState.GRANTED
    assert entry.hostname == "example.gov.in"
    assert list(gate.audit_log) == [entry]


def test_grant_over_api(client, alice):
    response = client.post(API, json={"certificate_url": "https://example.gov.in/cert.pdf"}, headers=alice["headers"])

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "granted"
    assert body["hostname"] == "example.gov.in"
    assert body["grants_record_access"] is False


def test_rejections_over_api(client, alice):
    untrusted = client.post(API, json={"certificate_url": "https://example.com/cert.pdf"}, headers=alice["headers"])
    invalid = client.post(API, json={"certificate_url": "not a url"}, headers=alice["headers"])

    assert untrusted.status_code == 400
    assert ".gov.in" in untrusted.json()["detail"]
    assert invalid.status_code == 400
    assert "valid URL" in invalid.json()["detail"]
    assert client.get(API, headers=alice["headers"]).json() == []


def test_requests_listed_per_owner_newest_first(client, alice, bob):
    client.post(API, json={"certificate_url": "https://first.gov.in/a.pdf"}, headers=alice["headers"])
    client.post(API, json={"certificate_url": "https://second.gov.in/b.pdf"}, headers=alice["headers"])

    hosts = [entry["hostname"] for entry in client.get(API, headers=alice["headers"]).json()]
    assert hosts == ["second.gov.in", "first.gov.in"]
    assert client.get(API, headers=bob["headers"]).json() == []


def test_grant_does_not_expose_other_users_records(client, alice, bob):
    client.post(
        "/api/v1/records/nominees",
        json={"name": "Priya", "relationship": "Daughter", "percentage": "50"},
        headers=alice["headers"],
    )

    granted = client.post(API, json={"certificate_url": "https://example.gov.in/cert.pdf"}, headers=bob["headers"])

    assert granted.status_code == 200
    assert client.get("/api/v1/records/nominees", headers=bob["headers"]).json() == []


def test_requires_session(client):
    response = client.post(API, json={"certificate_url": "https://example.gov.in/cert.pdf"})
    assert response.status_code == 401


def test_audit_log_keeps_only_newest_entries():
    gate = NomineeAccessGate()
    for n in range(AUDIT_LOG_LIMIT + 5):
        gate.submit(f"https://office{n}.gov.in/cert.pdf")

    assert len(gate.audit_log) == AUDIT_LOG_LIMIT
    assert gate.audit_log[0].hostname == "office5.gov.in"
    assert gate.audit_log[-1].hostname == f"office{AUDIT_LOG_LIMIT + 4}.gov.in"
