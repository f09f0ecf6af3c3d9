import pytest

import receiver_config
from receiver_config import ReceiverConfigError, get_receiver_endpoint, get_timeout

ENV_VARS = ("RECEIVER_IP", "RECEIVER_PORT", "receiverIp", "receiverPort",
            "RECEIVER_SSM_PARAMETER", "RECEIVER_TIMEOUT")


class FakeSSM:
    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error
        self.calls = []

    def get_parameter(self, Name, WithDecryption):
        self.calls.append((Name, WithDecryption))
        if self.error:
            raise self.error
        return {"Parameter": {"Value": self.value}}


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_endpoint_from_env(monkeypatch):
    monkeypatch.setenv("RECEIVER_IP", "192.0.2.5")
    monkeypatch.setenv("RECEIVER_PORT", "8080")
    assert get_receiver_endpoint() == ("192.0.2.5", 8080)


def test_legacy_env_names_and_default_port(monkeypatch):
    monkeypatch.setenv("receiverIp", "192.0.2.6")
    assert get_receiver_endpoint() == ("192.0.2.6", 80)


def test_invalid_port(monkeypatch):
    monkeypatch.setenv("RECEIVER_IP", "192.0.2.5")
    monkeypatch.setenv("RECEIVER_PORT", "abc")
    with pytest.raises(ReceiverConfigError):
        get_receiver_endpoint()


def test_endpoint_from_ssm(monkeypatch):
    ssm = FakeSSM("192.0.2.7:8000")
    monkeypatch.setattr(receiver_config, "_ssm", ssm)
    monkeypatch.setenv("RECEIVER_SSM_PARAMETER", "/marantz/receiver")

    assert get_receiver_endpoint() == ("192.0.2.7", 8000)
    assert ssm.calls == [("/marantz/receiver", True)]


def test_ssm_error(monkeypatch):
    monkeypatch.setattr(receiver_config, "_ssm", FakeSSM(error=RuntimeError("ParameterNotFound")))
    monkeypatch.setenv("RECEIVER_SSM_PARAMETER", "/marantz/receiver")
    with pytest.raises(ReceiverConfigError):
        get_receiver_endpoint()


def test_nothing_configured():
    with pytest.raises(ReceiverConfigError):
        get_receiver_endpoint()


def test_timeout(monkeypatch):
    assert get_timeout() == receiver_config.DEFAULT_TIMEOUT
    monkeypatch.setenv("RECEIVER_TIMEOUT", "2.5")
    assert get_timeout() == 2.5
    monkeypatch.setenv("RECEIVER_TIMEOUT", "0")
    with pytest.raises(ReceiverConfigError):
        get_timeout()
