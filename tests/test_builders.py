from abc import ABC, abstractmethod

import pytest

from bootwire.builders import load_configuration, make_resolver
from bootwire.errors import ConfigurationFileError, TypeNotFoundError
from bootwire.resolver import Resolver


class Transport(ABC):
    @abstractmethod
    def send(self, payload: bytes): ...


class HttpTransport(Transport):
    def __init__(self, host: str, port: int = 80, *headers: str):
        self.host = host
        self.port = port
        self.headers = headers

    def send(self, payload: bytes):
        pass


class SecureTransport(HttpTransport):
    pass


class Client:
    def __init__(self, transport: Transport, retries: int = 1):
        self.transport = transport
        self.retries = retries


@pytest.fixture
def config_file(tmp_path):
    def write(text: str):
        path = tmp_path / "wiring.yaml"
        path.write_text(text)
        return path

    return write


def test_make_resolver_registers_bindings_and_configuration():
    resolver = make_resolver(
        bindings={Transport: HttpTransport},
        configuration={HttpTransport: {"host": "example.com"}, Client: {"retries": 3}},
    )

    client = resolver.instantiate(Client)

    assert isinstance(client.transport, HttpTransport)
    assert (client.transport.host, client.transport.port, client.retries) == ("example.com", 80, 3)


def test_make_resolver_without_arguments():
    assert isinstance(make_resolver(), Resolver)


def test_load_configuration_from_yaml(config_file):
    path = config_file(
        f"""
bindings:
  {__name__}:Transport: {__name__}:SecureTransport
configuration:
  {__name__}:HttpTransport:
    host: example.com
    port: 8443
    headers: [gzip, keep-alive]
  {__name__}:SecureTransport:
    port: 443
"""
    )

    resolver = load_configuration(Resolver(), path)
    transport = resolver.instantiate(Transport)

    assert isinstance(transport, SecureTransport)
    assert (transport.host, transport.port, transport.headers) == (
        "example.com",
        443,
        ("gzip", "keep-alive"),
    )


def test_load_configuration_accepts_empty_file(config_file):
    resolver = load_configuration(Resolver(), config_file(""))

    assert resolver.merged_configuration(Client).to_dict() == {}


def test_load_configuration_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError, match="Config file not found"):
        load_configuration(Resolver(), tmp_path / "missing.yaml")


@pytest.mark.parametrize(
    "text, message",
    [
        ("- just\n- a list\n", "must contain a mapping"),
        ("bindings: [a, b]\n", "Section 'bindings'"),
        (f"configuration:\n  {__name__}:Client: 3\n", "must be a mapping"),
    ],
)
def test_load_configuration_rejects_malformed_documents(config_file, text, message):
    with pytest.raises(ConfigurationFileError, match=message):
        load_configuration(Resolver(), config_file(text))


def test_load_configuration_unknown_class(config_file):
    path = config_file("configuration:\n  no.such.module:Thing:\n    a: 1\n")

    with pytest.raises(TypeNotFoundError):
        load_configuration(Resolver(), path)
