"""Example specifications shared by the test suite and the CLI tests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from confspec.config.tree import ConfigTree
from confspec.domain.errors import BadValue
from confspec.domain.validated import Valid, Validated
from confspec.schema import (
    Specification,
    VersionedSpecificationRegistry,
    VersionExtractor,
    boolean,
    duration,
    enum,
    integer,
    nested,
    string,
)


@dataclass(frozen=True)
class NetworkHostAndPort:
    host: str
    port: int

    @classmethod
    def from_raw(cls, key: str, type_name: str, raw: str) -> Validated[NetworkHostAndPort]:
        host, sep, port = raw.rpartition(":")
        if not sep or not host.strip() or not port.strip().lstrip("-").isdigit():
            return Validated.invalid(
                BadValue.of(key, type_name, 'Value format is "<host(String)>:<port:(Int)>"')
            )
        if int(port) <= 0:
            return Validated.invalid(
                BadValue.of(key, type_name, "Port value must be greater than zero")
            )
        return Valid(cls(host, int(port)))


@dataclass(frozen=True)
class Addresses:
    principal: NetworkHostAndPort
    admin: NetworkHostAndPort


@dataclass(frozen=True)
class RpcSettings:
    addresses: Addresses
    use_ssl: bool


class AddressesSpec(Specification[Addresses]):
    principal = string().map("NetworkHostAndPort", NetworkHostAndPort.from_raw)
    admin = string().map("NetworkHostAndPort", NetworkHostAndPort.from_raw)

    def parse_valid(self, tree: ConfigTree) -> Addresses:
        return Addresses(self.principal.value_in(tree), self.admin.value_in(tree))


ADDRESSES = AddressesSpec("Addresses")


class RpcSettingsSpec(Specification[RpcSettings]):
    use_ssl = boolean("useSsl")
    addresses = nested(ADDRESSES)

    def parse_valid(self, tree: ConfigTree) -> RpcSettings:
        return RpcSettings(self.addresses.value_in(tree), self.use_ssl.value_in(tree))


RPC_SETTINGS = RpcSettingsSpec("RpcSettings")


# --- Versioned layouts ---


@dataclass(frozen=True)
class Endpoints:
    principal: NetworkHostAndPort
    admin: NetworkHostAndPort


def _address_for(host: str, port: int) -> Validated[NetworkHostAndPort]:
    if not host.strip() or port <= 0:
        return Validated.invalid(
            BadValue.of(
                host or "host",
                "NetworkHostAndPort",
                'Value must be of format "host(String):port(Int > 0)" e.g., "127.0.0.1:8080"',
            )
        )
    return Valid(NetworkHostAndPort(host, port))


class EndpointsV1(Specification[Endpoints]):
    """Flat layout: separate host and port keys."""

    principal_host = string("principalHost")
    principal_port = integer("principalPort").map_raw(int)
    admin_host = string("adminHost")
    admin_port = integer("adminPort").map_raw(int)

    def parse_valid(self, tree: ConfigTree) -> Validated[Endpoints]:
        principal = _address_for(
            self.principal_host.value_in(tree), self.principal_port.value_in(tree)
        )
        admin = _address_for(self.admin_host.value_in(tree), self.admin_port.value_in(tree))
        return Validated.with_result(None, [*principal.errors, *admin.errors]).map(
            lambda _: Endpoints(principal.value, admin.value)
        )


class EndpointsV2(Specification[Endpoints]):
    """Nested layout under ``configuration.value``."""

    addresses = nested(ADDRESSES)

    def parse_valid(self, tree: ConfigTree) -> Endpoints:
        addresses = self.addresses.value_in(tree)
        return Endpoints(addresses.principal, addresses.admin)


VERSION_PATH = "configuration.metadata.version"

ENDPOINTS_V1 = EndpointsV1("Endpoints")
ENDPOINTS_V2 = EndpointsV2("Endpoints", prefix="configuration.value")

ENDPOINTS = VersionedSpecificationRegistry.mapping(
    VersionExtractor.from_key(VERSION_PATH),
    {1: ENDPOINTS_V1, 2: ENDPOINTS_V2},
)


# --- A schema exercising the remaining primitive types ---


class LogLevel(Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"


@dataclass(frozen=True)
class ServerSettings:
    name: str
    level: LogLevel
    timeout: timedelta
    password: str
    tags: list[str] | None


class ServerSettingsSpec(Specification[ServerSettings]):
    name = string()
    level = enum(LogLevel).optional(LogLevel.INFO)
    timeout = duration().optional(timedelta(seconds=30))
    password = string(sensitive=True)
    tags = string().list().optional()

    def parse_valid(self, tree: ConfigTree) -> ServerSettings:
        return ServerSettings(
            name=self.name.value_in(tree),
            level=self.level.value_in(tree),
            timeout=self.timeout.value_in(tree),
            password=self.password.value_in(tree),
            tags=self.tags.value_in(tree),
        )
