import pytest

from conforme.config import (
    ActivationKind,
    ActivationMode,
    HttpTransport,
    NormalizedConfig,
    NormalizedMcpServer,
    NormalizedRule,
    StdioTransport,
    sanitize_name,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("TypeScript Conventions", "typescript-conventions"),
        ("Security Review", "security-review"),
        ("my_rule", "my-rule"),
        ("  spaces  ", "spaces"),
        ("CamelCase", "camelcase"),
    ],
)
def test_sanitize_name(raw, expected):
    assert sanitize_name(raw) == expected


def test_sanitize_name_is_idempotent():
    once = sanitize_name("A -- B__C")
    assert sanitize_name(once) == once
    assert once == "a-b-c"


def test_activation_equality():
    assert ActivationMode.always() == ActivationMode.always()
    assert ActivationMode.glob_match(["a", "b"]) == ActivationMode.glob_match(("a", "b"))
    assert ActivationMode.glob_match(["a"]) != ActivationMode.glob_match(["b"])
    assert ActivationMode.agent_decision("x") != ActivationMode.agent_decision("y")
    assert ActivationMode.manual() != ActivationMode.always()


def test_activation_kinds_and_payload():
    glob = ActivationMode.glob_match(["**/*.ts"])
    assert glob.kind is ActivationKind.GLOB_MATCH
    assert glob.patterns == ("**/*.ts",)
    decision = ActivationMode.agent_decision("Apply for security reviews")
    assert decision.kind is ActivationKind.AGENT_DECISION
    assert decision.description == "Apply for security reviews"
    assert ActivationMode.agent_decision().description == ""


def test_rule_defaults_to_always():
    rule = NormalizedRule(name="r", content="c")
    assert rule.activation == ActivationMode.always()


def test_config_defaults_are_independent():
    first = NormalizedConfig()
    second = NormalizedConfig()
    first.rules.append(NormalizedRule(name="r", content="c"))
    assert second.rules == []
    assert first.instructions == ""


def test_mcp_server_transports():
    stdio = NormalizedMcpServer("fs", StdioTransport("npx", ["-y"]))
    http = NormalizedMcpServer("gh", HttpTransport("https://example.com/mcp"))
    assert stdio.transport.args == ["-y"]
    assert http.transport.headers == {}
    assert stdio.env == {}