from pathlib import Path

from conforme.adapters.windsurf import (
    WindsurfAdapter,
    build_windsurf_fields,
    parse_windsurf_activation,
)
from conforme.config import (
    ActivationMode,
    HttpTransport,
    NormalizedConfig,
    NormalizedMcpServer,
    NormalizedRule,
    NormalizedSkill,
    StdioTransport,
)

ROOT = Path("/tmp/test")


def _test_config():
    return NormalizedConfig(
        instructions="Be helpful.",
        rules=[
            NormalizedRule("TypeScript", "Use strict mode.", ActivationMode.always()),
            NormalizedRule("API Rules", "Follow REST.", ActivationMode.glob_match(["src/api/**"])),
            NormalizedRule(
                "Smart Rule", "Decide wisely.", ActivationMode.agent_decision("API context")
            ),
            NormalizedRule("Manual Rule", "Only when asked.", ActivationMode.manual()),
        ],
    )


def _find(files, filename):
    return next(item for item in files if item[0].name == filename)


def test_generate_instructions_only():
    files = WindsurfAdapter().generate(ROOT, NormalizedConfig(instructions="Be helpful."))
    assert len(files) == 1
    assert files[0][0].name == "general.md"
    assert ".windsurf/rules/general.md" in files[0][0].as_posix()
    assert "trigger: always_on" in files[0][1]
    assert "Be helpful." in files[0][1]


def test_generate_glob_rule():
    files = WindsurfAdapter().generate(ROOT, _test_config())
    _, content = _find(files, "api-rules.md")
    assert "trigger: glob" in content
    assert "globs: " in content
    assert "src/api/**" in content
    assert "Follow REST." in content


def test_generate_agent_decision_rule():
    files = WindsurfAdapter().generate(ROOT, _test_config())
    _, content = _find(files, "smart-rule.md")
    assert "trigger: model_decision" in content
    assert "description: API context" in content
    assert "Decide wisely." in content


def test_generate_manual_rule():
    files = WindsurfAdapter().generate(ROOT, _test_config())
    _, content = _find(files, "manual-rule.md")
    assert "trigger: manual" in content
    assert "Only when asked." in content


def test_generate_with_skills():
    config = NormalizedConfig(
        skills=[NormalizedSkill("deploy", "Deploy the app", "Run deploy.", ["Bash"])]
    )
    files = WindsurfAdapter().generate(ROOT, config)
    path, content = next(f for f in files if ".windsurf/skills/" in f[0].as_posix())
    assert path.name == "SKILL.md"
    assert "name: deploy" in content
    assert "description: Deploy the app" in content
    assert "allowed-tools" not in content


def test_generate_with_mcp():
    config = NormalizedConfig(
        mcp_servers=[
            NormalizedMcpServer("test-server", StdioTransport("npx", ["-y", "@test/server"]))
        ]
    )
    files = WindsurfAdapter().generate(ROOT, config)
    path, content = _find(files, "mcp.json")
    assert ".windsurf/mcp.json" in path.as_posix()
    assert "mcpServers" in content
    assert "test-server" in content
    assert "npx" in content


def test_generate_http_mcp_uses_server_url_without_type():
    config = NormalizedConfig(
        mcp_servers=[NormalizedMcpServer("remote", HttpTransport("https://mcp.example.com"))]
    )
    _, content = _find(WindsurfAdapter().generate(ROOT, config), "mcp.json")
    assert "serverUrl" in content
    assert "https://mcp.example.com" in content
    assert '"type"' not in content


def test_generate_empty_config():
    assert WindsurfAdapter().generate(ROOT, NormalizedConfig()) == []


def test_capabilities():
    caps = WindsurfAdapter().capabilities()
    assert (caps.activation_modes, caps.skills, caps.agents, caps.mcp) == (True, True, False, True)


def test_managed_directories(tmp_path):
    dirs = WindsurfAdapter().managed_directories(tmp_path)
    assert dirs == [tmp_path / ".windsurf" / "rules", tmp_path / ".windsurf" / "skills"]


def test_detect(tmp_path):
    adapter = WindsurfAdapter()
    assert not adapter.detect(tmp_path)
    (tmp_path / ".windsurfrules").write_text("x")
    assert adapter.detect(tmp_path)


def test_write_then_read_round_trip(tmp_path):
    adapter = WindsurfAdapter()
    adapter.write(tmp_path, _test_config())
    assert adapter.detect(tmp_path)

    read = adapter.read(tmp_path)
    assert read.instructions == "Be helpful."
    by_name = {rule.name: rule for rule in read.rules}
    assert set(by_name) == {"typescript", "api-rules", "smart-rule", "manual-rule"}
    assert by_name["typescript"].activation == ActivationMode.always()
    assert by_name["api-rules"].activation == ActivationMode.glob_match(["src/api/**"])
    assert by_name["api-rules"].content == "Follow REST."
    assert by_name["smart-rule"].activation == ActivationMode.agent_decision("API context")
    assert by_name["manual-rule"].activation == ActivationMode.manual()


def test_read_missing_dir_gives_empty_config(tmp_path):
    config = WindsurfAdapter().read(tmp_path)
    assert config.instructions == ""
    assert config.rules == []


def test_parse_activation_glob_without_patterns_is_always():
    assert parse_windsurf_activation({"trigger": "glob", "globs": " , "}) == ActivationMode.always()


def test_parse_activation_unknown_and_missing_trigger():
    assert parse_windsurf_activation({"trigger": "sometimes"}) == ActivationMode.always()
    assert parse_windsurf_activation({}) == ActivationMode.always()
    assert parse_windsurf_activation({"trigger": 5}) == ActivationMode.always()


def test_parse_activation_glob_splits_patterns():
    fields = {"trigger": "glob", "globs": "**/*.ts, **/*.tsx"}
    assert parse_windsurf_activation(fields) == ActivationMode.glob_match(["**/*.ts", "**/*.tsx"])


def test_build_fields_round_trip_through_parse():
    for activation in (
        ActivationMode.always(),
        ActivationMode.glob_match(["a/**", "b/*.py"]),
        ActivationMode.agent_decision("when reviewing"),
        ActivationMode.manual(),
    ):
        fields = build_windsurf_fields(NormalizedRule("Rule", "body", activation))
        assert parse_windsurf_activation(fields) == activation