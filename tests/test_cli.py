# Configuration resolution, credential checks and the command line surface
import pytest

from prwatch import cli, orchestrator
from prwatch.errors import ConfigError, FetchError
from prwatch.validators.schema import validate_page


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("PRWATCH_CONFIG_PATH", "PRWATCH_ENV", "GITHUB_TOKEN"):
        monkeypatch.delenv(var, raising=False)


def one_page(prs):
    return validate_page({
        "repository": {
            "description": "",
            "url": "https://github.com/org/repo",
            "pullRequests": {"nodes": prs, "pageInfo": {"endCursor": None, "hasNextPage": False}},
        }
    })


def node(number, closing=(), closed=False):
    return {
        "title": f"T{number}",
        "number": number,
        "closed": closed,
        "url": f"https://github.com/org/repo/issues/{number}",
        "createdAt": "2025-01-01T00:00:00Z",
        "closedAt": None,
        "closingIssuesReferences": {"nodes": list(closing)},
    }


@pytest.fixture
def fake_fetcher(monkeypatch):
    seen = {}

    def make_fetcher(options, token):
        seen["options"] = options
        seen["token"] = token

        def fetch(owner, name, cursor, page_size):
            seen["page_size"] = page_size
            return one_page([node(20, [node(5)]), node(21, [node(5)])])

        return fetch

    monkeypatch.setattr(orchestrator, "make_fetcher", make_fetcher)
    return seen


def test_default_config_is_packaged():
    cfg, cfg_path = orchestrator._load_cfg()
    assert cfg_path.name == "config.yaml"
    assert cfg["github"]["token_env"] == "GITHUB_TOKEN"
    assert cfg["pagination"]["page_size"] == 100


def test_config_path_must_exist(monkeypatch, tmp_path):
    monkeypatch.setenv("PRWATCH_CONFIG_PATH", str(tmp_path / "missing.yaml"))
    with pytest.raises(ConfigError):
        orchestrator._load_cfg()


def test_unknown_env_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("PRWATCH_ENV", "does-not-exist")
    assert orchestrator._resolve_config_path().name == "config.yaml"


@pytest.mark.parametrize("size,expected", [(50, 50), (100, 100), (250, 100)])
def test_page_size_is_clamped(size, expected):
    assert orchestrator._page_size({"pagination": {"page_size": size}}) == expected


@pytest.mark.parametrize("size", [0, -3, "ten", True])
def test_page_size_must_be_positive_int(size):
    with pytest.raises(ConfigError):
        orchestrator._page_size({"pagination": {"page_size": size}})


def test_run_without_token_fails_before_fetching(fake_fetcher):
    with pytest.raises(ConfigError, match="GITHUB_TOKEN"):
        orchestrator.run("stale-prs", "org", "repo")
    assert fake_fetcher == {}


def test_run_unknown_command():
    with pytest.raises(ConfigError):
        orchestrator.run("nope", "org", "repo")


def test_run_uses_custom_config(monkeypatch, tmp_path, fake_fetcher):
    cfg = tmp_path / "custom.yaml"
    cfg.write_text("github:\n  token_env: MY_TOKEN\n  request_timeout: 7\npagination:\n  page_size: 25\n")
    monkeypatch.setenv("PRWATCH_CONFIG_PATH", str(cfg))
    monkeypatch.setenv("MY_TOKEN", "abc")

    report = orchestrator.run("multiple-prs", "org", "repo")

    assert fake_fetcher["token"] == "abc"
    assert fake_fetcher["options"]["request_timeout"] == 7
    assert fake_fetcher["page_size"] == 25
    assert "1. Issue [#5]" in report


def test_cli_prints_report(monkeypatch, capsys, fake_fetcher):
    monkeypatch.setenv("GITHUB_TOKEN", "tok")

    code = cli.main(["multiple-prs", "--owner", "org", "--name", "repo"])

    out = capsys.readouterr().out
    assert code == 0
    assert "List of open issues with multiple open closing PRs." in out
    assert "  - PR [#20](https://github.com/org/repo/issues/20) T20" in out
    assert "  - PR [#21](https://github.com/org/repo/issues/21) T21" in out


def test_cli_stale_prs_passes_max(monkeypatch):
    captured = {}

    def fake_run(command, owner, name, max_items):
        captured.update(command=command, owner=owner, name=name, max_items=max_items)
        return "report"

    monkeypatch.setattr(cli, "run", fake_run)

    assert cli.main(["stale-prs", "--owner", "org", "--name", "repo", "--max", "150"]) == 0
    assert captured == {"command": "stale-prs", "owner": "org", "name": "repo", "max_items": 150}


def test_cli_returns_one_on_failure(monkeypatch, capsys):
    def fake_run(*args):
        raise FetchError("HTTP 401 from api: Bad credentials")

    errors = []
    monkeypatch.setattr(cli, "run", fake_run)
    monkeypatch.setattr(cli.log, "error", lambda msg, *args: errors.append(msg % args))

    assert cli.main(["stale-prs", "--owner", "org", "--name", "repo"]) == 1
    assert errors == ["HTTP 401 from api: Bad credentials"]
    assert "Repo:" not in capsys.readouterr().out


@pytest.mark.parametrize("argv", [
    [],
    ["stale-prs", "--owner", "org"],
    ["multiple-prs", "--owner", "org", "--name", "repo", "--max", "-1"],
    ["multiple-prs", "--owner", "org", "--name", "repo", "--max", "many"],
])
def test_cli_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit) as info:
        cli.main(argv)
    assert info.value.code == 2


def test_cli_version(capsys):
    assert cli.main(["--version"]) == 0
    assert capsys.readouterr().out.startswith("prwatch ")


@pytest.mark.parametrize("value,expected", [("debug", 10), ("WARNING", 30), ("chatty", 20)])
def test_logger_level_from_env(monkeypatch, value, expected):
    from prwatch.logging import get_logger

    monkeypatch.setenv("PRWATCH_LOG_LEVEL", value)
    log = get_logger(f"prwatch.test.level.{value}")
    assert log.level == expected
    assert log.propagate is False
