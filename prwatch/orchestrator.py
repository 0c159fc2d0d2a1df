import os
from pathlib import Path
from typing import Any, Callable, NamedTuple

import yaml
from prwatch.logging import get_logger
from prwatch.errors import ConfigError
from prwatch.extractors.graphql_github import make_fetcher, read_token
from prwatch.pagination import MAX_PAGE_SIZE, paginate
from prwatch.analyzers import contested_issues, stale_prs
from prwatch.reports.text_report import render_contested_issues, render_stale_prs

log = get_logger()


class Analysis(NamedTuple):
    help: str
    initial_state: Callable[[], Any]
    on_page: Callable
    finalize: Callable
    render: Callable


ANALYSES = {
    "stale-prs": Analysis(
        help="list the open PRs whose closing issues are already all closed.",
        initial_state=stale_prs.initial_state,
        on_page=stale_prs.on_page,
        finalize=stale_prs.finalize,
        render=render_stale_prs,
    ),
    "multiple-prs": Analysis(
        help="list the open issues with multiple open closing PRs.",
        initial_state=contested_issues.initial_state,
        on_page=contested_issues.on_page,
        finalize=contested_issues.finalize,
        render=render_contested_issues,
    ),
}


def _resolve_config_path() -> Path:
    env_path = os.getenv("PRWATCH_CONFIG_PATH")
    if env_path:
        cfg_path = Path(env_path)
        if not cfg_path.exists():
            raise ConfigError(f"PRWATCH_CONFIG_PATH={env_path} does not exist")
        return cfg_path

    base_path = Path(__file__).resolve().with_name("config.yaml")
    env_name = os.getenv("PRWATCH_ENV")
    if env_name:
        candidate = base_path.with_name(f"config.{env_name}.yaml")
        if candidate.exists():
            return candidate
    return base_path


def _load_cfg():
    cfg_path = _resolve_config_path()
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"cannot read configuration {cfg_path}: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ConfigError(f"configuration {cfg_path} must be a mapping")
    log.info(f"loaded configuration from {cfg_path}")
    return cfg, cfg_path


def _page_size(cfg: dict) -> int:
    size = (cfg.get("pagination") or {}).get("page_size", MAX_PAGE_SIZE)
    if not isinstance(size, int) or isinstance(size, bool) or size <= 0:
        raise ConfigError(f"pagination.page_size must be a positive integer, got {size!r}")
    if size > MAX_PAGE_SIZE:
        log.warning("pagination.page_size=%s exceeds the GitHub maximum; using %s", size, MAX_PAGE_SIZE)
        size = MAX_PAGE_SIZE
    return size


def _get_analysis(command: str) -> Analysis:
    try:
        return ANALYSES[command]
    except KeyError:
        raise ConfigError(f"Unknown command: {command}") from None


def run(command: str, owner: str, name: str, max_items: int = 0) -> str:
    """Run one analysis against owner/name and return the rendered report."""
    analysis = _get_analysis(command)
    cfg, _ = _load_cfg()
    github = cfg.get("github") or {}
    page_size = _page_size(cfg)
    token = read_token(github.get("token_env", "GITHUB_TOKEN"))

    log.info(f"=== {command}: {owner}/{name} ===")
    repository, state = paginate(
        make_fetcher(github, token),
        owner,
        name,
        analysis.on_page,
        analysis.initial_state(),
        page_size=page_size,
        max_items=max_items,
    )
    entries = analysis.finalize(state)
    log.info("SUMMARY: %s entries for %s", len(entries), repository.url)
    return analysis.render(repository, entries)
