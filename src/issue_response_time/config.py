"""Configuration parsing and validation for the issue response time report."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv

from .errors import AuthenticationError, ConfigurationError
from .models import AnalysisCutoff, RepositoryRef

DEFAULT_REPOSITORIES: Tuple[RepositoryRef, ...] = (
    RepositoryRef("hiero-ledger", "hiero-sdk-go"),
    RepositoryRef("hiero-ledger", "hiero-sdk-Swift"),
    RepositoryRef("hiero-ledger", "hiero-sdk-cpp"),
    RepositoryRef("hiero-ledger", "hiero-sdk-rust"),
    RepositoryRef("hiero-ledger", "hiero-sdk-java"),
    RepositoryRef("hiero-ledger", "hiero-sdk-js"),
    RepositoryRef("hashgraph", "hedera-docs"),
)

DEFAULT_MAINTAINERS: FrozenSet[str] = frozenset(
    {
        "SimiHunjan",
        "ivaylonikolov7",
        "venilinvasilev",
        "andrewb1269hg",
        "0xivanov",
        "rwalworth",
        "naydenovn",
        "nickeynikolovv",
        "gsstoykov",
        "ivaylogarnev-limechain",
        "RickyLB",
        "theekrystallee",
        "Mark-Swirlds",
        "Neurone",
        "Reccetech",
        "kpachhai",
        "deshmukhpranali",
        "AliNik4n",
        "jaycoolh",
        "svienot",
        "rbarker-dev",
        "quiet-node",
        "hendrikebbers",
        "ericleponner",
        "mgarbs",
        "nathanklick",
        "Sheng-Long",
        "ed-marquez",
        "pathornteng",
        "steven-sheehy",
        "Dosik13",
    }
)

# March 2025
DEFAULT_CUTOFF = AnalysisCutoff(year=2025, month_index=2)


@dataclass(frozen=True)
class Config:
    """Validated runtime settings used by the report."""

    token: str
    repositories: Tuple[RepositoryRef, ...]
    maintainers: FrozenSet[str]
    cutoff: AnalysisCutoff
    output_dir: Path
    timeout_seconds: int = 30


def parse_repository(value: Union[str, Dict[str, Any]]) -> RepositoryRef:
    """Parse ``owner/name`` or an ``{owner, name}`` mapping into a ``RepositoryRef``.

    Raises:
        ConfigurationError: If the value does not identify exactly one repository.
    """
    if isinstance(value, dict):
        owner = str(value.get("owner") or "").strip()
        name = str(value.get("name") or value.get("repo") or "").strip()
    elif isinstance(value, str):
        owner, _, name = value.strip().partition("/")
        if "/" in name:
            owner = name = ""
    else:
        owner = name = ""

    if not owner or not name:
        raise ConfigurationError(
            f"Invalid repository {value!r}: expected 'owner/name' or a mapping with 'owner' and 'name'."
        )
    return RepositoryRef(owner=owner, name=name)


def build_cutoff(year: int, month: int) -> AnalysisCutoff:
    """Validate a calendar year/month (month 1-12) and build the analysis cutoff."""
    if not 1 <= month <= 12:
        raise ConfigurationError(f"Invalid cutoff month {month}: expected a value from 1 to 12.")
    if year < 1970:
        raise ConfigurationError(f"Invalid cutoff year {year}.")
    return AnalysisCutoff.from_month(year, month)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Config file {path} is not valid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level.")
    return data


def _as_list(data: Dict[str, Any], key: str) -> Optional[List[Any]]:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list):
        raise ConfigurationError(f"Config key '{key}' must be a list.")
    return value


def _parse_maintainers(values: Iterable[Any]) -> FrozenSet[str]:
    logins = frozenset(str(value).strip() for value in values if str(value).strip())
    if not logins:
        raise ConfigurationError("Config key 'maintainers' must list at least one login.")
    return logins


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    from_year: Optional[int] = None,
    from_month: Optional[int] = None,
    output_dir: Union[str, Path] = ".",
    timeout_seconds: int = 30,
) -> Config:
    """Build and validate application configuration.

    Values come from built-in defaults, then the optional YAML file, then the
    explicit ``from_year``/``from_month`` arguments. The token is read from
    ``GITHUB_TOKEN`` after loading any ``.env`` file.

    Args:
        config_path: Optional YAML file with ``repositories``, ``maintainers``
            and ``cutoff`` keys.
        from_year: Cutoff year override.
        from_month: Cutoff month override (1-12).
        output_dir: Directory receiving the CSV reports.
        timeout_seconds: Per-request timeout for GitHub calls.

    Returns:
        A validated ``Config`` instance.

    Raises:
        ConfigurationError: If any configured value has the wrong shape.
        AuthenticationError: If ``GITHUB_TOKEN`` is not configured.
    """
    repositories = DEFAULT_REPOSITORIES
    maintainers = DEFAULT_MAINTAINERS
    year = DEFAULT_CUTOFF.year
    month = DEFAULT_CUTOFF.month_index + 1

    if config_path is not None:
        data = _load_yaml(Path(config_path))

        repo_values = _as_list(data, "repositories")
        if repo_values is not None:
            repositories = tuple(parse_repository(value) for value in repo_values)

        maintainer_values = _as_list(data, "maintainers")
        if maintainer_values is not None:
            maintainers = _parse_maintainers(maintainer_values)

        cutoff_data = data.get("cutoff")
        if cutoff_data is not None:
            if not isinstance(cutoff_data, dict):
                raise ConfigurationError("Config key 'cutoff' must be a mapping with 'year' and 'month'.")
            try:
                year = int(cutoff_data.get("year", year))
                month = int(cutoff_data.get("month", month))
            except (TypeError, ValueError) as exc:
                raise ConfigurationError("Config 'cutoff' year and month must be integers.") from exc

    if from_year is not None:
        year = from_year
    if from_month is not None:
        month = from_month

    cutoff = build_cutoff(year, month)

    if not repositories:
        raise ConfigurationError("No repositories configured.")
    if timeout_seconds <= 0:
        raise ConfigurationError("Invalid value for 'timeout_seconds': expected an integer greater than 0.")

    load_dotenv()
    token: str = os.getenv("GITHUB_TOKEN", "").strip()
    if not token:
        raise AuthenticationError(
            "Missing required GitHub token. "
            "Set the 'GITHUB_TOKEN' environment variable (or add it to a .env file) before running the report."
        )

    return Config(
        token=token,
        repositories=repositories,
        maintainers=maintainers,
        cutoff=cutoff,
        output_dir=Path(output_dir),
        timeout_seconds=timeout_seconds,
    )
