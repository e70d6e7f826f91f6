"""
Build configuration.

Settings are merged from four layers, lowest precedence first:

1. Built-in defaults (DEFAULTS below)
2. A YAML file, texmake.yaml in the working directory or an explicit path
3. TEXMAKE_<NAME> environment variables, after loading the directory's .env
4. NAME=VALUE overrides given on the command line (like "make RM=: clean")

Example texmake.yaml:

    use_pdflatex: true
    pdflatex: pdflatex -interaction=nonstopmode
    src: thesis.tex
"""

import os
import shlex
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from texmake.exceptions import ConfigurationError

CONFIG_FILE_NAME = "texmake.yaml"
ENV_PREFIX = "TEXMAKE_"

# Settings holding a command line, split with shlex when run
COMMAND_SETTINGS = ("latex", "pdflatex", "dvips", "ps2pdf", "pdf2ps", "rm", "git")

DEFAULTS = {
    "use_pdflatex": "false",
    "src": "",
    "latex": "latex",
    "pdflatex": "pdflatex",
    "dvips": "dvips",
    "ps2pdf": "ps2pdf",
    "pdf2ps": "pdf2ps",
    "rm": "rm -f",
    "git": "git",
    "git_dir": ".git-texmake-backups",
    "git_work_tree": ".",
    "git_author_name": "texmake Save Repository",
    "git_author_email": "texmake@localhost",
}


class OutputFormat(str, Enum):
    """Output formats texmake can produce, valued by file extension."""

    PS = "ps"
    PDF = "pdf"

    def other(self) -> "OutputFormat":
        return OutputFormat.PDF if self is OutputFormat.PS else OutputFormat.PS

    @property
    def suffix(self) -> str:
        return f".{self.value}"


@dataclass
class BuildConfig:
    """
    Resolved configuration for one texmake invocation.

    Attributes:
        workdir: Directory holding the LaTeX sources
        use_pdflatex: PDF is the primary format (pdflatex) instead of PostScript (latex + dvips)
        src: Explicit source names, whitespace separated; empty means auto-detect
        latex, pdflatex, dvips, ps2pdf, pdf2ps: Invocation strings for the external tools
        rm: Removal command; ":" disables deletion entirely
        git, git_dir, git_work_tree, git_author_name, git_author_email: Backup settings
    """

    workdir: Path
    use_pdflatex: bool = False
    src: str = ""
    latex: str = "latex"
    pdflatex: str = "pdflatex"
    dvips: str = "dvips"
    ps2pdf: str = "ps2pdf"
    pdf2ps: str = "pdf2ps"
    rm: str = "rm -f"
    git: str = "git"
    git_dir: str = ".git-texmake-backups"
    git_work_tree: str = "."
    git_author_name: str = "texmake Save Repository"
    git_author_email: str = "texmake@localhost"

    @property
    def primary_format(self) -> OutputFormat:
        return OutputFormat.PDF if self.use_pdflatex else OutputFormat.PS

    @property
    def secondary_format(self) -> OutputFormat:
        return self.primary_format.other()

    @property
    def git_dir_path(self) -> Path:
        return self.workdir / self.git_dir

    @property
    def git_work_tree_path(self) -> Path:
        return self.workdir / self.git_work_tree


def parse_bool(name: str, value: Union[str, bool]) -> bool:
    """
    Accept a real boolean or exactly "true"/"false".

    Raises:
        ConfigurationError: For anything else (e.g. "yes", "1", "True ")
    """
    if isinstance(value, bool):
        return value
    if value == "true":
        return True
    if value == "false":
        return False
    raise ConfigurationError(f'{name.upper()} set to neither "true" nor "false": "{value}"')


def parse_overrides(pairs: Iterable[str]) -> Dict[str, str]:
    """
    Parse NAME=VALUE strings into a dict keyed by lower-cased setting name.

    Values are kept verbatim so that e.g. "RM=:" or "LATEX=latex -shell-escape"
    survive unchanged.
    """
    overrides = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ConfigurationError(f"Override must have the form NAME=VALUE, got: {pair!r}")
        overrides[name.strip().lower()] = value
    return overrides


def _check_keys(layer: Dict, origin: str) -> None:
    unknown = sorted(set(layer) - set(DEFAULTS))
    if unknown:
        raise ConfigurationError(f"Unknown setting(s) in {origin}: {', '.join(unknown)}")


def _yaml_layer(config_file: Path) -> DictConfig:
    try:
        loaded = OmegaConf.load(config_file)
    except (OSError, OmegaConfBaseException) as e:
        raise ConfigurationError(f"Cannot read configuration file {config_file}: {e}") from e
    if not isinstance(loaded, DictConfig):
        raise ConfigurationError(f"Configuration file {config_file} must contain a mapping")
    # Interpolations stay unresolved until all layers are merged
    values = OmegaConf.to_container(loaded, resolve=False)
    _check_keys(values, str(config_file))

    # A list of sources in YAML is the same as a whitespace separated string
    if isinstance(values.get("src"), list):
        values["src"] = " ".join(str(item) for item in values["src"])
    return OmegaConf.create(values)


def _env_layer(workdir: Path) -> DictConfig:
    dotenv_path = workdir / ".env"
    if dotenv_path.exists():
        load_dotenv(dotenv_path)

    values = {}
    for key in DEFAULTS:
        env_value = os.getenv(f"{ENV_PREFIX}{key.upper()}")
        if env_value is not None:
            values[key] = env_value
    return OmegaConf.create(values)


def load_config(
    workdir: Optional[Path] = None,
    config_file: Optional[Path] = None,
    overrides: Iterable[str] = (),
) -> BuildConfig:
    """
    Build the configuration for a working directory.

    Args:
        workdir: Directory holding the sources (default: current directory)
        config_file: Explicit YAML file; must exist when given.
            Without it, texmake.yaml in workdir is used if present.
        overrides: NAME=VALUE strings with the highest precedence

    Returns:
        BuildConfig with every value validated

    Raises:
        ConfigurationError: Unknown setting, unreadable file, invalid boolean
            or a command setting that cannot be split (e.g. unbalanced quotes)
    """
    workdir = Path(workdir or Path.cwd()).resolve()

    layers = [OmegaConf.create(DEFAULTS)]

    if config_file is not None:
        config_file = Path(config_file)
        if not config_file.is_absolute():
            config_file = workdir / config_file
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        layers.append(_yaml_layer(config_file))
    elif (workdir / CONFIG_FILE_NAME).exists():
        layers.append(_yaml_layer(workdir / CONFIG_FILE_NAME))

    layers.append(_env_layer(workdir))

    override_values = parse_overrides(overrides)
    _check_keys(override_values, "command line overrides")
    layers.append(OmegaConf.create(override_values))

    try:
        merged = OmegaConf.to_container(OmegaConf.merge(*layers), resolve=True)
    except OmegaConfBaseException as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    values = {
        key: ("" if value is None else value)
        for key, value in merged.items()
        if key != "use_pdflatex"
    }
    for key, value in values.items():
        if not isinstance(value, str):
            values[key] = str(value)

    for key in COMMAND_SETTINGS:
        try:
            shlex.split(values[key])
        except ValueError as e:
            raise ConfigurationError(f"Invalid {key.upper()} setting: {values[key]!r} ({e})") from e

    return BuildConfig(
        workdir=workdir,
        use_pdflatex=parse_bool("use_pdflatex", merged["use_pdflatex"]),
        **values,
    )


def config_summary(config: BuildConfig) -> List[str]:
    """Return "NAME = value" lines describing the effective configuration."""
    lines = [f"USE_PDFLATEX = {'true' if config.use_pdflatex else 'false'}"]
    for key in DEFAULTS:
        if key == "use_pdflatex":
            continue
        lines.append(f"{key.upper()} = {getattr(config, key)}")
    return lines
