"""
L1 Domain — Package parameters and install arguments (pure).

Turns the free-form package parameter string into key/value overrides,
and the overrides plus the fixed package inputs into the argument set of
the install primitive.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

from installer_updater.core.errors import ConfigurationError
from installer_updater.core.models.installer import FixedInputs, InstallParameters

logger = logging.getLogger(__name__)

BOOTSTRAPPER_PATH_KEY = "bootstrapperPath"


def parse_package_parameters(raw: str | None) -> dict[str, str]:
    """Parse a package parameter string into an ordered mapping.

    Accepted forms::

        --key value    --key=value    --flag
        /key:value     /key=value     /flag

    Flags map to ``""``.  A quoted value may contain spaces, also when
    attached to its key (``/key:"a b"``).  Backslashes are kept as-is
    so Windows paths survive.

    Raises:
        ConfigurationError: On unbalanced quotes, a stray value or an
            empty key.
    """
    if not raw or not raw.strip():
        return {}

    tokens = _tokenize(raw)
    parsed: dict[str, str] = {}
    i = 0
    while i < len(tokens):
        token = tokens[i]
        key, value = _split_token(token)
        if value is None and i + 1 < len(tokens) and not _is_key(tokens[i + 1]):
            value = _unquote(tokens[i + 1][0])
            i += 1
        if key in parsed:
            logger.debug("Package parameter %r given more than once, last wins", key)
        parsed[key] = value if value is not None else ""
        i += 1

    return parsed


def build_install_parameters(
    raw_overrides: Mapping[str, str],
    fixed: FixedInputs,
) -> InstallParameters:
    """Assemble the install primitive arguments.

    ``bootstrapperPath`` is lifted out of the overrides into
    ``installer_file_path``; every other override becomes a
    ``--key value`` token between ``--quiet`` and the trailing
    ``--update``.  The caller's mapping is left untouched.
    """
    overrides = dict(raw_overrides)
    installer_file_path = overrides.pop(BOOTSTRAPPER_PATH_KEY, None)

    silent_args = "--quiet " + render_overrides(overrides) + " --update"
    logger.debug("Bootstrapper silent args: %s", silent_args)

    return InstallParameters(
        package_name=fixed.package_name,
        silent_args=silent_args,
        url=fixed.url,
        checksum=fixed.checksum,
        checksum_type=fixed.checksum_type,
        log_file_path=None,
        is_2017_installer=True,
        installer_file_path=installer_file_path or None,
    )


def render_overrides(overrides: Mapping[str, str]) -> str:
    """Render overrides as ``--key value`` tokens joined by single spaces."""
    tokens = []
    for key, value in overrides.items():
        tokens.append(f"--{key} {value}" if value != "" else f"--{key}")
    return " ".join(tokens)


# Unquoted runs and quoted segments, glued together up to whitespace
_TOKEN_RE = re.compile(r"""(?:[^\s"']+|"[^"]*"|'[^']*')+""")
_QUOTED_RE = re.compile(r""""([^"]*)"|'([^']*)'""")


def _tokenize(raw: str) -> list[tuple[str, bool]]:
    """Split on whitespace, returning ``(text, was_quoted)`` pairs.

    ``was_quoted`` is True only when the whole token is one quoted
    segment; quotes inside a token (``/key:"a b"``) are stripped later.
    """
    tokens = []
    pos = 0
    for match in _TOKEN_RE.finditer(raw):
        if raw[pos:match.start()].strip():
            raise ConfigurationError(f"Malformed package parameters {raw!r}: unbalanced quote")
        text = match.group()
        tokens.append((text, _QUOTED_RE.fullmatch(text) is not None))
        pos = match.end()
    if raw[pos:].strip():
        raise ConfigurationError(f"Malformed package parameters {raw!r}: unbalanced quote")
    return tokens


def _unquote(text: str) -> str:
    return _QUOTED_RE.sub(lambda m: m.group(1) if m.group(1) is not None else m.group(2), text)


def _slash_key(body: str) -> tuple[str, str, str]:
    cut = min((p for p in (body.find(":"), body.find("=")) if p >= 0), default=-1)
    if cut < 0:
        return body, "", ""
    return body[:cut], body[cut], body[cut + 1:]


def _is_key(token: tuple[str, bool]) -> bool:
    text, quoted = token
    if quoted:
        return False
    if text.startswith("--"):
        return True
    # /key or /key:value, but not an absolute path such as /opt/vs.exe
    if text.startswith("/") and len(text) > 1:
        key = _slash_key(text[1:])[0]
        return "/" not in key and "\\" not in key
    return False


def _split_token(token: tuple[str, bool]) -> tuple[str, str | None]:
    text = token[0]
    if not _is_key(token):
        raise ConfigurationError(
            f"Unexpected package parameter {text!r}: expected --key or /key"
        )

    if text.startswith("--"):
        key, sep, value = text[2:].partition("=")
    else:
        key, sep, value = _slash_key(text[1:])

    if not key:
        raise ConfigurationError(f"Empty parameter name in {text!r}")
    return key, (_unquote(value) if sep else None)
