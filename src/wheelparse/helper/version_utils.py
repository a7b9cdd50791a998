from __future__ import annotations

from typing import Any, Protocol

from packaging.version import Version

from wheelparse.model.wheel.parse_errors import InvalidVersionError


class VersionGrammar(Protocol):
    """
    Anything that turns a version token into an ordered, comparable value.

    Implementations raise `ValueError` (or a subclass, such as
    `packaging.version.InvalidVersion`) whose message describes why the token
    was rejected.
    """

    def __call__(self, token: str) -> Any:
        ...


def parse_version(token: str, grammar: VersionGrammar = Version) -> Any:
    """
    Parses a version token with the given grammar.

    The default grammar is PEP 440 as implemented by `packaging`. The grammar's
    own diagnostic is carried on the raised error unchanged.

    Args:
        token (str): The version text, e.g. "2.29.0".
        grammar (VersionGrammar, optional): The grammar to parse with. Defaults to
            `packaging.version.Version`.

    Returns:
        Any: The parsed version value (a `Version` for the default grammar).

    Raises:
        InvalidVersionError: If the grammar rejects the token.
    """
    try:
        return grammar(token)
    except ValueError as e:
        raise InvalidVersionError(str(e)) from e
