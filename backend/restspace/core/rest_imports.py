"""
Request imports

Turns a curl command line into a stored request: the command is parsed into a
normalized description, a request is created through the manager, and the
parsed url/headers/body are applied before saving.
"""

import json
import logging
import shlex
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple, Union

from restspace.core.constants import HttpMethod, to_http_method
from restspace.core.request_entity import RequestEntity
from restspace.utils.exceptions import ValidationException

logger = logging.getLogger(__name__)

_DATA_FLAGS = {"-d", "--data", "--data-raw", "--data-binary", "--data-ascii", "--data-urlencode", "--json"}
_HEADER_FLAGS = {"-H", "--header"}
_METHOD_FLAGS = {"-X", "--request"}
_URL_FLAGS = {"--url"}
# Flags whose value is consumed but not imported
_IGNORED_VALUE_FLAGS = {
    "-u", "--user", "-o", "--output", "-A", "--user-agent", "-e", "--referer",
    "-b", "--cookie", "-m", "--max-time", "--connect-timeout", "-x", "--proxy",
    "-w", "--write-out", "--retry", "--cacert", "--cert", "--key", "-F", "--form",
}


@dataclass
class CurlImport:
    """Normalized description produced from a curl command"""
    method: HttpMethod = HttpMethod.GET
    url: str = ""
    headers: List[Tuple[str, str]] = field(default_factory=list)
    data: Any = None


@dataclass
class ImportSource:
    source: str
    name: str
    method: Optional[HttpMethod] = None
    path: Optional[str] = None


def _split_flag(token: str) -> Tuple[str, Optional[str]]:
    """``--data=x`` -> (``--data``, ``x``); short flags may glue their value (``-XPOST``)."""
    if token.startswith("--") and "=" in token:
        flag, value = token.split("=", 1)
        return flag, value
    if len(token) > 2 and token[0] == "-" and token[1] != "-" and token[:2] in (_DATA_FLAGS | _HEADER_FLAGS | _METHOD_FLAGS):
        return token[:2], token[2:]
    return token, None


def parse_curl(command: str) -> CurlImport:
    """
    Parse a curl command line.

    Method defaults to GET, or POST when a body is given without ``-X``.
    Body text that is valid JSON is decoded into Python data, except a bare
    JSON string, which is kept as raw text.
    """
    try:
        tokens = shlex.split(command.replace("\\\n", " "))
    except ValueError as e:
        raise ValidationException(errors=[str(e)], message="Invalid curl command")

    if not tokens or tokens[0] != "curl":
        raise ValidationException(errors=["command must start with 'curl'"], message="Invalid curl command")

    result = CurlImport()
    explicit_method: Optional[str] = None
    data_parts: List[str] = []
    is_json_flag = False

    i = 1
    while i < len(tokens):
        flag, inline = _split_flag(tokens[i])
        takes_value = flag in _DATA_FLAGS | _HEADER_FLAGS | _METHOD_FLAGS | _URL_FLAGS | _IGNORED_VALUE_FLAGS

        if takes_value and inline is None:
            if i + 1 >= len(tokens):
                raise ValidationException(errors=[f"missing value for {flag}"], message="Invalid curl command")
            value = tokens[i + 1]
            i += 2
        else:
            value = inline
            i += 1

        if flag in _METHOD_FLAGS:
            explicit_method = value.upper()
        elif flag in _HEADER_FLAGS:
            key, _, header_value = value.partition(":")
            if key.strip():
                result.headers.append((key.strip(), header_value.strip()))
        elif flag in _DATA_FLAGS:
            data_parts.append(value)
            is_json_flag = is_json_flag or flag == "--json"
        elif flag in _URL_FLAGS:
            result.url = value
        elif flag == "-I" or flag == "--head":
            explicit_method = explicit_method or HttpMethod.HEAD.value
        elif flag == "-G" or flag == "--get":
            explicit_method = HttpMethod.GET.value
        elif not flag.startswith("-") and not result.url:
            result.url = flag

    if not result.url:
        raise ValidationException(errors=["no URL found"], message="Invalid curl command")

    if data_parts:
        raw = "&".join(data_parts)
        try:
            decoded = json.loads(raw)
        except ValueError:
            decoded = raw
        # A JSON string literal stays as typed, quotes included
        result.data = raw if isinstance(decoded, str) else decoded
        if is_json_flag and not any(k.lower() == "content-type" for k, _ in result.headers):
            result.headers.append(("Content-Type", "application/json"))

    if explicit_method is not None:
        method = to_http_method(explicit_method)
        if method is None:
            raise ValidationException(errors=[f"unsupported method {explicit_method}"], message="Invalid curl command")
        result.method = method
    elif data_parts:
        result.method = HttpMethod.POST

    return result


def body_from_data(data: Any) -> Union[dict, None]:
    """Strings become text bodies, anything else is stored as serialized JSON."""
    if data is None:
        return None
    if isinstance(data, str):
        return {"text": data}
    return {"json": json.dumps(data)}


class RestImports:
    """Imports external request descriptions into a request tree"""

    def __init__(self, rest):
        self.rest = rest

    async def curl(self, source: ImportSource) -> RequestEntity:
        """
        Create and save a request from a curl command.

        The method parsed from the command is used unless ``source.method`` is
        set, in which case the explicit method wins.
        """
        parsed = parse_curl(source.source)
        method = source.method or parsed.method

        entity = await self.rest.create(source.name, method, source.path)

        if parsed.url:
            entity.set_url(parsed.url)
        if parsed.headers:
            entity.set_headers([{"key": k, "value": v} for k, v in parsed.headers])
        body = body_from_data(parsed.data)
        if body is not None:
            entity.set_body(body)

        await entity.save()
        logger.info(f"Imported curl request {source.name!r} ({method.value}) -> {entity.path}")
        return entity
