"""
Netscape / curl cookie-jar support.

Format reference: https://curl.se/docs/http-cookies.html - one cookie per
line, seven TAB separated fields, ``#`` comments and the special
``#HttpOnly_`` prefix for http-only cookies.
"""

from __future__ import annotations

import asyncio
import enum
import pathlib
from dataclasses import dataclass
from typing import Dict, Iterator, List, Union

from web2pdf.constants import COOKIE_FIELD_COUNT, HTTPONLY_PREFIX
from web2pdf.errors import CookieFileParseError
from web2pdf.logger import log


class SameSite(str, enum.Enum):
    STRICT = "Strict"
    LAX = "Lax"


@dataclass(frozen=True)
class CookieRecord:
    domain: str
    same_site: SameSite
    path: str
    http_only: bool
    expires: float
    name: str
    value: str

    def to_playwright(self) -> Dict[str, Union[str, float, bool]]:
        """Shape accepted by ``BrowserContext.add_cookies``."""
        return {
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path,
            "expires": self.expires,
            "httpOnly": self.http_only,
            "sameSite": self.same_site.value,
        }


def _lines(text: str) -> Iterator[str]:
    """Split on LF only, dropping one trailing CR; a final newline adds no line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    for line in lines:
        yield line[:-1] if line.endswith("\r") else line


def parse_cookie_file(file_contents: str) -> List[CookieRecord]:
    """
    Parse the text of a Netscape cookie jar.

    All-or-nothing: the first malformed line raises
    :class:`CookieFileParseError` and no cookies are returned. A blank line
    counts as malformed (one field instead of seven).

    Column 2 is the "include subdomains" flag in the file format; it is
    mapped onto the SameSite policy (``TRUE`` -> Strict, else Lax).
    """
    cookies: List[CookieRecord] = []
    for raw_line in _lines(file_contents):
        line = raw_line
        http_only = False

        if line.startswith(HTTPONLY_PREFIX):
            line = line[len(HTTPONLY_PREFIX):]
            http_only = True
        elif line.startswith("#"):
            continue

        fields = line.split("\t")
        if len(fields) != COOKIE_FIELD_COUNT:
            msg = f"Error parsing cookie line (Wrong number of arguments): '{line}'"
            log.error(msg)
            raise CookieFileParseError(msg)

        domain, subdomains, path, http_only_flag, expiry, name, value = fields
        try:
            expires = float(expiry)
        except ValueError as exc:
            raise CookieFileParseError(
                f"Error parsing cookie line: '{line}' Could not convert time: '{exc}'"
            ) from exc

        cookie = CookieRecord(
            domain=domain,
            same_site=SameSite.STRICT if subdomains == "TRUE" else SameSite.LAX,
            path=path,
            http_only=http_only or http_only_flag == "TRUE",
            expires=expires,
            name=name,
            value=value,
        )
        log.debug("Parsed cookie line: %r to %r", raw_line, cookie)
        cookies.append(cookie)
    return cookies


async def load_cookie_file(path: Union[str, pathlib.Path]) -> List[CookieRecord]:
    """Read *path* off the event loop and parse it."""
    p = pathlib.Path(path)
    try:
        text = await asyncio.to_thread(p.read_text, encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CookieFileParseError(f"could not read {p}: {exc}") from exc
    return parse_cookie_file(text)
