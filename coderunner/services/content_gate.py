"""Pre-execution denylist filter.

This is a plain textual scan of the submitted source. It catches naive use of
filesystem, process, network and reflection facilities, and nothing more:
string concatenation, dynamic imports or alternate APIs get straight past it.
It is not a security boundary and the service does not isolate the programs
it runs.
"""
from __future__ import annotations

import re

from coderunner.core.errors import ContentRejectedError
from coderunner.services.toolchains import Language, resolve_language


_C_FAMILY: tuple[str, ...] = (
    "<sys/types.h>",
    "<sys/socket.h>",
    "<netdb.h>",
    "<arpa/inet.h>",
    "<netinet/in.h>",
    "<unistd.h>",
    "<process.h>",
    "<windows.h>",
    "<winsock2.h>",
    "<ws2tcpip.h>",
)

DENYLISTS: dict[Language, tuple[str, ...]] = {
    Language.PYTHON: (
        "os",
        "sys",
        "subprocess",
        "socket",
        "shutil",
        "ctypes",
        "multiprocessing",
        "threading",
    ),
    Language.JAVASCRIPT: (
        "fs",
        "child_process",
        "os",
        "net",
        "http",
        "https",
        "dgram",
        "dns",
        "tls",
        "repl",
        "vm",
        "worker_threads",
    ),
    Language.GO: ("os", "os/exec", "syscall", "net", "net/http", "unsafe"),
    Language.JAVA: (
        "java.io",
        "java.net",
        "java.lang.reflect",
        "java.lang.Runtime",
        "java.lang.System",
        "java.lang.ProcessBuilder",
        "java.lang.Thread",
    ),
    Language.C: _C_FAMILY,
    Language.CPP: _C_FAMILY,
}


def _token_pattern(token: str) -> re.Pattern[str]:
    # Identifier-like edges must not be glued to other identifier characters,
    # so "os" does not fire on "cost" or "Hello".
    pattern = re.escape(token)
    if re.match(r"\w", token):
        pattern = r"(?<!\w)" + pattern
    if re.search(r"\w$", token):
        pattern = pattern + r"(?!\w)"
    return re.compile(pattern)


_PATTERNS: dict[Language, tuple[tuple[str, re.Pattern[str]], ...]] = {
    language: tuple((token, _token_pattern(token)) for token in tokens)
    for language, tokens in DENYLISTS.items()
}


def find_denied_token(language: str | Language, code: str) -> str | None:
    """Return the first denylisted token present in ``code``, if any."""
    for token, pattern in _PATTERNS[resolve_language(language)]:
        if pattern.search(code):
            return token
    return None


def check_content(language: str | Language, code: str) -> None:
    token = find_denied_token(language, code)
    if token is not None:
        raise ContentRejectedError(token)
