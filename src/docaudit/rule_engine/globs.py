"""Translate path globs into anchored regular expressions."""

from __future__ import annotations

import re
from functools import lru_cache


def glob_to_regex(glob: str) -> str:
    """Return the regex source for ``glob``.

    ``?`` matches one non-separator character, ``*`` a run of them, ``**/``
    zero or more whole directory segments and any other ``**`` everything.
    """
    out = ["^"]
    i = 0
    n = len(glob)
    while i < n:
        ch = glob[i]
        if ch == "*":
            if glob.startswith("**", i):
                if glob.startswith("**/", i):
                    out.append("(?:.*/)?")
                    i += 3
                else:
                    out.append(".*")
                    i += 2
                continue
            out.append("[^/]*")
        elif ch == "?":
            out.append("[^/]")
        else:
            out.append(re.escape(ch))
        i += 1
    out.append(r"\Z")
    return "".join(out)


@lru_cache(maxsize=512)
def compile_glob(glob: str) -> re.Pattern[str] | None:
    """Compile ``glob``; None when the translated pattern is not a valid regex."""
    try:
        return re.compile(glob_to_regex(glob))
    except re.error:
        return None


def glob_matches(glob: str, path: str) -> bool:
    pattern = compile_glob(glob)
    return pattern is not None and pattern.match(path) is not None
