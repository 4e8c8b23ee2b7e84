"""
Import Grouping Module

Merges recommended ``use`` statements into the smallest set of grouped
statements: duplicates are dropped, imports are grouped by root module
and paths sharing a ``::``-delimited prefix are folded into braces.
"""

from typing import Dict, Iterable, List


def _split_import(statement: str):
    """Split ``use root::path;`` into (root, path); path is empty for a bare root."""
    body = statement.strip()
    if body.startswith("use "):
        body = body[len("use "):]
    body = body.rstrip(";").strip()

    root, sep, path = body.partition("::")
    if not sep:
        return body, ""
    return root, path


def find_common_prefix(paths: List[str]) -> str:
    """
    Find the longest ``::``-delimited prefix shared by all paths.

    The prefix never consumes a whole path, so every path keeps at least
    one segment after the prefix is stripped. Fewer than two paths never
    have a common prefix.

    Args:
        paths: Import paths without the root module (e.g. ``visit::visit_file``)

    Returns:
        The common prefix (e.g. ``visit``) or an empty string
    """
    if len(paths) < 2:
        return ""

    parts = [path.split("::") for path in paths]
    limit = min(len(segments) for segments in parts) - 1

    common = []
    for i in range(limit):
        first = parts[0][i]
        if all(segments[i] == first for segments in parts):
            common.append(first)
        else:
            break

    return "::".join(common)


def group_imports(imports: Iterable[str]) -> List[str]:
    """
    Deduplicate and group import statements by root module.

    Roots are emitted in alphabetical order. Within a root with several
    members the paths are sorted and folded over their common prefix:

        use std::fs::write; use std::io::read;  ->  use std::{fs::write, io::read};
        use syn::visit::visit_file; use syn::visit::visit_expr;
            ->  use syn::visit::{visit_expr, visit_file};

    A bare root imported alongside deeper paths is written as ``self``.

    Args:
        imports: Statements shaped like ``use a::b::c;``

    Returns:
        Grouped statements covering exactly the deduplicated input
    """
    grouped: Dict[str, set] = {}
    for statement in set(imports):
        root, path = _split_import(statement)
        if not root:
            continue
        grouped.setdefault(root, set()).add(path)

    result = []
    for root in sorted(grouped):
        paths = sorted(grouped[root])

        if len(paths) == 1:
            if paths[0]:
                result.append(f"use {root}::{paths[0]};")
            else:
                result.append(f"use {root};")
            continue

        prefix = find_common_prefix(paths)
        if prefix:
            suffixes = [path[len(prefix) + 2:] for path in paths]
            result.append(f"use {root}::{prefix}::{{{', '.join(suffixes)}}};")
        else:
            items = [path or "self" for path in paths]
            result.append(f"use {root}::{{{', '.join(items)}}};")

    return result
