#!/usr/bin/env python3
"""Determinism linting script for ledgermath.

Every arithmetic path in ledgermath must be integer-only so that results are
bit-identical everywhere. This script scans the package for constructs that
introduce floating point:
- float literals (1.5, 1e18)
- true division (/ and /=)
- float() conversions
- the stdlib math module

Usage:
    python scripts/check_determinism.py [--verbose] [paths ...]

Exit codes:
    0 - No issues found
    1 - Issues found (with details printed)
"""

import argparse
import io
import sys
import tokenize
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

# Directories to scan by default
SCAN_DIRS = ["ledgermath"]

# Allowlist: specific files where certain patterns are acceptable
# Format: {file_pattern: [list of allowed pattern names]}
ALLOWLIST: dict[str, list[str]] = {}


@dataclass
class Issue:
    """A detected non-deterministic construct."""

    file: Path
    line_num: int
    line: str
    pattern: str
    severity: str  # CRITICAL, HIGH
    message: str


def is_allowlisted(path: Path, pattern_name: str) -> bool:
    """Check if a pattern is allowlisted for this file."""
    path_str = str(path)
    for file_pattern, allowed in ALLOWLIST.items():
        if file_pattern in path_str and pattern_name in allowed:
            return True
    return False


def _is_float_literal(text: str) -> bool:
    lowered = text.lower().replace("_", "")
    if lowered.startswith(("0x", "0o", "0b")):
        return False
    return "." in lowered or "e" in lowered or lowered.endswith("j")


def check_source(path: Path, source: str) -> Iterator[Issue]:
    """Yield issues for one module's source text.

    Works on tokens, so strings, docstrings and comments never match.
    """
    lines = source.splitlines()
    tokens = list(tokenize.generate_tokens(io.StringIO(source).readline))

    for idx, tok in enumerate(tokens):
        line_num = tok.start[0]
        line = lines[line_num - 1].rstrip() if line_num <= len(lines) else ""

        if tok.type == tokenize.NUMBER and _is_float_literal(tok.string):
            if not is_allowlisted(path, "float_literal"):
                yield Issue(
                    path, line_num, line, "float literal", "CRITICAL",
                    f"Float literal {tok.string} in arithmetic code",
                )

        elif tok.type == tokenize.OP and tok.string in ("/", "/="):
            if not is_allowlisted(path, "true_division"):
                yield Issue(
                    path, line_num, line, "true division", "CRITICAL",
                    "True division produces a float; use // or mul_div_*",
                )

        elif tok.type == tokenize.NAME and tok.string == "float":
            nxt = tokens[idx + 1] if idx + 1 < len(tokens) else None
            if nxt is not None and nxt.string == "(" and not is_allowlisted(path, "float_call"):
                yield Issue(
                    path, line_num, line, "float conversion", "HIGH",
                    "float() conversion in arithmetic code",
                )

        elif tok.type == tokenize.NAME and tok.string in ("import", "from"):
            nxt = tokens[idx + 1] if idx + 1 < len(tokens) else None
            # Only the first token of a statement is an import keyword we care about
            first_on_line = line.lstrip().startswith(tok.string)
            if nxt is not None and nxt.string == "math" and first_on_line:
                if not is_allowlisted(path, "math_module"):
                    yield Issue(
                        path, line_num, line, "math module", "HIGH",
                        "stdlib math works on floats",
                    )


def scan_file(path: Path) -> list[Issue]:
    """Scan a single file for non-deterministic constructs."""
    try:
        source = path.read_text()
    except OSError as e:
        print(f"Warning: Could not read {path}: {e}", file=sys.stderr)
        return []
    return list(check_source(path, source))


def scan_paths(paths: list[Path]) -> list[Issue]:
    """Scan files and directories (recursively) for issues."""
    issues: list[Issue] = []
    for path in paths:
        if path.is_dir():
            for py_file in sorted(path.rglob("*.py")):
                if "__pycache__" in py_file.parts:
                    continue
                issues.extend(scan_file(py_file))
        elif path.suffix == ".py":
            issues.extend(scan_file(path))
    return issues


def print_report(issues: list[Issue], verbose: bool) -> None:
    """Print the audit report."""
    if not issues:
        print("No non-deterministic constructs found")
        return

    print(f"\n{'=' * 70}")
    print("DETERMINISM AUDIT RESULTS")
    print(f"{'=' * 70}")
    for sev in ("CRITICAL", "HIGH"):
        count = sum(1 for i in issues if i.severity == sev)
        if count:
            print(f"  {sev:10} {count:4}")
    print(f"  {'TOTAL':10} {len(issues):4}")
    print(f"{'=' * 70}\n")

    for issue in issues:
        print(f"  {issue.file}:{issue.line_num}")
        print(f"    [{issue.severity}] {issue.pattern}: {issue.message}")
        if verbose:
            print(f"    > {issue.line.strip()[:70]}")
        print()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Determinism linter for ledgermath")
    parser.add_argument("--verbose", "-v", action="store_true")
    parser.add_argument("paths", nargs="*", type=Path)
    args = parser.parse_args(argv)

    base_dir = Path(__file__).parent.parent
    paths = args.paths or [base_dir / d for d in SCAN_DIRS]

    issues = scan_paths(paths)
    print_report(issues, args.verbose)
    return 1 if issues else 0


if __name__ == "__main__":
    sys.exit(main())
