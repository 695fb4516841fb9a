"""Bump version in Cargo.toml [package] and [workspace.package] sections.

Source of truth: the configured manifest (default cli/Cargo.toml). A manifest with
`version.workspace = true` defers to [workspace.package].version in the root Cargo.toml.
Inline bumping walks the repo from project_root for every Cargo.toml (excluding target,
.git, build dirs) and rewrites sections still carrying the old version.
Accepts version = "v0.1.0" or "0.1.0" when reading; always writes "X.Y.Z" (no "v").
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from pathlib import Path

from tooltool_tooling.errors import InvalidInput
from tooltool_tooling.helpers import (
    SEMVER_RE,
    command_output,
    find_cargo_tomls,
    run_command,
)

log = logging.getLogger(__name__)

VERSION_SECTIONS = ("package", "workspace.package")

SKIP_PARTS = frozenset(
    {
        "target",
        ".git",
        ".jj",
        ".venv",
        "venv",
        "__pycache__",
        "node_modules",
        "build",
        "dist",
        "tmp",
    }
)

_VERSION_LINE = re.compile(r'^\s*version\s*=\s*"v?(\d+\.\d+\.\d+(?:-[\w.-]+)?)"')
_WORKSPACE_INHERIT = re.compile(
    r"^\s*version\s*(?:\.\s*workspace\s*=\s*true|=\s*\{\s*workspace\s*=\s*true\s*\})"
)


class BumpLevel(str, Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"

    @classmethod
    def parse(cls, value: str | BumpLevel | None, default: str = "minor") -> BumpLevel:
        """Parse a level name (case-insensitive). None or "" -> default. Unknown -> InvalidInput."""
        if isinstance(value, BumpLevel):
            return value
        raw = (value or default).strip().lower()
        try:
            return cls(raw)
        except ValueError:
            msg = f"Unknown bump level: {value!r}. Use major, minor, or patch."
            raise InvalidInput(msg, step="bump") from None


def _section_version(text: str, sections: tuple[str, ...]) -> tuple[str | None, bool]:
    """Return (version, inherits_workspace) from the first matching section."""
    in_sec = False
    for line in text.splitlines():
        s = line.strip()
        if s.startswith("["):
            in_sec = s.strip("[]").strip() in sections
            continue
        if in_sec:
            m = _VERSION_LINE.match(line)
            if m:
                return m.group(1), False
            if _WORKSPACE_INHERIT.match(line):
                return None, True
    return None, False


def _read_manifest(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, ValueError) as e:
        msg = f"Could not read {path}: {e}"
        raise InvalidInput(msg, step="read-version") from e


def read_manifest_version(project_root: Path, manifest: str | Path) -> str:
    """Read the current version from manifest, following version.workspace = true to the root."""
    path = project_root / manifest
    if not path.is_file():
        msg = f"{path} not found"
        raise InvalidInput(msg, step="read-version")
    version, inherits = _section_version(_read_manifest(path), VERSION_SECTIONS)
    if version:
        return version
    if inherits:
        root_cargo = project_root / "Cargo.toml"
        if root_cargo.is_file():
            version, _ = _section_version(_read_manifest(root_cargo), ("workspace.package",))
            if version:
                return version
        msg = f"{path} inherits version from the workspace but {root_cargo} has no [workspace.package].version"
        raise InvalidInput(msg, step="read-version")
    msg = f"Could not find [package].version in {path}"
    raise InvalidInput(msg, step="read-version")


def next_version(old: str, level: str | BumpLevel | None) -> str:
    """Compute next version. major -> (X+1).0.0, minor -> X.(Y+1).0, patch -> X.Y.(Z+1)."""
    bump = BumpLevel.parse(level)
    old = old.lstrip("v")
    m = SEMVER_RE.match(old)
    if not m:
        msg = f"Invalid version in manifest: {old}"
        raise InvalidInput(msg, step="bump")
    x, y, z = int(m.group(1)), int(m.group(2)), int(m.group(3))
    if m.group(4):
        msg = f"Cannot {bump.value} bump prerelease {old}"
        raise InvalidInput(msg, step="bump")

    if bump is BumpLevel.PATCH:
        z += 1
    elif bump is BumpLevel.MINOR:
        y += 1
        z = 0
    else:
        x += 1
        y = z = 0
    return f"{x}.{y}.{z}"


def _replace_in_file(path: Path, old: str, new: str) -> bool:
    """Replace version in [package] or [workspace.package]. Returns True if changed."""
    text = path.read_text()
    lines = text.splitlines(keepends=True)
    out: list[str] = []
    in_sec = False
    replaced = False
    pat = r'(\s*version\s*=\s*")v?' + re.escape(old) + r'"'
    for line in lines:
        s = line.strip()
        if s.startswith("["):
            in_sec = s.strip("[]").strip() in VERSION_SECTIONS
            out.append(line)
            continue
        if in_sec and re.match(pat, line):
            out.append(re.sub(pat, lambda m: m.group(1) + new + '"', line, count=1))
            replaced = True
            continue
        out.append(line)
    if replaced:
        path.write_text("".join(out))
    return replaced


def _set_workspace_package_version(path: Path, new: str) -> bool:
    """Set [workspace.package].version to new. Returns True only if changed."""
    text = path.read_text()
    lines = text.splitlines(keepends=True)
    out: list[str] = []
    in_sec = False
    changed = False
    for line in lines:
        s = line.strip()
        if s.startswith("["):
            in_sec = s.strip("[]").strip() == "workspace.package"
            out.append(line)
            continue
        if in_sec:
            m = re.match(r'^(\s*version\s*=\s*")([^"]*)(")', line)
            if m:
                if m.group(2) != new:
                    out.append(m.group(1) + new + m.group(3) + line[m.end() :])
                    changed = True
                else:
                    out.append(line)
                continue
        out.append(line)
    if changed:
        path.write_text("".join(out))
    return changed


def bump_inline(project_root: Path, manifest: str | Path, level: str | BumpLevel) -> list[Path]:
    """Rewrite every Cargo.toml section carrying the manifest's version. Returns updated paths (relative)."""
    old = read_manifest_version(project_root, manifest)
    new = next_version(old, level)

    updated: list[Path] = []
    for p in find_cargo_tomls(project_root, exclude=SKIP_PARTS):
        try:
            if _replace_in_file(p, old, new):
                updated.append(p.relative_to(project_root))
        except (OSError, ValueError) as e:
            msg = f"Error updating {p}: {e}"
            raise InvalidInput(msg, step="bump") from e

    # Root [workspace.package] always follows the new version, even if it had drifted.
    root_cargo = project_root / "Cargo.toml"
    if root_cargo.is_file():
        try:
            if _set_workspace_package_version(root_cargo, new):
                rel = root_cargo.relative_to(project_root)
                if rel not in updated:
                    updated.append(rel)
        except (OSError, ValueError) as e:
            msg = f"Error updating root {root_cargo}: {e}"
            raise InvalidInput(msg, step="bump") from e

    if not updated:
        msg = f"No Cargo.toml had [package]/[workspace.package].version = {old!r}"
        raise InvalidInput(msg, step="bump")
    log.info("bumped %s -> %s (%s); updated %d file(s)", old, new, level, len(updated))
    for u in updated:
        log.debug("  %s", u)
    return updated


def bump_with_cargo(project_root: Path, level: str | BumpLevel) -> None:
    """cargo set-version --bump LEVEL (cargo-edit). Non-zero exit -> InvalidInput with cargo's code."""
    bump = BumpLevel.parse(level)
    r = run_command(
        ["cargo", "set-version", "--bump", bump.value],
        cwd=project_root,
        step="bump",
    )
    if r.returncode != 0:
        msg = f"cargo set-version --bump {bump.value} failed: {command_output(r)}"
        raise InvalidInput(msg, step="bump", returncode=r.returncode)


def pkgid_version(project_root: Path, manifest: str | Path) -> str:
    """Version from `cargo pkgid --manifest-path manifest` (text after '@', or after '#')."""
    r = run_command(
        ["cargo", "pkgid", "--manifest-path", str(project_root / manifest)],
        cwd=project_root,
        step="read-version",
    )
    out = (r.stdout or "").strip()
    if r.returncode != 0 or not out:
        msg = f"cargo pkgid failed: {command_output(r)}"
        raise InvalidInput(msg, step="read-version", returncode=r.returncode)
    fragment = out.rsplit("#", 1)[-1]
    version = fragment.rsplit("@", 1)[-1] if "@" in fragment else fragment
    if not SEMVER_RE.match(version):
        msg = f"Unexpected cargo pkgid output: {out}"
        raise InvalidInput(msg, step="read-version")
    return version
