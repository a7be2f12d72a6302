"""Check that the package version, pyproject.toml and a release tag agree.

Usage:
    python scripts/check_release.py            # version consistency only
    python scripts/check_release.py --tag v0.1.0
    GITHUB_REF_NAME=v0.1.0 python scripts/check_release.py --tag-from-env
"""

from __future__ import annotations

import argparse
import os
import re
from pathlib import Path

import tomllib

import proclaunch

TAG_RE = re.compile(r"v(\d+\.\d+\.\d+)")


def load_project_version(pyproject_path: Path = Path("pyproject.toml")) -> str:
    pyproject = tomllib.loads(pyproject_path.read_text(encoding="utf-8"))
    project_version = pyproject.get("project", {}).get("version")
    if not isinstance(project_version, str) or not project_version:
        raise SystemExit(f"Could not find project.version in {pyproject_path}")
    return project_version


def check_module_version(project_version: str) -> None:
    if proclaunch.__version__ != project_version:
        raise SystemExit(
            "Version mismatch: pyproject.toml project.version="
            f"{project_version} != proclaunch.__version__={proclaunch.__version__}"
        )


def check_tag(ref_name: str, project_version: str) -> None:
    match = TAG_RE.fullmatch(ref_name)
    if match is None:
        raise SystemExit(f"Invalid release tag {ref_name!r}, expected vX.Y.Z")
    if match.group(1) != project_version:
        raise SystemExit(
            f"Release tag mismatch: tag={ref_name} but project.version={project_version}"
        )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--tag", help="Release tag to validate, e.g. v1.2.3")
    group.add_argument(
        "--tag-from-env",
        action="store_true",
        help="Validate the tag in GITHUB_REF_NAME",
    )
    args = parser.parse_args(argv)

    project_version = load_project_version()
    check_module_version(project_version)

    tag = args.tag
    if args.tag_from_env:
        tag = os.getenv("GITHUB_REF_NAME")
        if not tag:
            raise SystemExit("GITHUB_REF_NAME is not set")
    if tag is not None:
        check_tag(tag, project_version)
        print(f"Release check passed: {tag} matches {project_version}")
    else:
        print(f"Version check passed: {project_version}")


if __name__ == "__main__":
    main()
