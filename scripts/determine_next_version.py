#!/usr/bin/env python
"""Derive the next semantic version of a local checkout from its tags and commits.

Runs the same resolution as the action without touching GitHub:
- prior release = highest stable SemVer tag that is an ancestor of HEAD
- bump MAJOR on +semver:major / BREAKING CHANGE, MINOR on +semver:minor / feat:,
  else PATCH; with no prior release, use --default-release-type from 0.0.0.

Outputs the next version to stdout.
"""
from __future__ import annotations
import argparse, logging

from nextver.config import Settings
from nextver.git import Git
from nextver.pipeline import resolve_next_version


def main() -> int:
    parser = argparse.ArgumentParser(description='Compute the next version from git history.')
    parser.add_argument('--repo', default='.', help='Path of the git checkout.')
    parser.add_argument('--default-release-type', default='patch', choices=['major', 'minor', 'patch'])
    parser.add_argument('--tag-prefix', default='v', help="Tag prefix; 'none' for no prefix.")
    parser.add_argument('--branch', help='Compute a pre-release version labelled with this branch.')
    parser.add_argument('--no-fallback', action='store_true', help='Do not retry the tag search without the prefix.')
    parser.add_argument('--no-prefix', action='store_true', help='Print the version without the tag prefix.')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format='%(message)s')
    settings = Settings(
        default_release_type=args.default_release_type,
        calculate_prerelease_version=bool(args.branch),
        branch_name=args.branch,
        tag_prefix=args.tag_prefix,
        fallback_to_no_prefix_search=not args.no_fallback,
    )
    result = resolve_next_version(Git(args.repo), settings)
    print(result.version.next_tag('' if args.no_prefix else settings.tag_prefix))
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
